"""
Cliente de la Webflow CMS API v2 para una coleccion.

Endpoints usados:
- GET    /collections/{collection_id}/items
- POST   /collections/{collection_id}/items
- PATCH  /collections/{collection_id}/items/{item_id}
- DELETE /collections/{collection_id}/items/{item_id}
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import requests

from classes_sync.domain.entities.records import TargetItem
from classes_sync.domain.repositories.record_clients import ITargetClient
from classes_sync.infrastructure.external.http_client import JsonApiClient
from classes_sync.shared.exceptions.sync import TargetOperationError


@dataclass(frozen=True)
class WebflowCredentials:
    token: str
    collection_id: str


class WebflowClient(JsonApiClient, ITargetClient):
    """
    Cliente HTTP de una coleccion Webflow.

    Los items se crean publicados (isDraft=False), igual que los crea el
    sitio a mano.
    """

    service_name = "Webflow"
    error_factory = TargetOperationError

    def __init__(
        self,
        credentials: WebflowCredentials,
        *,
        session: Optional[requests.Session] = None,
        base_url: str = "https://api.webflow.com/v2",
        timeout_s: int = 30,
    ) -> None:
        super().__init__(credentials.token, base_url=base_url, session=session, timeout_s=timeout_s)
        self._creds = credentials

    @property
    def items_url(self) -> str:
        return f"{self._base_url}/collections/{self._creds.collection_id}/items"

    def item_url(self, item_id: str) -> str:
        return f"{self.items_url}/{item_id}"

    def fetch_items(self) -> List[TargetItem]:
        payload = self._request_json("GET", self.items_url)
        items = [TargetItem.from_api(i) for i in payload.get("items") or []]

        # Sin paginacion: si la coleccion no entro completa, no seguimos.
        total = (payload.get("pagination") or {}).get("total")
        if total is not None and int(total) > len(items):
            raise TargetOperationError(
                f"La coleccion tiene {total} items y solo se recibieron {len(items)}; "
                f"la lectura paginada no esta soportada"
            )
        return items

    def create_item(self, fields: Dict[str, Any]) -> TargetItem:
        body = {"isArchived": False, "isDraft": False, "fieldData": dict(fields)}
        payload = self._request_json("POST", self.items_url, json=body)
        return TargetItem.from_api(payload)

    def update_item(self, item_id: str, fields: Dict[str, Any]) -> TargetItem:
        payload = self._request_json("PATCH", self.item_url(item_id), json={"fieldData": dict(fields)})
        return TargetItem.from_api(payload)

    def delete_item(self, item_id: str) -> None:
        self._request_json("DELETE", self.item_url(item_id))
