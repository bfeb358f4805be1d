"""
Cliente minimo de Airtable REST API para leer una tabla completa.

No pagina: si Airtable indica que hay mas paginas (`offset`), se levanta
SourceFetchError. Es preferible abortar la corrida a planificar con una
tabla incompleta, que borraria items validos en Webflow.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional
from urllib.parse import quote

import requests

from classes_sync.domain.entities.records import SourceRecord
from classes_sync.domain.repositories.record_clients import ISourceClient
from classes_sync.infrastructure.external.http_client import JsonApiClient
from classes_sync.shared.exceptions.sync import SourceFetchError


@dataclass(frozen=True)
class AirtableCredentials:
    token: str
    base_id: str


class AirtableClient(JsonApiClient, ISourceClient):
    """
    Cliente HTTP de Airtable.

    Importante:
    - No hace cast de tipos de campos: eso lo decide el FieldMapper.
    """

    service_name = "Airtable"
    error_factory = SourceFetchError

    def __init__(
        self,
        credentials: AirtableCredentials,
        *,
        session: Optional[requests.Session] = None,
        base_url: str = "https://api.airtable.com/v0",
        timeout_s: int = 30,
    ) -> None:
        super().__init__(credentials.token, base_url=base_url, session=session, timeout_s=timeout_s)
        self._creds = credentials

    def table_url(self, table_name: str) -> str:
        return f"{self._base_url}/{self._creds.base_id}/{quote(table_name, safe='')}"

    def fetch_records(self, collection_name: str) -> List[SourceRecord]:
        payload = self._request_json("GET", self.table_url(collection_name))

        if payload.get("offset"):
            raise SourceFetchError(
                f"La tabla '{collection_name}' tiene mas de una pagina de records; "
                f"la lectura paginada no esta soportada"
            )

        records: List[SourceRecord] = []
        for rec in payload.get("records") or []:
            if not rec.get("id"):
                # Caso raro; preferimos fallar temprano y visible.
                raise SourceFetchError("Airtable devolvio un record sin 'id'")
            records.append(SourceRecord.from_api(rec))
        return records
