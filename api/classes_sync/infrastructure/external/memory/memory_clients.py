"""
Stores en memoria que implementan las interfaces de Source y Target.

Solo para tests y uso en el mismo proceso (SOURCE_BACKEND=memory /
TARGET_BACKEND=memory). Arrancan vacios y no hay endpoint para cargarlos:
se cargan desde Python con get_memory_source_client().set_records(...).
El Target permite inyectar fallas por operacion para probar la semantica
de falla parcial.
"""

from __future__ import annotations

import itertools
import threading
from typing import Any, Dict, Iterable, List, Optional, Tuple

from classes_sync.domain.entities.records import SourceRecord, TargetItem
from classes_sync.domain.repositories.record_clients import ISourceClient, ITargetClient
from classes_sync.shared.exceptions.sync import SourceFetchError, TargetOperationError


class InMemorySourceClient(ISourceClient):
    """Tablas de records indexadas por nombre."""

    def __init__(self, tables: Optional[Dict[str, Iterable[SourceRecord]]] = None) -> None:
        self._tables: Dict[str, List[SourceRecord]] = {
            name: list(records) for name, records in (tables or {}).items()
        }
        self.fail_fetch = False

    def set_records(self, collection_name: str, records: Iterable[SourceRecord]) -> None:
        self._tables[collection_name] = list(records)

    def fetch_records(self, collection_name: str) -> List[SourceRecord]:
        if self.fail_fetch:
            raise SourceFetchError(f"Fallo simulado leyendo '{collection_name}'", status=503)
        return list(self._tables.get(collection_name, []))


class InMemoryTargetClient(ITargetClient):
    """
    Coleccion en memoria con ids secuenciales (`item-1`, `item-2`, ...).

    Fallas simuladas:
        fail_on("delete", item_id) / fail_on("update", item_id) /
        fail_on("create", slug)
    """

    def __init__(self, items: Optional[Iterable[TargetItem]] = None) -> None:
        self._items: Dict[str, TargetItem] = {}
        self._ids = itertools.count(1)
        self._lock = threading.Lock()
        self._failures: set[Tuple[str, str]] = set()
        self.fail_fetch = False
        self.calls: List[Tuple[str, str]] = []
        for item in items or []:
            self._items[item.id] = item

    def fail_on(self, kind: str, key: str) -> None:
        self._failures.add((kind, key))

    def _maybe_fail(self, kind: str, key: str) -> None:
        if (kind, key) in self._failures:
            raise TargetOperationError(f"Fallo simulado en {kind} {key}", status=500, body="simulated")

    def _next_id(self) -> str:
        while True:
            candidate = f"item-{next(self._ids)}"
            if candidate not in self._items:
                return candidate

    def fetch_items(self) -> List[TargetItem]:
        if self.fail_fetch:
            raise TargetOperationError("Fallo simulado listando items", status=503)
        with self._lock:
            return list(self._items.values())

    def create_item(self, fields: Dict[str, Any]) -> TargetItem:
        slug = str(fields.get("slug", ""))
        with self._lock:
            self.calls.append(("create", slug))
            self._maybe_fail("create", slug)
            item = TargetItem(id=self._next_id(), field_data=dict(fields))
            self._items[item.id] = item
            return item

    def update_item(self, item_id: str, fields: Dict[str, Any]) -> TargetItem:
        with self._lock:
            self.calls.append(("update", item_id))
            self._maybe_fail("update", item_id)
            if item_id not in self._items:
                raise TargetOperationError(f"Item {item_id} no existe", status=404)
            item = TargetItem(id=item_id, field_data=dict(fields))
            self._items[item_id] = item
            return item

    def delete_item(self, item_id: str) -> None:
        with self._lock:
            self.calls.append(("delete", item_id))
            self._maybe_fail("delete", item_id)
            if self._items.pop(item_id, None) is None:
                raise TargetOperationError(f"Item {item_id} no existe", status=404)

    @property
    def items(self) -> List[TargetItem]:
        with self._lock:
            return list(self._items.values())
