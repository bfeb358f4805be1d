"""
Indice record de Airtable -> item de Webflow.

Politica de duplicados: first-wins. Si dos items apuntan al mismo record,
se queda el primero en el orden en que los devolvio Webflow; el resto se
reporta como DuplicateReference y no participa en el plan.
"""
from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Tuple

from loguru import logger

from classes_sync.domain.entities.records import SourceRecord, TargetItem
from classes_sync.domain.entities.report import DuplicateReference


class IdentityIndex:
    """Lookup por back-reference sobre un snapshot de items del Target."""

    def __init__(self, id_field: str = "sourceRecordId") -> None:
        self.id_field = id_field
        self._by_source_id: Dict[str, TargetItem] = {}
        self._duplicates: List[DuplicateReference] = []

    @classmethod
    def build(cls, items: Iterable[TargetItem], id_field: str = "sourceRecordId") -> "IdentityIndex":
        index = cls(id_field=id_field)
        for item in items:
            index._register(item)
        return index

    def _register(self, item: TargetItem) -> None:
        source_id = item.source_record_id(self.id_field)
        if not source_id:
            return

        existing = self._by_source_id.get(source_id)
        if existing is None:
            self._by_source_id[source_id] = item
            return

        duplicate = DuplicateReference(
            source_record_id=source_id,
            kept_item_id=existing.id,
            ignored_item_id=item.id,
        )
        self._duplicates.append(duplicate)
        logger.warning(
            f"Item duplicado para record {source_id}: se conserva {existing.id}, "
            f"se ignora {item.id}"
        )

    def lookup(self, source_record_id: str) -> Optional[TargetItem]:
        return self._by_source_id.get(source_record_id)

    @property
    def duplicates(self) -> List[DuplicateReference]:
        return list(self._duplicates)

    def items(self) -> List[TargetItem]:
        """Items indexados (sin los duplicados ignorados)."""
        return list(self._by_source_id.values())

    def __contains__(self, source_record_id: object) -> bool:
        return source_record_id in self._by_source_id

    def __len__(self) -> int:
        return len(self._by_source_id)


def valid_ids(records: Iterable[SourceRecord]) -> set[str]:
    """Ids de todos los records del fetch actual."""
    return {r.id for r in records if r.id}


def unique_records(records: Iterable[SourceRecord]) -> Tuple[List[SourceRecord], List[str]]:
    """
    Filtra los records que no pueden tener un item propio.

    Returns:
        (records a planificar, ids ignorados). Un record sin id no se puede
        referenciar desde Webflow; un id repetido se queda con el primero.
    """
    kept: List[SourceRecord] = []
    ignored: List[str] = []
    seen: set[str] = set()
    for record in records:
        if not record.id:
            logger.warning(f"Record sin id ignorado: {record.fields.get('Name', '')!r}")
            ignored.append("")
            continue
        if record.id in seen:
            logger.warning(f"Record duplicado {record.id}: se conserva el primero")
            ignored.append(record.id)
            continue
        seen.add(record.id)
        kept.append(record)
    return kept, ignored
