"""
Planificador de la reconciliacion.

Algoritmo:
1. Indice de items Webflow por back-reference + set de ids de Airtable.
2. Delete de cada item cuya back-reference no esta en el set (huerfanos).
3. Por cada record, en el orden de Airtable: Update si ya tiene item,
   Create si no. Records sin id se ignoran; con id repetido gana el
   primero (first-wins), igual que con los items duplicados.

Los updates son incondicionales salvo que se active `skip_unchanged`.
"""
from __future__ import annotations

from typing import List, Optional, Sequence

from loguru import logger

from classes_sync.application.services.field_mapper import FieldMapper, fields_fingerprint
from classes_sync.application.services.identity_index import IdentityIndex, unique_records, valid_ids
from classes_sync.domain.entities.operations import (
    CreateOperation,
    DeleteOperation,
    Operation,
    Plan,
    UpdateOperation,
)
from classes_sync.domain.entities.records import SourceRecord, TargetItem


class DiffPlanner:
    """
    Calcula el Plan para llevar Webflow al estado de Airtable.

    Args:
        mapper: FieldMapper a usar; define tambien el campo de back-reference
        skip_unchanged: omitir updates cuyos campos mapeados ya coinciden
    """

    def __init__(self, mapper: Optional[FieldMapper] = None, *, skip_unchanged: bool = False) -> None:
        self.mapper = mapper or FieldMapper()
        self.skip_unchanged = skip_unchanged

    def plan(self, source_records: Sequence[SourceRecord], target_items: Sequence[TargetItem]) -> Plan:
        id_field = self.mapper.id_field
        index = IdentityIndex.build(target_items, id_field=id_field)
        current_ids = valid_ids(source_records)
        records, ignored = unique_records(source_records)

        deletes: List[Operation] = []
        for item in target_items:
            source_id = item.source_record_id(id_field)
            if source_id and source_id not in current_ids:
                deletes.append(DeleteOperation(target_item_id=item.id, source_record_id=source_id))

        writes: List[Operation] = []
        skipped = 0
        for record in records:
            mapped = self.mapper.map(record)
            existing = index.lookup(record.id)

            if existing is None:
                writes.append(CreateOperation(fields=mapped))
                continue

            if self.skip_unchanged and self._is_unchanged(mapped, existing):
                skipped += 1
                continue

            writes.append(UpdateOperation(target_item_id=existing.id, fields=mapped))

        plan = Plan(
            deletes + writes,
            skipped=skipped,
            duplicates=index.duplicates,
            ignored_records=ignored,
        )
        logger.info(
            f"Plan calculado: {plan!r} "
            f"(records={len(source_records)}, items={len(target_items)}, "
            f"duplicados={len(index.duplicates)}, records ignorados={len(ignored)})"
        )
        return plan

    @staticmethod
    def _is_unchanged(mapped: dict, existing: TargetItem) -> bool:
        keys = list(mapped.keys())
        return fields_fingerprint(mapped, keys) == fields_fingerprint(existing.field_data, keys)
