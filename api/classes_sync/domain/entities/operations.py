"""
Operaciones de reconciliacion y el Plan que las ordena.

Invariante del Plan: todos los Delete van antes que cualquier Update/Create.
Borrar primero evita que un item viejo y su reemplazo convivan con el
mismo slug mientras se ejecuta la corrida.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Sequence, Tuple, Union

from classes_sync.shared.exceptions.sync import PlanOrderingError


@dataclass(frozen=True)
class DeleteOperation:
    """Borra un item huerfano de Webflow."""

    target_item_id: str
    source_record_id: str = ""

    kind = "delete"

    def describe(self) -> str:
        return f"delete item={self.target_item_id} (record={self.source_record_id or '-'})"

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": self.kind, "target_item_id": self.target_item_id, "source_record_id": self.source_record_id}


@dataclass(frozen=True)
class UpdateOperation:
    """Reenvia el set completo de campos mapeados a un item existente."""

    target_item_id: str
    fields: Dict[str, Any] = field(default_factory=dict)

    kind = "update"

    def describe(self) -> str:
        return f"update item={self.target_item_id} name='{self.fields.get('name', '')}'"

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": self.kind, "target_item_id": self.target_item_id, "fields": dict(self.fields)}


@dataclass(frozen=True)
class CreateOperation:
    """Crea un item nuevo para un record sin contraparte en Webflow."""

    fields: Dict[str, Any] = field(default_factory=dict)

    kind = "create"

    def describe(self) -> str:
        return f"create name='{self.fields.get('name', '')}' slug='{self.fields.get('slug', '')}'"

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": self.kind, "fields": dict(self.fields)}


Operation = Union[DeleteOperation, UpdateOperation, CreateOperation]


class Plan:
    """
    Secuencia ordenada e inmutable de operaciones.

    Se valida al construir: un delete despues de una escritura levanta
    PlanOrderingError.
    """

    def __init__(
        self,
        operations: Sequence[Operation] = (),
        *,
        skipped: int = 0,
        duplicates: Sequence[Any] = (),
        ignored_records: Sequence[str] = (),
    ):
        self._operations: Tuple[Operation, ...] = tuple(operations)
        self.skipped = skipped
        # DuplicateReference detectadas al indexar el Target
        self.duplicates = list(duplicates)
        # Records de Airtable sin id o con id repetido; no generan operaciones
        self.ignored_records = list(ignored_records)
        self._validate_order()

    def _validate_order(self) -> None:
        seen_write = False
        for index, op in enumerate(self._operations):
            if op.kind == "delete":
                if seen_write:
                    raise PlanOrderingError(index)
            else:
                seen_write = True

    @property
    def operations(self) -> Tuple[Operation, ...]:
        return self._operations

    @property
    def deletes(self) -> List[DeleteOperation]:
        return [op for op in self._operations if op.kind == "delete"]

    @property
    def writes(self) -> List[Operation]:
        """Updates y creates, en el orden del plan."""
        return [op for op in self._operations if op.kind != "delete"]

    def counts(self) -> Dict[str, int]:
        result = {"delete": 0, "update": 0, "create": 0}
        for op in self._operations:
            result[op.kind] += 1
        return result

    def is_empty(self) -> bool:
        return not self._operations

    def to_list(self) -> List[Dict[str, Any]]:
        return [op.to_dict() for op in self._operations]

    def __iter__(self) -> Iterator[Operation]:
        return iter(self._operations)

    def __len__(self) -> int:
        return len(self._operations)

    def __getitem__(self, index: int) -> Operation:
        return self._operations[index]

    def __repr__(self) -> str:
        c = self.counts()
        return f"Plan(delete={c['delete']}, update={c['update']}, create={c['create']}, skipped={self.skipped})"
