"""
Registros de ambos lados de la sincronizacion.

Son snapshots de una sola corrida: se construyen al hacer fetch y el motor
no los modifica.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional


@dataclass(frozen=True)
class SourceRecord:
    """Registro de Airtable: id opaco + fields tal como vienen de la API."""

    id: str
    fields: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_api(cls, payload: Mapping[str, Any]) -> "SourceRecord":
        return cls(id=str(payload.get("id") or ""), fields=dict(payload.get("fields") or {}))

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "fields": dict(self.fields)}


@dataclass(frozen=True)
class TargetItem:
    """
    Item de la coleccion Webflow.

    `field_data` incluye el campo de back-reference (por defecto
    `sourceRecordId`) que apunta al SourceRecord que lo genero.
    """

    id: str
    field_data: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_api(cls, payload: Mapping[str, Any]) -> "TargetItem":
        return cls(
            id=str(payload.get("id") or ""),
            field_data=dict(payload.get("fieldData") or {}),
        )

    def source_record_id(self, id_field: str = "sourceRecordId") -> Optional[str]:
        """Back-reference al record de Airtable, o None si esta vacia."""
        value = self.field_data.get(id_field)
        if value is None:
            return None
        value = str(value).strip()
        return value or None

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "fieldData": dict(self.field_data)}
