"""
Mapeo de records de Airtable al esquema de la coleccion Webflow.

Funciones puras, sin I/O. El mapper es total: un campo faltante en
Airtable produce un valor vacio del tipo esperado, nunca un error.
"""
from __future__ import annotations

import hashlib
import json
import re
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, Mapping, Optional, Sequence

from classes_sync.domain.entities.records import SourceRecord
from classes_sync.shared.exceptions.sync import MappingError

Transform = Callable[[Any], Any]

_NON_ALNUM = re.compile(r"[^a-z0-9]+")


def slugify(text: Any) -> str:
    """
    Slug para Webflow: minusculas, cada corrida de caracteres no
    alfanumericos se colapsa a un '-', sin '-' al inicio ni al final.

    >>> slugify("Intro to Welding!!")
    'intro-to-welding'
    """
    if text is None:
        return ""
    return _NON_ALNUM.sub("-", str(text).lower()).strip("-")


def as_text(value: Any) -> Any:
    """Campo de texto: vacio si falta o es falsy."""
    return value if value else ""


def as_numeric_string(value: Any) -> str:
    """
    Numero como string, como lo espera la coleccion Webflow.
    Falta o cero -> "0". Los float enteros se renderizan sin ".0".
    """
    if not value:
        return "0"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


@dataclass(frozen=True)
class FieldMapping:
    """
    Define el mapeo de un campo Airtable a un campo Webflow.

    - source_field: nombre del field en Airtable
    - target_field: slug del campo en la coleccion Webflow
    - transform: normaliza el valor (y decide el default si falta)
    """

    source_field: str
    target_field: str
    transform: Transform = as_text


# Tabla de la coleccion de clases ("Biaw Classes")
CLASS_FIELD_MAPPINGS: tuple[FieldMapping, ...] = (
    FieldMapping("Name", "name"),
    FieldMapping("Description", "description"),
    FieldMapping("Date", "date"),
    FieldMapping("End Time", "end-time"),
    FieldMapping("Number of seats", "number-of-seats", as_numeric_string),
    FieldMapping("Price - Member", "price-member", as_numeric_string),
)


class FieldMapper:
    """
    Traduce un SourceRecord a los campos del Target.

    Siempre agrega `slug` (derivado de Name) y el campo de back-reference
    con el id del record.
    """

    def __init__(
        self,
        mappings: Sequence[FieldMapping] = CLASS_FIELD_MAPPINGS,
        *,
        id_field: str = "sourceRecordId",
        slug_source_field: str = "Name",
    ) -> None:
        self._mappings = tuple(mappings)
        self.id_field = id_field
        self._slug_source_field = slug_source_field

    @property
    def target_fields(self) -> list[str]:
        """Campos Webflow que produce este mapper (incluye slug y back-reference)."""
        return [m.target_field for m in self._mappings] + ["slug", self.id_field]

    def map(self, record: SourceRecord) -> Dict[str, Any]:
        fields = record.fields or {}
        mapped: Dict[str, Any] = {}
        try:
            for m in self._mappings:
                mapped[m.target_field] = m.transform(fields.get(m.source_field))
            mapped["slug"] = slugify(fields.get(self._slug_source_field) or "")
        except Exception as e:
            # Los transforms son totales; si algo falla aca es un bug.
            raise MappingError(record.id, str(e)) from e

        mapped[self.id_field] = record.id
        return mapped

    def map_all(self, records: Iterable[SourceRecord]) -> list[Dict[str, Any]]:
        return [self.map(r) for r in records]


def fields_fingerprint(fields: Mapping[str, Any], keys: Optional[Iterable[str]] = None) -> str:
    """
    Hash estable de un set de campos (JSON ordenado).

    Si se pasan `keys`, solo se consideran esas llaves; las que faltan
    cuentan como None.
    """
    if keys is not None:
        fields = {k: fields.get(k) for k in keys}
    raw = json.dumps(dict(fields), sort_keys=True, default=str, separators=(",", ":"))
    return hashlib.sha256(raw.encode("utf-8")).hexdigest()
