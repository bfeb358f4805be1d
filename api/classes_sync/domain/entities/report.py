"""
Resultado de una corrida de reconciliacion.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional

from classes_sync.domain.entities.operations import Operation


def utc_now() -> datetime:
    """Retorna la hora actual en UTC, como datetime aware."""
    return datetime.now(timezone.utc)


class RunState(Enum):
    """
    Estados de una corrida.

    FAILED solo es alcanzable desde los fetch; los errores durante
    EXECUTING quedan en el RunReport.
    """
    IDLE = "idle"
    FETCHING_SOURCE = "fetching_source"
    FETCHING_TARGET = "fetching_target"
    PLANNING = "planning"
    EXECUTING = "executing"
    DONE = "done"
    FAILED = "failed"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class DuplicateReference:
    """Dos items de Webflow apuntan al mismo record. Gana el primero."""

    source_record_id: str
    kept_item_id: str
    ignored_item_id: str

    def to_dict(self) -> Dict[str, str]:
        return {
            "source_record_id": self.source_record_id,
            "kept_item_id": self.kept_item_id,
            "ignored_item_id": self.ignored_item_id,
        }


@dataclass(frozen=True)
class OperationFailure:
    """Operacion que fallo contra el Target, con el motivo."""

    operation: Operation
    reason: str
    status: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "operation": self.operation.to_dict(),
            "reason": self.reason,
            "status": self.status,
        }


@dataclass
class RunReport:
    """
    Conteos de la corrida + detalle de fallas.

    `skipped` solo es distinto de 0 con skip_unchanged activo.
    """

    deleted: int = 0
    updated: int = 0
    created: int = 0
    failed: int = 0
    skipped: int = 0
    failures: List[OperationFailure] = field(default_factory=list)
    duplicates: List[DuplicateReference] = field(default_factory=list)
    ignored_records: List[str] = field(default_factory=list)
    started_at: datetime = field(default_factory=utc_now)
    finished_at: Optional[datetime] = None

    def record_success(self, operation: Operation) -> None:
        if operation.kind == "delete":
            self.deleted += 1
        elif operation.kind == "update":
            self.updated += 1
        else:
            self.created += 1

    def record_failure(self, operation: Operation, reason: str, status: Optional[int] = None) -> None:
        self.failed += 1
        self.failures.append(OperationFailure(operation=operation, reason=reason, status=status))

    def finish(self) -> "RunReport":
        self.finished_at = utc_now()
        return self

    @property
    def duration_s(self) -> Optional[float]:
        if self.finished_at is None:
            return None
        return round((self.finished_at - self.started_at).total_seconds(), 3)

    @property
    def total_applied(self) -> int:
        return self.deleted + self.updated + self.created

    @property
    def has_failures(self) -> bool:
        return self.failed > 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "deleted": self.deleted,
            "updated": self.updated,
            "created": self.created,
            "failed": self.failed,
            "skipped": self.skipped,
            "failures": [f.to_dict() for f in self.failures],
            "duplicates": [d.to_dict() for d in self.duplicates],
            "ignored_records": list(self.ignored_records),
            "started_at": self.started_at.isoformat(),
            "finished_at": self.finished_at.isoformat() if self.finished_at else None,
            "duration_s": self.duration_s,
        }

    def summary(self) -> str:
        return (
            f"deleted={self.deleted}, updated={self.updated}, created={self.created}, "
            f"failed={self.failed}, skipped={self.skipped}"
        )
