"""
DTOs de la API de sincronizacion.

Contrato del trigger:
- 200 -> {"report": RunReportDTO}
- 409 / 500 -> {"error": "<mensaje>"}
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from classes_sync.domain.entities.operations import Plan
from classes_sync.domain.entities.report import RunReport


class OperationDTO(BaseModel):
    """Operacion del plan serializada."""
    kind: str
    target_item_id: Optional[str] = None
    source_record_id: Optional[str] = None
    fields: Optional[Dict[str, Any]] = None


class OperationFailureDTO(BaseModel):
    operation: OperationDTO
    reason: str
    status: Optional[int] = None


class DuplicateReferenceDTO(BaseModel):
    source_record_id: str
    kept_item_id: str
    ignored_item_id: str


class RunReportDTO(BaseModel):
    """Resultado de una corrida."""
    deleted: int = 0
    updated: int = 0
    created: int = 0
    failed: int = 0
    skipped: int = 0
    failures: List[OperationFailureDTO] = Field(default_factory=list)
    duplicates: List[DuplicateReferenceDTO] = Field(default_factory=list)
    ignored_records: List[str] = Field(default_factory=list)
    started_at: datetime
    finished_at: Optional[datetime] = None
    duration_s: Optional[float] = None

    @classmethod
    def from_report(cls, report: RunReport) -> "RunReportDTO":
        return cls.model_validate(report.to_dict())


class SyncResponseDTO(BaseModel):
    report: RunReportDTO


class SyncErrorDTO(BaseModel):
    error: str


class PlanPreviewDTO(BaseModel):
    """Plan calculado sin ejecutar."""
    plan: List[OperationDTO]
    counts: Dict[str, int]
    skipped: int = 0
    source_count: int
    target_count: int
    duplicates: List[DuplicateReferenceDTO] = Field(default_factory=list)
    ignored_records: List[str] = Field(default_factory=list)

    @classmethod
    def from_plan(cls, plan: Plan, *, source_count: int, target_count: int) -> "PlanPreviewDTO":
        return cls(
            plan=[OperationDTO.model_validate(op) for op in plan.to_list()],
            counts=plan.counts(),
            skipped=plan.skipped,
            source_count=source_count,
            target_count=target_count,
            duplicates=[DuplicateReferenceDTO.model_validate(d.to_dict()) for d in plan.duplicates],
            ignored_records=list(plan.ignored_records),
        )
