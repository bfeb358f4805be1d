"""
Data Transfer Objects (DTOs) para la capa de aplicacion.
"""
from .sync_dto import (
    DuplicateReferenceDTO,
    OperationDTO,
    OperationFailureDTO,
    PlanPreviewDTO,
    RunReportDTO,
    SyncErrorDTO,
    SyncResponseDTO,
)

__all__ = [
    "DuplicateReferenceDTO",
    "OperationDTO",
    "OperationFailureDTO",
    "PlanPreviewDTO",
    "RunReportDTO",
    "SyncErrorDTO",
    "SyncResponseDTO",
]
