"""
Excepciones compartidas.
"""
from classes_sync.shared.exceptions.base import AppException
from classes_sync.shared.exceptions.sync import (
    FetchError,
    MappingError,
    PlanOrderingError,
    SourceFetchError,
    SyncAlreadyRunningError,
    SyncCancelledError,
    SyncConfigError,
    TargetFetchError,
    TargetOperationError,
)

__all__ = [
    "AppException",
    "FetchError",
    "MappingError",
    "PlanOrderingError",
    "SourceFetchError",
    "SyncAlreadyRunningError",
    "SyncCancelledError",
    "SyncConfigError",
    "TargetFetchError",
    "TargetOperationError",
]
