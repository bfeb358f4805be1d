"""
Entidades del dominio.
"""
from classes_sync.domain.entities.records import SourceRecord, TargetItem
from classes_sync.domain.entities.operations import (
    CreateOperation,
    DeleteOperation,
    Operation,
    Plan,
    UpdateOperation,
)
from classes_sync.domain.entities.report import (
    DuplicateReference,
    OperationFailure,
    RunReport,
    RunState,
)

__all__ = [
    "SourceRecord",
    "TargetItem",
    "CreateOperation",
    "DeleteOperation",
    "Operation",
    "Plan",
    "UpdateOperation",
    "DuplicateReference",
    "OperationFailure",
    "RunReport",
    "RunState",
]
