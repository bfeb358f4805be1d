"""
Servicios del motor de reconciliacion: mapeo, indice, plan y ejecucion.
"""
from .field_mapper import FieldMapper, slugify
from .identity_index import IdentityIndex, unique_records, valid_ids
from .diff_planner import DiffPlanner
from .plan_executor import PlanExecutor

__all__ = ["FieldMapper", "slugify", "IdentityIndex", "unique_records", "valid_ids", "DiffPlanner", "PlanExecutor"]
