"""
Casos de uso de la aplicacion.
"""
from .sync_use_cases import PlanPreview, ReconciliationOrchestrator

__all__ = ["PlanPreview", "ReconciliationOrchestrator"]
