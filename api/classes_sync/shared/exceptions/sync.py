"""
Excepciones del motor de reconciliación Airtable -> Webflow.

Taxonomía:
- FetchError: no se pudo leer Source o Target. Aborta la corrida.
- TargetOperationError: falló un create/update/delete puntual. Se registra
  en el RunReport y la corrida continúa.
- MappingError: el mapper es total; si aparece, es un bug y aborta.
"""
from typing import Any, Optional

from classes_sync.shared.exceptions.base import AppException


def _truncate_body(body: Any, limit: int = 2000) -> Optional[str]:
    if body is None:
        return None
    text = str(body)
    return text if len(text) <= limit else text[:limit] + "..."


class SyncConfigError(AppException):
    """Error de configuración del pipeline (credenciales, backend desconocido)."""

    def __init__(self, message: str):
        super().__init__(message=message, status_code=500, error_code="SYNC_CONFIG_ERROR")


class FetchError(AppException):
    """Error leyendo registros de Source o Target. Fatal para la corrida."""

    side = "unknown"

    def __init__(self, message: str, status: Optional[int] = None, body: Any = None):
        self.status = status
        self.body = _truncate_body(body)
        super().__init__(
            message=message,
            status_code=500,
            error_code="FETCH_ERROR",
            details={"side": self.side, "status": status},
        )


class SourceFetchError(FetchError):
    """Source (Airtable) no respondió 2xx o no fue alcanzable."""

    side = "source"


class TargetFetchError(FetchError):
    """Target (Webflow) no pudo listar sus items."""

    side = "target"


class TargetOperationError(AppException):
    """Falla de una llamada puntual al Target (list/create/update/delete)."""

    def __init__(self, message: str, status: Optional[int] = None, body: Any = None):
        self.status = status
        self.body = _truncate_body(body)
        super().__init__(
            message=message,
            status_code=502,
            error_code="TARGET_OPERATION_ERROR",
            details={"status": status},
        )


class MappingError(AppException):
    """El mapeo de un registro falló. No debería ocurrir nunca."""

    def __init__(self, record_id: str, reason: str):
        self.record_id = record_id
        super().__init__(
            message=f"No se pudo mapear el registro {record_id}: {reason}",
            error_code="MAPPING_ERROR",
            details={"record_id": record_id},
        )


class PlanOrderingError(AppException):
    """Un Plan con un delete después de un update/create."""

    def __init__(self, index: int):
        super().__init__(
            message=f"Plan inválido: delete en la posición {index} después de escrituras",
            error_code="PLAN_ORDERING_ERROR",
            details={"index": index},
        )


class SyncAlreadyRunningError(AppException):
    """Ya hay una reconciliación en curso en este proceso."""

    def __init__(self):
        super().__init__(
            message="Ya hay una sincronización en curso",
            status_code=409,
            error_code="SYNC_ALREADY_RUNNING",
        )


class SyncCancelledError(AppException):
    """La corrida se canceló antes de empezar a ejecutar el plan."""

    def __init__(self, state: str):
        super().__init__(
            message=f"Sincronización cancelada durante {state}",
            status_code=499,
            error_code="SYNC_CANCELLED",
            details={"state": state},
        )
