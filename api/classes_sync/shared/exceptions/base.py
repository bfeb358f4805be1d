"""
Excepción base del servicio de sincronización.
"""
from typing import Any, Dict, Optional


class AppException(Exception):
    """
    Excepción base de la aplicación.
    Todas las excepciones del motor y de los clientes heredan de esta clase,
    así la capa HTTP puede traducirlas sin conocer cada tipo.
    """

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        error_code: str = "INTERNAL_ERROR",
        details: Optional[Dict[str, Any]] = None
    ):
        """
        Args:
            message: Mensaje de error descriptivo (se expone al caller)
            status_code: Código de estado HTTP sugerido
            error_code: Código de error estable para clientes
            details: Detalles adicionales del error
        """
        self.message = message
        self.status_code = status_code
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)

    def to_response(self) -> Dict[str, Any]:
        """Cuerpo JSON estándar para respuestas de error."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }
