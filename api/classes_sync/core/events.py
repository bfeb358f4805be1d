"""
Manejadores de eventos de inicio y cierre de la aplicacion.
"""
from typing import Callable, List

from fastapi import FastAPI
from loguru import logger

from classes_sync.core.config import settings


def startup_handler(app: FastAPI) -> Callable:
    """
    Manejador de eventos de inicio de la aplicacion.

    Args:
        app: Instancia de FastAPI

    Returns:
        Callable: Funcion asincrona de inicio
    """
    async def startup() -> None:
        """Inicializa logging y valida configuracion."""
        try:
            logger.info(f"Iniciando {settings.APP_NAME} v{settings.APP_VERSION}")
            logger.info(f"Entorno: {settings.ENVIRONMENT}")

            # Validar configuracion critica
            for warning in collect_config_warnings():
                logger.warning(f"CONFIG: {warning}")

            # Configurar logging a archivo
            if settings.LOG_FILE:
                logger.add(
                    settings.LOG_FILE,
                    rotation="500 MB",
                    retention="10 days",
                    level=settings.LOG_LEVEL
                )

            logger.info(
                f"Sync: {settings.SOURCE_BACKEND} '{settings.AIRTABLE_TABLE_NAME}' -> "
                f"{settings.TARGET_BACKEND} (concurrencia={settings.SYNC_MAX_CONCURRENCY}, "
                f"skip_unchanged={settings.SYNC_SKIP_UNCHANGED})"
            )
            logger.success("Aplicacion iniciada correctamente")

        except Exception as e:
            logger.error(f"Error durante startup: {e}")
            logger.exception("Detalle del error:")
            raise

    return startup


def collect_config_warnings() -> List[str]:
    """Revisa que la configuracion critica este presente."""
    warnings = []

    if settings.SOURCE_BACKEND == "airtable":
        if not settings.AIRTABLE_TOKEN:
            warnings.append("AIRTABLE_TOKEN no configurada - /sync fallara")
        if not settings.AIRTABLE_BASE_ID:
            warnings.append("AIRTABLE_BASE_ID no configurada - /sync fallara")

    if settings.TARGET_BACKEND == "webflow":
        if not settings.WEBFLOW_TOKEN:
            warnings.append("WEBFLOW_TOKEN no configurada - /sync fallara")
        if not settings.WEBFLOW_COLLECTION_ID:
            warnings.append("WEBFLOW_COLLECTION_ID no configurada - /sync fallara")

    for name, backend in (("SOURCE_BACKEND", settings.SOURCE_BACKEND), ("TARGET_BACKEND", settings.TARGET_BACKEND)):
        if backend.strip().lower() == "memory":
            warnings.append(f"{name}=memory: store vacio, solo para tests")

    return warnings


def shutdown_handler(app: FastAPI) -> Callable:
    """
    Manejador de eventos de cierre de la aplicacion.

    Args:
        app: Instancia de FastAPI

    Returns:
        Callable: Funcion asincrona de cierre
    """
    async def shutdown() -> None:
        logger.info("Cerrando aplicacion...")
        await logger.complete()
        logger.success("Aplicacion cerrada correctamente")

    return shutdown
