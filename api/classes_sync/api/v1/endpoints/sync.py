"""
Endpoints para sincronizacion Airtable -> Webflow.

- POST /sync: corre una reconciliacion completa
- GET  /sync/plan: calcula el plan sin ejecutarlo
- GET  /sync/source/{table}: records crudos de Airtable
- GET  /sync/target/items: items crudos de Webflow
"""
import asyncio
from typing import Any, Dict, List

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from loguru import logger

from classes_sync.api.v1.dependencies.use_case_deps import (
    OrchestratorFactory,
    SourceClientFactory,
    TargetClientFactory,
    get_orchestrator_factory,
    get_source_client_factory,
    get_target_client_factory,
)
from classes_sync.application.dto.sync_dto import (
    PlanPreviewDTO,
    RunReportDTO,
    SyncErrorDTO,
    SyncResponseDTO,
)
from classes_sync.domain.entities.report import RunReport
from classes_sync.infrastructure.sync_lock import SyncRunGuard
from classes_sync.shared.exceptions.base import AppException
from classes_sync.shared.exceptions.sync import SyncAlreadyRunningError


router = APIRouter(prefix="/sync", tags=["Sync"])

_ERROR_RESPONSES: Dict[int, Dict[str, Any]] = {
    409: {"model": SyncErrorDTO, "description": "Ya hay una sincronizacion en curso"},
    500: {"model": SyncErrorDTO, "description": "La sincronizacion se aborto"},
}


def _error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def _handle_failure(exc: Exception, action: str) -> JSONResponse:
    """Traduce excepciones a {"error": mensaje} sin exponer trazas."""
    if isinstance(exc, SyncAlreadyRunningError):
        return _error_response(status.HTTP_409_CONFLICT, exc.message)
    if isinstance(exc, AppException):
        logger.error(f"Error en {action}: {exc.message}")
        return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, exc.message)
    logger.exception(f"Error inesperado en {action}")
    return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, f"Fallo {action}")


def _run_guarded(factory: OrchestratorFactory) -> RunReport:
    """
    Ejecuta una corrida con el guard tomado.
    Esta funcion es sincrona y se ejecuta en un thread separado.
    """
    orchestrator = factory()
    with SyncRunGuard.hold(orchestrator.config.source_collection):
        return orchestrator.run()


@router.post(
    "",
    response_model=SyncResponseDTO,
    status_code=status.HTTP_200_OK,
    responses=_ERROR_RESPONSES,
    summary="Sincronizar Airtable con Webflow",
)
async def run_sync(factory: OrchestratorFactory = Depends(get_orchestrator_factory)):
    """
    Ejecuta la reconciliacion Airtable -> Webflow.

    - Borra items de Webflow cuyo record ya no existe en Airtable
    - Actualiza los items existentes y crea los que faltan
    - Las fallas de operaciones individuales vienen en `report.failures`

    Returns:
        {"report": RunReport} o {"error": mensaje}
    """
    logger.info("Iniciando sincronizacion Airtable -> Webflow desde API")
    try:
        # Ejecutar sync en thread separado para no bloquear el event loop
        report = await asyncio.to_thread(_run_guarded, factory)
    except Exception as e:
        return _handle_failure(e, "la sincronizacion")

    return SyncResponseDTO(report=RunReportDTO.from_report(report))


@router.get(
    "/plan",
    response_model=PlanPreviewDTO,
    responses={500: _ERROR_RESPONSES[500]},
    summary="Calcular el plan sin aplicarlo",
)
async def preview_plan(factory: OrchestratorFactory = Depends(get_orchestrator_factory)):
    """Dry run: lee ambos lados y devuelve las operaciones que se aplicarian."""
    try:
        preview = await asyncio.to_thread(lambda: factory().plan_only())
    except Exception as e:
        return _handle_failure(e, "el calculo del plan")

    return PlanPreviewDTO.from_plan(
        preview.plan,
        source_count=preview.source_count,
        target_count=preview.target_count,
    )


@router.get(
    "/source/{table}",
    response_model=List[Dict[str, Any]],
    responses={500: _ERROR_RESPONSES[500]},
    summary="Records de una tabla de Airtable",
)
async def list_source_records(table: str, factory: SourceClientFactory = Depends(get_source_client_factory)):
    try:
        records = await asyncio.to_thread(lambda: factory().fetch_records(table))
    except Exception as e:
        return _handle_failure(e, f"la lectura de '{table}'")
    return [r.to_dict() for r in records]


@router.get(
    "/target/items",
    response_model=List[Dict[str, Any]],
    responses={500: _ERROR_RESPONSES[500]},
    summary="Items de la coleccion Webflow",
)
async def list_target_items(factory: TargetClientFactory = Depends(get_target_client_factory)):
    try:
        items = await asyncio.to_thread(lambda: factory().fetch_items())
    except Exception as e:
        return _handle_failure(e, "la lectura de items de Webflow")
    return [i.to_dict() for i in items]
