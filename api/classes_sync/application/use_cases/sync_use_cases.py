"""
Caso de uso: reconciliar la coleccion Webflow con la tabla de Airtable.

Flujo de una corrida:
    IDLE -> FETCHING_SOURCE -> FETCHING_TARGET -> PLANNING -> EXECUTING -> DONE

- Un error de fetch aborta la corrida (FAILED): planificar sobre datos
  parciales borraria items validos.
- Los errores de operaciones individuales no abortan: quedan en el RunReport.
- Cada corrida vuelve a leer ambos lados; no hay cache entre corridas.
- No es reentrante: el caller debe serializar corridas (ver SyncRunGuard).
"""
from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import List, Optional, Tuple

from loguru import logger

from classes_sync.application.services.diff_planner import DiffPlanner
from classes_sync.application.services.field_mapper import FieldMapper
from classes_sync.application.services.plan_executor import PlanExecutor
from classes_sync.core.config import ReconciliationConfig
from classes_sync.domain.entities.operations import Plan
from classes_sync.domain.entities.records import SourceRecord, TargetItem
from classes_sync.domain.entities.report import RunReport, RunState
from classes_sync.domain.repositories.record_clients import ISourceClient, ITargetClient
from classes_sync.shared.exceptions.sync import (
    FetchError,
    SourceFetchError,
    SyncCancelledError,
    TargetFetchError,
)


@dataclass(frozen=True)
class PlanPreview:
    """Plan calculado sin ejecutar (dry run)."""

    plan: Plan
    source_count: int
    target_count: int


class ReconciliationOrchestrator:
    """
    Orquesta fetch -> plan -> ejecucion para una coleccion.
    """

    def __init__(
        self,
        source_client: ISourceClient,
        target_client: ITargetClient,
        config: ReconciliationConfig,
        *,
        mapper: Optional[FieldMapper] = None,
    ) -> None:
        self._source = source_client
        self._target = target_client
        self._config = config
        mapper = mapper or FieldMapper(id_field=config.source_id_field)
        self._planner = DiffPlanner(mapper, skip_unchanged=config.skip_unchanged)
        self._executor = PlanExecutor(max_concurrency=config.max_concurrency)
        self._cancel_event = threading.Event()
        self.state = RunState.IDLE

    @property
    def config(self) -> ReconciliationConfig:
        return self._config

    def cancel(self) -> None:
        """
        Pide cancelar la corrida. Solo tiene efecto antes de EXECUTING;
        las operaciones ya en curso terminan igual.

        Si no hay corrida activa, cancela la proxima. Un pedido hecho
        durante EXECUTING se descarta al terminar (DONE).
        """
        self._cancel_event.set()

    def run(self) -> RunReport:
        """
        Ejecuta una corrida completa.

        Returns:
            RunReport con conteos y fallas por operacion

        Raises:
            SourceFetchError / TargetFetchError: si falla algun fetch
            SyncCancelledError: si se cancelo antes de ejecutar
        """
        report = RunReport()
        logger.info(f"Iniciando reconciliacion de '{self._config.source_collection}'")

        try:
            plan = self._fetch_and_plan().plan
            self._check_cancelled()
        finally:
            self._cancel_event.clear()

        self._transition(RunState.EXECUTING)
        report = self._executor.execute(plan, self._target, report)
        self._cancel_event.clear()

        self._transition(RunState.DONE)
        logger.success(f"Reconciliacion completada: {report.summary()} ({report.duration_s}s)")
        return report

    def plan_only(self) -> PlanPreview:
        """Fetch + plan sin tocar el Target."""
        try:
            preview = self._fetch_and_plan()
        finally:
            self._cancel_event.clear()
        self._transition(RunState.DONE)
        return preview

    def _fetch_and_plan(self) -> PlanPreview:
        records, items = self._fetch_both()
        self._check_cancelled()
        self._transition(RunState.PLANNING)
        plan = self._planner.plan(records, items)
        return PlanPreview(plan=plan, source_count=len(records), target_count=len(items))

    def _fetch_both(self) -> Tuple[List[SourceRecord], List[TargetItem]]:
        try:
            self._transition(RunState.FETCHING_SOURCE)
            records = self._fetch_source()
            self._check_cancelled()

            self._transition(RunState.FETCHING_TARGET)
            items = self._fetch_target()
        except FetchError as e:
            self._transition(RunState.FAILED)
            logger.error(f"Reconciliacion abortada en fetch: {e.message}")
            raise

        logger.info(f"Fetch completado: records={len(records)}, items={len(items)}")
        return records, items

    def _fetch_source(self) -> List[SourceRecord]:
        collection = self._config.source_collection
        try:
            return list(self._source.fetch_records(collection))
        except SourceFetchError:
            raise
        except Exception as e:
            raise SourceFetchError(f"No se pudieron leer los records de '{collection}': {e}") from e

    def _fetch_target(self) -> List[TargetItem]:
        try:
            return list(self._target.fetch_items())
        except Exception as e:
            raise TargetFetchError(
                f"No se pudieron leer los items del Target: {getattr(e, 'message', e)}",
                status=getattr(e, "status", None),
                body=getattr(e, "body", None),
            ) from e

    def _check_cancelled(self) -> None:
        if self._cancel_event.is_set():
            previous = self.state
            self._transition(RunState.CANCELLED)
            logger.warning(f"Reconciliacion cancelada en {previous.value}")
            raise SyncCancelledError(previous.value)

    def _transition(self, new_state: RunState) -> None:
        logger.debug(f"Estado: {self.state.value} -> {new_state.value}")
        self.state = new_state
