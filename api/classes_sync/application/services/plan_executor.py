"""
Ejecutor del Plan contra el cliente del Target.

Caracteristicas:
- Respeta el orden del plan: todos los deletes terminan antes de que
  empiece cualquier update/create.
- Semantica de falla parcial: una operacion que falla se registra en el
  RunReport y la corrida sigue con la siguiente.
- Sin reintentos: reintentar es decision del caller.
- Concurrencia opcional con un ThreadPoolExecutor acotado
  (max_concurrency > 1). Las operaciones de un plan tocan items distintos,
  asi que pueden correr en paralelo dentro de cada fase.
"""
from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional, Sequence, Tuple

from loguru import logger

from classes_sync.domain.entities.operations import Operation, Plan
from classes_sync.domain.entities.report import RunReport
from classes_sync.domain.repositories.record_clients import ITargetClient

# (operacion, error) - error es None si la operacion tuvo exito
_Outcome = Tuple[Operation, Optional[Exception]]


class PlanExecutor:
    """
    Aplica un Plan y devuelve el RunReport.

    Args:
        max_concurrency: operaciones simultaneas por fase (1 = secuencial)
    """

    def __init__(self, max_concurrency: int = 1) -> None:
        self.max_concurrency = max(1, int(max_concurrency))

    def execute(
        self,
        plan: Plan,
        target_client: ITargetClient,
        report: Optional[RunReport] = None,
    ) -> RunReport:
        report = report or RunReport()
        report.skipped += plan.skipped
        report.duplicates.extend(plan.duplicates)
        report.ignored_records.extend(plan.ignored_records)

        if plan.is_empty():
            logger.info("Plan vacio: nada que aplicar")
            return report.finish()

        if self.max_concurrency == 1:
            outcomes = [self._attempt(op, target_client) for op in plan]
        else:
            outcomes = self._execute_concurrently(plan, target_client)

        for op, error in outcomes:
            if error is None:
                report.record_success(op)
            else:
                report.record_failure(op, reason=str(error) or type(error).__name__, status=getattr(error, "status", None))

        return report.finish()

    def _execute_concurrently(self, plan: Plan, target_client: ITargetClient) -> List[_Outcome]:
        logger.debug(f"Ejecutando plan con concurrencia {self.max_concurrency}")
        with ThreadPoolExecutor(
            max_workers=self.max_concurrency,
            thread_name_prefix="sync-op-",
        ) as pool:
            # pool.map bloquea hasta tener todos los resultados de la fase
            deletes = self._run_phase(pool, plan.deletes, target_client)
            writes = self._run_phase(pool, plan.writes, target_client)
        return deletes + writes

    def _run_phase(
        self,
        pool: ThreadPoolExecutor,
        operations: Sequence[Operation],
        target_client: ITargetClient,
    ) -> List[_Outcome]:
        if not operations:
            return []
        return list(pool.map(lambda op: self._attempt(op, target_client), operations))

    def _attempt(self, op: Operation, target_client: ITargetClient) -> _Outcome:
        """Aplica una operacion. Nunca propaga la excepcion del cliente."""
        try:
            self._apply(op, target_client)
        except Exception as e:
            logger.error(f"Fallo {op.describe()}: {e}")
            return op, e
        logger.info(f"OK {op.describe()}")
        return op, None

    @staticmethod
    def _apply(op: Operation, target_client: ITargetClient) -> None:
        if op.kind == "delete":
            target_client.delete_item(op.target_item_id)
        elif op.kind == "update":
            target_client.update_item(op.target_item_id, dict(op.fields))
        elif op.kind == "create":
            target_client.create_item(dict(op.fields))
        else:
            raise ValueError(f"Operacion desconocida: {op!r}")
