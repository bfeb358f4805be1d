"""
Dependencias para inyeccion de casos de uso y clientes.

Se inyectan factories (no instancias) para que los errores de
configuracion ocurran dentro del endpoint y se respondan con el contrato
{"error": ...} del trigger.
"""
from typing import Callable

from classes_sync.application.use_cases.sync_use_cases import ReconciliationOrchestrator
from classes_sync.core.config import ReconciliationConfig, settings
from classes_sync.domain.repositories.record_clients import ISourceClient, ITargetClient
from classes_sync.infrastructure.external.factory import build_source_client, build_target_client

OrchestratorFactory = Callable[[], ReconciliationOrchestrator]
SourceClientFactory = Callable[[], ISourceClient]
TargetClientFactory = Callable[[], ITargetClient]


def _build_orchestrator() -> ReconciliationOrchestrator:
    return ReconciliationOrchestrator(
        build_source_client(settings),
        build_target_client(settings),
        ReconciliationConfig.from_settings(settings),
    )


def get_orchestrator_factory() -> OrchestratorFactory:
    """
    Dependencia para obtener el constructor del orquestador.

    Returns:
        OrchestratorFactory: callable que arma un orquestador nuevo por corrida
    """
    return _build_orchestrator


def get_source_client_factory() -> SourceClientFactory:
    """Dependencia para construir el cliente del Source."""
    return lambda: build_source_client(settings)


def get_target_client_factory() -> TargetClientFactory:
    """Dependencia para construir el cliente del Target."""
    return lambda: build_target_client(settings)
