"""
Seleccion de clientes Source/Target segun configuracion.

Un solo punto de construccion en lugar de un cliente HTTP por endpoint.
"""

from __future__ import annotations

from functools import lru_cache

from classes_sync.core.config import Settings
from classes_sync.domain.repositories.record_clients import ISourceClient, ITargetClient
from classes_sync.infrastructure.external.airtable.airtable_client import AirtableClient, AirtableCredentials
from classes_sync.infrastructure.external.memory.memory_clients import InMemorySourceClient, InMemoryTargetClient
from classes_sync.infrastructure.external.webflow.webflow_client import WebflowClient, WebflowCredentials
from classes_sync.shared.exceptions.sync import SyncConfigError


def _required(settings: Settings, name: str) -> str:
    val = getattr(settings, name, "")
    if not val:
        raise SyncConfigError(f"Falta variable de entorno obligatoria: {name}")
    return val


@lru_cache(maxsize=1)
def get_memory_source_client() -> InMemorySourceClient:
    """
    Store en memoria compartido por el proceso.

    Arranca vacio; tests y scripts lo cargan con set_records() antes de
    correr el sync. Un servidor con SOURCE_BACKEND=memory no tiene otra
    forma de cargarlo.
    """
    return InMemorySourceClient()


@lru_cache(maxsize=1)
def get_memory_target_client() -> InMemoryTargetClient:
    """Store en memoria compartido por el proceso."""
    return InMemoryTargetClient()


def build_source_client(settings: Settings) -> ISourceClient:
    backend = settings.SOURCE_BACKEND.strip().lower()
    if backend == "airtable":
        creds = AirtableCredentials(
            token=_required(settings, "AIRTABLE_TOKEN"),
            base_id=_required(settings, "AIRTABLE_BASE_ID"),
        )
        return AirtableClient(creds, base_url=settings.AIRTABLE_API_URL, timeout_s=settings.HTTP_TIMEOUT_S)
    if backend == "memory":
        return get_memory_source_client()
    raise SyncConfigError(f"SOURCE_BACKEND desconocido: {settings.SOURCE_BACKEND}")


def build_target_client(settings: Settings) -> ITargetClient:
    backend = settings.TARGET_BACKEND.strip().lower()
    if backend == "webflow":
        creds = WebflowCredentials(
            token=_required(settings, "WEBFLOW_TOKEN"),
            collection_id=_required(settings, "WEBFLOW_COLLECTION_ID"),
        )
        return WebflowClient(creds, base_url=settings.WEBFLOW_API_URL, timeout_s=settings.HTTP_TIMEOUT_S)
    if backend == "memory":
        return get_memory_target_client()
    raise SyncConfigError(f"TARGET_BACKEND desconocido: {settings.TARGET_BACKEND}")
