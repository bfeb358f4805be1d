"""
Configuración de fixtures para pytest.
"""
from typing import Any, Callable

import pytest

from classes_sync.core.config import ReconciliationConfig
from classes_sync.domain.entities.records import SourceRecord, TargetItem
from classes_sync.infrastructure.external.memory.memory_clients import (
    InMemorySourceClient,
    InMemoryTargetClient,
)
from classes_sync.infrastructure.sync_lock import SyncRunGuard


CLASSES_TABLE = "Biaw Classes"


def make_record(record_id: str, name: str = "", **fields: Any) -> SourceRecord:
    """Record de Airtable con Name + campos extra."""
    data = {"Name": name} if name else {}
    data.update(fields)
    return SourceRecord(id=record_id, fields=data)


def make_item(item_id: str, source_record_id: str | None, **field_data: Any) -> TargetItem:
    """Item de Webflow con back-reference opcional."""
    data = dict(field_data)
    if source_record_id is not None:
        data["sourceRecordId"] = source_record_id
    return TargetItem(id=item_id, field_data=data)


@pytest.fixture
def record_factory() -> Callable[..., SourceRecord]:
    return make_record


@pytest.fixture
def item_factory() -> Callable[..., TargetItem]:
    return make_item


@pytest.fixture
def source_client() -> InMemorySourceClient:
    return InMemorySourceClient()


@pytest.fixture
def target_client() -> InMemoryTargetClient:
    return InMemoryTargetClient()


@pytest.fixture
def reconciliation_config() -> ReconciliationConfig:
    return ReconciliationConfig(source_collection=CLASSES_TABLE)


@pytest.fixture(autouse=True)
def cleanup_run_guard():
    """Limpia los locks del guard antes y despues de cada test."""
    SyncRunGuard._locks.clear()
    yield
    SyncRunGuard._locks.clear()
