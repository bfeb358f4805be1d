"""
Tests unitarios para AirtableClient y WebflowClient.

Se reemplaza requests.Session por un dummy que registra los requests y
devuelve respuestas preparadas.
"""
from __future__ import annotations

import json as jsonlib
from typing import Any, List, Optional

import pytest
import requests

from classes_sync.infrastructure.external.airtable.airtable_client import (
    AirtableClient,
    AirtableCredentials,
)
from classes_sync.infrastructure.external.webflow.webflow_client import (
    WebflowClient,
    WebflowCredentials,
)
from classes_sync.shared.exceptions.sync import SourceFetchError, TargetOperationError


class _DummyResponse:
    def __init__(self, status_code: int = 200, payload: Any = None, text: Optional[str] = None) -> None:
        self.status_code = status_code
        self._payload = payload
        self.text = text if text is not None else ("" if payload is None else jsonlib.dumps(payload))
        self.content = self.text.encode("utf-8")
        self.headers: dict[str, str] = {}

    def json(self) -> Any:
        if self._payload is None:
            raise ValueError("no json")
        return self._payload


class _DummySession:
    def __init__(self, *responses: Any) -> None:
        self._responses = list(responses)
        self.requests: List[dict] = []

    def request(self, **kwargs: Any) -> _DummyResponse:
        self.requests.append(kwargs)
        response = self._responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response

    def close(self) -> None:
        pass


def _airtable(session: _DummySession) -> AirtableClient:
    return AirtableClient(AirtableCredentials(token="pat-123", base_id="appBASE"), session=session)


def _webflow(session: _DummySession) -> WebflowClient:
    return WebflowClient(WebflowCredentials(token="wf-456", collection_id="col789"), session=session)


class TestAirtableClient:
    """Tests para AirtableClient.fetch_records."""

    def test_fetch_records_parses_records(self) -> None:
        session = _DummySession(_DummyResponse(payload={
            "records": [
                {"id": "rec1", "fields": {"Name": "Basic Safety"}},
                {"id": "rec2"},
            ]
        }))

        records = _airtable(session).fetch_records("Biaw Classes")

        assert [r.id for r in records] == ["rec1", "rec2"]
        assert records[0].fields == {"Name": "Basic Safety"}
        assert records[1].fields == {}

        sent = session.requests[0]
        assert sent["method"] == "GET"
        assert sent["url"] == "https://api.airtable.com/v0/appBASE/Biaw%20Classes"
        assert sent["headers"]["Authorization"] == "Bearer pat-123"

    def test_non_2xx_raises_source_fetch_error(self) -> None:
        session = _DummySession(_DummyResponse(status_code=404, text='{"error":"NOT_FOUND"}'))

        with pytest.raises(SourceFetchError) as exc_info:
            _airtable(session).fetch_records("Missing")

        assert exc_info.value.status == 404
        assert "NOT_FOUND" in exc_info.value.body

    def test_transport_error_raises_source_fetch_error(self) -> None:
        session = _DummySession(requests.ConnectionError("dns failure"))

        with pytest.raises(SourceFetchError, match="dns failure") as exc_info:
            _airtable(session).fetch_records("Biaw Classes")

        assert exc_info.value.status is None

    def test_more_pages_aborts_instead_of_returning_partial_data(self) -> None:
        session = _DummySession(_DummyResponse(payload={"records": [{"id": "rec1"}], "offset": "itr123"}))

        with pytest.raises(SourceFetchError, match="mas de una pagina"):
            _airtable(session).fetch_records("Biaw Classes")

    def test_record_without_id_is_rejected(self) -> None:
        session = _DummySession(_DummyResponse(payload={"records": [{"fields": {"Name": "x"}}]}))

        with pytest.raises(SourceFetchError):
            _airtable(session).fetch_records("Biaw Classes")


class TestWebflowClient:
    """Tests para WebflowClient."""

    def test_fetch_items_reads_field_data(self) -> None:
        session = _DummySession(_DummyResponse(payload={
            "items": [{"id": "i1", "fieldData": {"name": "A", "sourceRecordId": "rec1"}}],
            "pagination": {"limit": 100, "offset": 0, "total": 1},
        }))

        items = _webflow(session).fetch_items()

        assert items[0].id == "i1"
        assert items[0].source_record_id() == "rec1"
        assert session.requests[0]["url"] == "https://api.webflow.com/v2/collections/col789/items"

    def test_fetch_items_rejects_incomplete_collection(self) -> None:
        session = _DummySession(_DummyResponse(payload={
            "items": [{"id": "i1", "fieldData": {}}],
            "pagination": {"limit": 1, "offset": 0, "total": 5},
        }))

        with pytest.raises(TargetOperationError, match="5 items"):
            _webflow(session).fetch_items()

    def test_create_item_posts_field_data(self) -> None:
        session = _DummySession(_DummyResponse(status_code=202, payload={"id": "new1", "fieldData": {"slug": "a"}}))

        item = _webflow(session).create_item({"slug": "a", "name": "A"})

        assert item.id == "new1"
        sent = session.requests[0]
        assert sent["method"] == "POST"
        assert sent["json"] == {"isArchived": False, "isDraft": False, "fieldData": {"slug": "a", "name": "A"}}
        assert sent["headers"]["Authorization"] == "Bearer wf-456"

    def test_update_item_patches_item_url(self) -> None:
        session = _DummySession(_DummyResponse(payload={"id": "i1", "fieldData": {"name": "B"}}))

        item = _webflow(session).update_item("i1", {"name": "B"})

        assert item.field_data == {"name": "B"}
        sent = session.requests[0]
        assert sent["method"] == "PATCH"
        assert sent["url"].endswith("/collections/col789/items/i1")
        assert sent["json"] == {"fieldData": {"name": "B"}}

    def test_delete_item_accepts_empty_response(self) -> None:
        session = _DummySession(_DummyResponse(status_code=204))

        assert _webflow(session).delete_item("i1") is None
        assert session.requests[0]["method"] == "DELETE"

    def test_error_carries_status_and_body(self) -> None:
        session = _DummySession(_DummyResponse(status_code=409, text='{"code":"duplicate_value"}'))

        with pytest.raises(TargetOperationError) as exc_info:
            _webflow(session).create_item({"slug": "a"})

        assert exc_info.value.status == 409
        assert "duplicate_value" in exc_info.value.body
