"""Unit tests for domain events."""

from datetime import datetime, timezone

import pytest

from private_resources.domain.events import ResourceServedEvent, SecurityContextMismatchEvent

from tests.fixtures import SAMPLE_IDENTIFIER

OCCURRED_AT = datetime(2050, 1, 1, 12, 30, tzinfo=timezone.utc)


def test_resource_served_event_to_dict():
    event = ResourceServedEvent(
        aggregate_id=SAMPLE_IDENTIFIER,
        occurred_at=OCCURRED_AT,
        filename="report.pdf",
        media_type="application/pdf",
        file_size=11,
        request_path="/download",
        remote_addr="10.0.0.1",
    )

    assert event.to_dict() == {
        "event_type": "ResourceServedEvent",
        "aggregate_id": SAMPLE_IDENTIFIER,
        "occurred_at": "2050-01-01T12:30:00+00:00",
        "filename": "report.pdf",
        "media_type": "application/pdf",
        "file_size": 11,
        "request_path": "/download",
        "remote_addr": "10.0.0.1",
    }


def test_mismatch_event_to_dict_has_both_hashes():
    event = SecurityContextMismatchEvent(
        aggregate_id=SAMPLE_IDENTIFIER,
        occurred_at=OCCURRED_AT,
        token_context_hash="h1",
        current_context_hash="h2",
        request_path="/",
    )
    data = event.to_dict()

    assert data["event_type"] == "SecurityContextMismatchEvent"
    assert data["token_context_hash"] == "h1"
    assert data["current_context_hash"] == "h2"
    assert data["remote_addr"] is None


def test_events_are_immutable():
    event = SecurityContextMismatchEvent(SAMPLE_IDENTIFIER, OCCURRED_AT, "h1", "h2", "/")
    with pytest.raises(AttributeError):
        event.request_path = "/other"
