"""Tests for the DeliveryLog aggregate and its status transitions."""

from datetime import UTC, datetime

import pytest
from notification_management.delivery.events import (
    DeliveryFailed,
    DeliveryRecorded,
    DeliverySent,
)
from notification_management.delivery.log import DeliveryLog, DeliveryStatus
from protean.exceptions import ValidationError


def _make_entry(payload=None):
    return DeliveryLog.record(
        recipient_id="user-1",
        channel_name="mail",
        notification_type="user.logged",
        payload=payload,
    )


class TestDeliveryLogRecord:
    def test_record_starts_pending(self):
        entry = _make_entry()
        assert entry.status == DeliveryStatus.PENDING.value
        assert entry.is_pending()
        assert entry.sent_at is None
        assert entry.error_message is None

    def test_record_raises_recorded_event(self):
        entry = _make_entry()
        assert len(entry._events) == 1
        assert isinstance(entry._events[0], DeliveryRecorded)
        assert entry._events[0].channel_name == "mail"

    def test_payload_is_serialized(self):
        entry = _make_entry({"ip": "10.0.0.1", "attempts": 3})
        assert entry.payload_data() == {"ip": "10.0.0.1", "attempts": 3}

    def test_missing_payload_is_empty_object(self):
        entry = _make_entry()
        assert entry.payload_data() == {}

    def test_payload_with_datetime_is_serialized_as_string(self):
        when = datetime(2024, 1, 1, tzinfo=UTC)
        entry = _make_entry({"logged_at": when})
        assert entry.payload_data() == {"logged_at": str(when)}


class TestDeliveryLogTransitions:
    def test_mark_sent(self):
        entry = _make_entry()
        entry._events.clear()

        entry.mark_sent()

        assert entry.was_sent()
        assert entry.sent_at is not None
        assert isinstance(entry._events[0], DeliverySent)

    def test_mark_sent_with_explicit_time(self):
        entry = _make_entry()
        when = datetime(2024, 5, 1, 12, 0, tzinfo=UTC)
        entry.mark_sent(sent_at=when)
        assert entry.sent_at == when

    def test_mark_failed(self):
        entry = _make_entry()
        entry._events.clear()

        entry.mark_failed("SMTP down")

        assert entry.has_failed()
        assert entry.error_message == "SMTP down"
        assert entry.sent_at is None
        assert isinstance(entry._events[0], DeliveryFailed)
        assert entry._events[0].error_message == "SMTP down"

    def test_sent_is_terminal(self):
        entry = _make_entry()
        entry.mark_sent()
        with pytest.raises(ValidationError) as exc:
            entry.mark_failed("late failure")
        assert "status" in exc.value.messages

    def test_failed_is_terminal(self):
        entry = _make_entry()
        entry.mark_failed("boom")
        with pytest.raises(ValidationError):
            entry.mark_sent()
