"""DeliveryLog aggregate — audit record of one delivery attempt.

One entry is written per (send attempt x channel). Entries are immutable
apart from the single status transition made by the dispatch call that
created them:

    PENDING → SENT
    PENDING → FAILED
"""

import json
from datetime import UTC, datetime
from enum import Enum

from notification_management.delivery.events import (
    DeliveryFailed,
    DeliveryRecorded,
    DeliverySent,
)
from notification_management.domain import notification_management
from protean.exceptions import ValidationError
from protean.fields import DateTime, Identifier, String, Text


class DeliveryStatus(Enum):
    PENDING = "pending"
    SENT = "sent"
    FAILED = "failed"


_VALID_TRANSITIONS = {
    DeliveryStatus.PENDING: {DeliveryStatus.SENT, DeliveryStatus.FAILED},
    DeliveryStatus.SENT: set(),  # Terminal
    DeliveryStatus.FAILED: set(),  # Terminal
}


@notification_management.aggregate
class DeliveryLog:
    recipient_id: Identifier(required=True)
    channel_name: String(required=True, max_length=50)
    notification_type: String(required=True, max_length=100)
    status: String(choices=DeliveryStatus, default=DeliveryStatus.PENDING.value)
    payload: Text()  # JSON
    error_message: Text()
    sent_at: DateTime()

    created_at: DateTime()
    updated_at: DateTime()

    @classmethod
    def record(cls, recipient_id, channel_name, notification_type, payload=None):
        """Record a pending attempt."""
        now = datetime.now(UTC)

        entry = cls(
            recipient_id=str(recipient_id),
            channel_name=channel_name,
            notification_type=notification_type,
            status=DeliveryStatus.PENDING.value,
            payload=json.dumps(payload or {}, default=str),
            created_at=now,
            updated_at=now,
        )

        entry.raise_(
            DeliveryRecorded(
                log_id=str(entry.id),
                recipient_id=str(recipient_id),
                notification_type=notification_type,
                channel_name=channel_name,
                created_at=now,
            )
        )

        return entry

    def _assert_can_transition(self, target_status):
        current = DeliveryStatus(self.status)
        if target_status not in _VALID_TRANSITIONS.get(current, set()):
            raise ValidationError({"status": [f"Cannot transition from {current.value} to {target_status.value}"]})

    def mark_sent(self, sent_at=None):
        self._assert_can_transition(DeliveryStatus.SENT)

        now = sent_at or datetime.now(UTC)
        self.status = DeliveryStatus.SENT.value
        self.sent_at = now
        self.updated_at = now

        self.raise_(
            DeliverySent(
                log_id=str(self.id),
                recipient_id=str(self.recipient_id),
                channel_name=self.channel_name,
                sent_at=now,
            )
        )

    def mark_failed(self, error_message):
        self._assert_can_transition(DeliveryStatus.FAILED)

        now = datetime.now(UTC)
        self.status = DeliveryStatus.FAILED.value
        self.error_message = error_message
        self.updated_at = now

        self.raise_(
            DeliveryFailed(
                log_id=str(self.id),
                recipient_id=str(self.recipient_id),
                channel_name=self.channel_name,
                error_message=error_message,
                failed_at=now,
            )
        )

    # -------------------------------------------------------------------
    # Query helpers
    # -------------------------------------------------------------------
    def payload_data(self) -> dict:
        return json.loads(self.payload) if self.payload else {}

    def was_sent(self):
        return DeliveryStatus(self.status) == DeliveryStatus.SENT

    def has_failed(self):
        return DeliveryStatus(self.status) == DeliveryStatus.FAILED

    def is_pending(self):
        return DeliveryStatus(self.status) == DeliveryStatus.PENDING
