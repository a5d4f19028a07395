"""ChannelPreference aggregate — one opt-in/opt-out switch.

Identity is the ``(recipient_id, notification_type, channel_name)`` triple;
the store guarantees at most one row per triple (upsert semantics).
"""

from datetime import UTC, datetime

from notification_management.domain import notification_management
from notification_management.preference.events import ChannelPreferenceSet
from protean.fields import Boolean, DateTime, Identifier, String


@notification_management.aggregate
class ChannelPreference:
    """Whether a recipient receives one notification type on one channel."""

    recipient_id: Identifier(required=True)
    notification_type: String(required=True, max_length=100)
    channel_name: String(required=True, max_length=50)
    enabled: Boolean(default=True)

    created_at: DateTime()
    updated_at: DateTime()

    @classmethod
    def create(cls, recipient_id, notification_type, channel_name, enabled=True):
        now = datetime.now(UTC)

        preference = cls(
            recipient_id=str(recipient_id),
            notification_type=notification_type,
            channel_name=channel_name,
            enabled=enabled,
            created_at=now,
            updated_at=now,
        )
        preference._raise_set(now)

        return preference

    def set_enabled(self, enabled):
        """Flip the switch. Setting the current value again is a no-op."""
        if self.enabled == enabled:
            return

        now = datetime.now(UTC)
        self.enabled = enabled
        self.updated_at = now
        self._raise_set(now)

    def enable(self):
        self.set_enabled(True)

    def disable(self):
        self.set_enabled(False)

    def _raise_set(self, changed_at):
        self.raise_(
            ChannelPreferenceSet(
                preference_id=str(self.id),
                recipient_id=str(self.recipient_id),
                notification_type=self.notification_type,
                channel_name=self.channel_name,
                enabled=self.enabled,
                changed_at=changed_at,
            )
        )
