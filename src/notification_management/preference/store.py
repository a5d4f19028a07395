"""Preference store — CRUD over ChannelPreference rows.

Keeps the one-row-per-(recipient, type, channel) invariant: writes go
through ``upsert`` or ``first_or_create``, never a blind add.
"""

import structlog
from notification_management.preference.preference import ChannelPreference
from notification_management.recipient import recipient_key
from protean.utils.globals import current_domain

logger = structlog.get_logger(__name__)

# Upper bound for a single recipient's rows (types x channels)
_QUERY_LIMIT = 1000


class PreferenceStore:
    def _repo(self):
        return current_domain.repository_for(ChannelPreference)

    def find(self, recipient, notification_type=None, channel_name=None, enabled=None) -> list[ChannelPreference]:
        """Rows for a recipient, optionally narrowed by type, channel and state."""
        criteria = {"recipient_id": recipient_key(recipient)}
        if notification_type is not None:
            criteria["notification_type"] = notification_type
        if channel_name is not None:
            criteria["channel_name"] = channel_name
        if enabled is not None:
            criteria["enabled"] = enabled

        return self._repo()._dao.query.filter(**criteria).limit(_QUERY_LIMIT).all().items

    def get(self, recipient, notification_type, channel_name) -> ChannelPreference | None:
        rows = self.find(recipient, notification_type, channel_name)
        return rows[0] if rows else None

    def upsert(self, recipient, notification_type, channel_name, enabled) -> ChannelPreference:
        """Create the row or overwrite its ``enabled`` flag. Last writer wins."""
        repo = self._repo()
        preference = self.get(recipient, notification_type, channel_name)

        if preference is None:
            preference = ChannelPreference.create(
                recipient_id=recipient_key(recipient),
                notification_type=notification_type,
                channel_name=channel_name,
                enabled=enabled,
            )
        else:
            preference.set_enabled(enabled)

        repo.add(preference)
        return preference

    def first_or_create(self, recipient, notification_type, channel_name, enabled=True) -> ChannelPreference:
        """Return the existing row untouched, or create it."""
        preference = self.get(recipient, notification_type, channel_name)
        if preference is not None:
            return preference

        preference = ChannelPreference.create(
            recipient_id=recipient_key(recipient),
            notification_type=notification_type,
            channel_name=channel_name,
            enabled=enabled,
        )
        self._repo().add(preference)
        return preference
