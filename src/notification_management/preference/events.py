"""Domain events for the ChannelPreference aggregate."""

from notification_management.domain import notification_management
from protean.fields import Boolean, DateTime, Identifier, String


@notification_management.event(part_of="ChannelPreference")
class ChannelPreferenceSet:
    """A recipient opted in or out of a channel for a notification type."""

    __version__ = 1

    preference_id: Identifier(required=True)
    recipient_id: Identifier(required=True)
    notification_type: String(required=True)
    channel_name: String(required=True)
    enabled: Boolean(required=True)
    changed_at: DateTime(required=True)
