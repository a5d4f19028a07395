"""Domain events for the DeliveryLog aggregate."""

from notification_management.domain import notification_management
from protean.fields import DateTime, Identifier, String


@notification_management.event(part_of="DeliveryLog")
class DeliveryRecorded:
    """A delivery attempt was recorded before handing off to the channel."""

    __version__ = 1

    log_id: Identifier(required=True)
    recipient_id: Identifier(required=True)
    notification_type: String(required=True)
    channel_name: String(required=True)
    created_at: DateTime(required=True)


@notification_management.event(part_of="DeliveryLog")
class DeliverySent:
    """The channel accepted the notification."""

    __version__ = 1

    log_id: Identifier(required=True)
    recipient_id: Identifier(required=True)
    channel_name: String(required=True)
    sent_at: DateTime(required=True)


@notification_management.event(part_of="DeliveryLog")
class DeliveryFailed:
    """The transport raised while delivering the notification."""

    __version__ = 1

    log_id: Identifier(required=True)
    recipient_id: Identifier(required=True)
    channel_name: String(required=True)
    error_message: String(required=True)
    failed_at: DateTime(required=True)
