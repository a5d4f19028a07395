"""Channel transport — hands a notification to each channel's adapter.

Delivery is sequential and synchronous; a slow adapter blocks the caller.
Callers that need queued delivery wrap this class, not the dispatcher.
"""

import structlog
from notification_management.channel.port import TransportFailure
from notification_management.channel.registry import ChannelRegistry
from notification_management.recipient import recipient_key

logger = structlog.get_logger(__name__)


class ChannelTransport:
    def __init__(self, registry: ChannelRegistry):
        self.registry = registry

    def deliverable_channels(self, recipient, channels: list[str]) -> list[str]:
        """Channels that are able to reach this recipient.

        Raises:
            ObjectNotFoundError: if a channel is not registered.
        """
        deliverable = []
        for channel in channels:
            if self.registry.get(channel).can_send(recipient):
                deliverable.append(channel)
            else:
                logger.info(
                    "Channel cannot reach recipient, skipping",
                    recipient_id=recipient_key(recipient),
                    channel=channel,
                )
        return deliverable

    def deliver(self, recipient, notification_type: str, notification, channels: list[str]) -> None:
        """Send through every channel in order.

        Raises:
            TransportFailure: when a channel reports it did not send.
            Exception: anything the adapter raises propagates unchanged.
        """
        for channel in channels:
            adapter = self.registry.get(channel)
            sent = adapter.send(recipient, notification_type, notification.payload_for(channel, recipient))
            if not sent:
                raise TransportFailure(
                    f"Channel '{channel}' did not deliver {notification_type} to {recipient_key(recipient)}",
                    channel=channel,
                )
