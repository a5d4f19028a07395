"""Channel port — abstract interface for notification delivery channels."""

from abc import ABC, abstractmethod


class TransportFailure(Exception):
    """A channel transport could not deliver a notification."""

    def __init__(self, message: str, channel: str | None = None):
        super().__init__(message)
        self.channel = channel


class ChannelPort(ABC):
    """Abstract interface for channel transports.

    A transport only delivers; deciding *whether* a recipient gets a
    notification on this channel is the preference resolver's job.
    """

    name: str = ""

    @abstractmethod
    def send(self, recipient, notification_type: str, data: dict) -> bool:
        """Deliver a notification payload to the recipient.

        Returns:
            True if the channel accepted the message, False otherwise.
        """
        ...

    @abstractmethod
    def can_send(self, recipient) -> bool:
        """Whether this channel is able to reach the recipient at all."""
        ...


REQUIRED_CAPABILITIES = ("send", "can_send")


def missing_capabilities(transport) -> list[str]:
    """Return the names of required channel methods the transport lacks."""
    return [name for name in REQUIRED_CAPABILITIES if not callable(getattr(transport, name, None))]
