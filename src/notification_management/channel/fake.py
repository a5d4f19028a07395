"""Recording channel base — in-memory transports for tests and local runs."""

from uuid import uuid4

from notification_management.channel.port import ChannelPort, TransportFailure


class RecordingChannel(ChannelPort):
    """Channel that records every delivery in memory for test assertions."""

    message_prefix = "msg"

    def __init__(self):
        self.sent: list[dict] = []
        self.should_succeed = True
        self.failure_reason = None

    def configure(self, should_succeed: bool = True, failure_reason: str | None = None):
        """Configure the fake channel behavior for testing.

        When ``failure_reason`` is given, failed sends raise instead of
        returning False, mimicking a transport error.
        """
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason

    def send(self, recipient, notification_type: str, data: dict) -> bool:
        if not self.should_succeed:
            if self.failure_reason:
                raise TransportFailure(self.failure_reason, channel=self.name)
            return False

        self.sent.append(
            {
                "message_id": f"{self.message_prefix}-{uuid4().hex[:12]}",
                "to": self.address_of(recipient),
                "notification_type": notification_type,
                "data": data,
            }
        )
        return True

    def can_send(self, recipient) -> bool:
        return self.address_of(recipient) is not None

    def address_of(self, recipient):
        """Where this channel delivers to for the recipient (None if unreachable)."""
        key = getattr(recipient, "get_notification_key", None)
        return str(key()) if callable(key) else str(recipient)

    def sent_to(self, address) -> list[dict]:
        return [record for record in self.sent if record["to"] == str(address)]

    def reset(self):
        """Clear sent messages (useful between tests)."""
        self.sent.clear()
        self.should_succeed = True
        self.failure_reason = None
