"""Notification base class — what gets sent, and on which channels.

Subclasses set ``notification_type`` (otherwise it is guessed from the
class name) and may narrow or override the channels chosen from the
recipient's preferences:

* ``force_channels``: use exactly these, ignoring preferences.
* ``allowed_channels``: intersect the preferred channels with these.

Per-channel payloads come from ``to_<channel>()`` methods, falling back
to ``to_dict()``.
"""

import re


def guess_notification_type(class_name: str) -> str:
    """``OrderShippedNotification`` -> ``order.shipped``."""
    name = re.sub(r"Notification$", "", class_name)
    snake = re.sub(r"(?<!^)(?=[A-Z])", "_", name).lower()
    return snake.replace("_", ".")


class Notification:
    notification_type: str | None = None
    force_channels: tuple[str, ...] = ()
    allowed_channels: tuple[str, ...] = ()

    def __init__(self, data: dict | None = None):
        self.data = dict(data or {})

    def get_notification_type(self) -> str:
        return self.notification_type or guess_notification_type(type(self).__name__)

    def via(self, channels: list[str]) -> list[str]:
        """Channels to deliver on, given the recipient's resolved channels."""
        if self.force_channels:
            return list(self.force_channels)
        if self.allowed_channels:
            return [channel for channel in channels if channel in self.allowed_channels]
        return list(channels)

    def payload_for(self, channel: str, recipient) -> dict:
        builder = getattr(self, f"to_{channel}", None)
        if callable(builder):
            return builder(recipient)
        return self.to_dict(recipient)

    def to_dict(self, recipient) -> dict:
        return {"type": self.get_notification_type(), "data": self.data}
