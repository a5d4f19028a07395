"""Fake push channel — records pushes to a recipient's device for testing."""

from notification_management.channel.fake import RecordingChannel


class FakePushChannel(RecordingChannel):
    """Push channel that needs a ``device_token`` attribute on the recipient."""

    name = "push"
    message_prefix = "push"

    def address_of(self, recipient):
        return getattr(recipient, "device_token", None) or None
