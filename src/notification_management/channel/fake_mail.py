"""Fake mail channel — records sent emails for testing."""

from notification_management.channel.fake import RecordingChannel


class FakeMailChannel(RecordingChannel):
    """Mail channel that needs an ``email`` attribute on the recipient."""

    name = "mail"
    message_prefix = "email"

    def address_of(self, recipient):
        return getattr(recipient, "email", None) or None
