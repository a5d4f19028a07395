"""Fake SMS channel — records sent messages for testing."""

from notification_management.channel.fake import RecordingChannel


class FakeSMSChannel(RecordingChannel):
    """SMS channel that needs a ``phone`` attribute on the recipient."""

    name = "sms"
    message_prefix = "sms"

    def address_of(self, recipient):
        return getattr(recipient, "phone", None) or None
