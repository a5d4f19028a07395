"""Fake broadcast channel — records real-time pushes for testing."""

from notification_management.channel.fake import RecordingChannel


class FakeBroadcastChannel(RecordingChannel):
    name = "broadcast"
    message_prefix = "broadcast"

    def address_of(self, recipient):
        key = super().address_of(recipient)
        return f"private-user.{key}"
