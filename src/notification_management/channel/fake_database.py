"""Fake database (in-app) channel — keeps an inbox per recipient."""

from notification_management.channel.fake import RecordingChannel


class FakeDatabaseChannel(RecordingChannel):
    """In-app channel. Every recipient with a key can be reached."""

    name = "database"
    message_prefix = "inbox"

    def inbox(self, recipient_key) -> list[dict]:
        return [record["data"] for record in self.sent_to(recipient_key)]
