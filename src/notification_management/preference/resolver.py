"""Preference resolver — which channels a recipient gets a notification on.

Resolution order for ``(recipient, notification_type)``:

1. Enabled explicit rows. If there is at least one, they are the answer;
   defaults are not consulted, not even for channels the recipient never
   touched.
2. Otherwise the type-level default from ``enabled_notifications``:
   absent -> nothing, ``["*"]`` -> every globally enabled channel,
   a list -> that list.

A recipient who disabled every channel for a type has no enabled rows,
so step 2 applies and they get the defaults back. Set
``fallback_when_all_disabled=False`` to treat that case as an opt-out.
"""

import structlog
from notification_management.preference.store import PreferenceStore
from notification_management.recipient import recipient_key

logger = structlog.get_logger(__name__)


class PreferenceResolver:
    def __init__(self, settings, store: PreferenceStore | None = None):
        self.settings = settings
        self.store = store or PreferenceStore()

    def resolve(self, recipient, notification_type: str) -> list[str]:
        rows = self.store.find(recipient, notification_type)
        enabled = sorted(row.channel_name for row in rows if row.enabled)

        if enabled:
            return enabled

        if rows and not self.settings.fallback_when_all_disabled:
            logger.debug(
                "All channels disabled by recipient",
                recipient_id=recipient_key(recipient),
                notification_type=notification_type,
            )
            return []

        return self.default_channels_for(notification_type)

    def default_channels_for(self, notification_type: str) -> list[str]:
        return self.settings.default_channels_for(notification_type)

    def wants_notification_via(self, recipient, notification_type: str, channel: str) -> bool:
        """Single yes/no for one channel.

        Without an explicit row this only checks the global
        ``enabled_channels``; type-level defaults are not consulted, so it
        can disagree with ``resolve`` for unconfigured recipients.
        """
        preference = self.store.get(recipient, notification_type, channel)
        if preference is None:
            return channel in self.settings.enabled_channels
        return bool(preference.enabled)
