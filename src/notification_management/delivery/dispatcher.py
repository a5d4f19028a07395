"""Notification dispatcher — resolve channels, deliver, record the outcome.

Flow for one send:
    resolve preferred channels → (empty: no-op) → narrow with the
    notification's ``via`` → record channels that cannot reach the
    recipient as FAILED → record PENDING entries for the rest → hand off to
    the transport → mark entries SENT, or FAILED and re-raise.

Delivery failures are never swallowed here; the caller decides.
"""

import structlog
from notification_management.channel.registry import ChannelRegistry
from notification_management.channel.transport import ChannelTransport
from notification_management.delivery.log import DeliveryLog
from notification_management.delivery.store import DeliveryLogStore
from notification_management.notification.notification import Notification
from notification_management.preference.resolver import PreferenceResolver
from notification_management.recipient import recipient_key
from notification_management.utils.imports import import_from_path
from protean.exceptions import ConfigurationError

logger = structlog.get_logger(__name__)

UNREACHABLE_MESSAGE = "Channel cannot reach recipient"


class NotificationDispatcher:
    def __init__(
        self,
        settings,
        registry: ChannelRegistry,
        resolver: PreferenceResolver | None = None,
        transport: ChannelTransport | None = None,
        logs: DeliveryLogStore | None = None,
    ):
        self.settings = settings
        self.registry = registry
        self.resolver = resolver or PreferenceResolver(settings)
        self.preferences = self.resolver.store
        self.transport = transport or ChannelTransport(registry)
        self.logs = logs or DeliveryLogStore()

    # -------------------------------------------------------------------
    # Sending
    # -------------------------------------------------------------------
    def resolve_and_deliver(self, recipient, notification_type: str, notification, data=None) -> list[str]:
        """Send respecting the recipient's preferences.

        ``notification`` is a ``Notification`` instance, or a class that
        is instantiated with ``data`` once there is something to send.

        Returns:
            The channels the notification was delivered on ([] for a no-op).
        """
        channels = self.resolver.resolve(recipient, notification_type)
        if not channels:
            logger.info(
                "No enabled channels for notification",
                recipient_id=recipient_key(recipient),
                notification_type=notification_type,
            )
            return []

        if isinstance(notification, type):
            notification = notification(data)

        return self._deliver(recipient, notification_type, notification, notification.via(channels), data)

    send = resolve_and_deliver

    def send_by_type(self, recipient, notification_type: str, data=None) -> list[str]:
        """Send the notification class configured for ``notification_type``.

        Raises:
            ConfigurationError: if the type is unmapped or its mapping is
                not a ``Notification`` subclass.
        """
        notification_cls = self.notification_class_for(notification_type)
        return self.resolve_and_deliver(recipient, notification_type, notification_cls, data)

    def send_via(self, recipient, channels: list[str], notification, data=None, notification_type=None) -> list[str]:
        """Send on exactly ``channels``, bypassing preferences. Still audited."""
        if isinstance(notification, type):
            notification = notification(data)
        notification_type = notification_type or notification.get_notification_type()

        for channel in channels:
            self.registry.get(channel)

        return self._deliver(recipient, notification_type, notification, list(channels), data)

    def notification_class_for(self, notification_type: str) -> type:
        target = self.settings.notification_types.get(notification_type)
        if not target:
            raise ConfigurationError(f"Notification type '{notification_type}' is not registered in config.")

        if isinstance(target, str):
            try:
                target = import_from_path(target)
            except (ImportError, AttributeError):
                raise ConfigurationError(
                    f"Notification type '{notification_type}' is mapped to '{target}' "
                    "which is not a valid notification class."
                ) from None

        if not (isinstance(target, type) and issubclass(target, Notification)):
            raise ConfigurationError(
                f"Notification type '{notification_type}' is mapped to {target!r} which is not a Notification subclass."
            )

        return target

    def _deliver(self, recipient, notification_type, notification, channels, data) -> list[str]:
        key = recipient_key(recipient)

        reachable = self.transport.deliverable_channels(recipient, channels)
        if self.settings.log_notifications:
            for channel in channels:
                if channel not in reachable:
                    entry = DeliveryLog.record(key, channel, notification_type, payload=data)
                    entry.mark_failed(UNREACHABLE_MESSAGE)
                    self.logs.append(entry)

        channels = reachable
        if not channels:
            return []

        entries = []
        if self.settings.log_notifications:
            entries = [
                self.logs.append(DeliveryLog.record(key, channel, notification_type, payload=data))
                for channel in channels
            ]

        try:
            self.transport.deliver(recipient, notification_type, notification, channels)
        except Exception as exc:
            error_message = str(exc) or type(exc).__name__
            for entry in entries:
                entry.mark_failed(error_message)
                self.logs.append(entry)

            logger.error(
                "Notification delivery failed",
                recipient_id=key,
                notification_type=notification_type,
                channels=channels,
                error=error_message,
            )
            raise

        for entry in entries:
            entry.mark_sent()
            self.logs.append(entry)

        logger.info(
            "Notification delivered",
            recipient_id=key,
            notification_type=notification_type,
            channels=channels,
        )
        return channels

    # -------------------------------------------------------------------
    # Preferences
    # -------------------------------------------------------------------
    def enable_channel(self, recipient, notification_type: str, channel: str):
        return self.preferences.upsert(recipient, notification_type, channel, True)

    def disable_channel(self, recipient, notification_type: str, channel: str):
        return self.preferences.upsert(recipient, notification_type, channel, False)

    def set_preferences(self, recipient, preferences: dict[str, dict[str, bool]]) -> None:
        """Bulk update, e.g. ``{"order.shipped": {"mail": True, "sms": False}}``.

        Each write is independent; a failure part-way leaves earlier
        writes in place.
        """
        for notification_type, channels in preferences.items():
            for channel, enabled in channels.items():
                if enabled:
                    self.enable_channel(recipient, notification_type, channel)
                else:
                    self.disable_channel(recipient, notification_type, channel)

    def preferences_for(self, recipient):
        return self.preferences.find(recipient)

    def wants_notification_via(self, recipient, notification_type: str, channel: str) -> bool:
        return self.resolver.wants_notification_via(recipient, notification_type, channel)

    def active_channels_for(self, recipient, notification_type: str) -> list[str]:
        return self.resolver.resolve(recipient, notification_type)

    def initialize_default_preferences(self, recipient) -> None:
        """Seed configured defaults for a new recipient. Existing rows win."""
        for notification_type in self.settings.enabled_notifications:
            for channel in self.settings.default_channels_for(notification_type):
                self.preferences.first_or_create(recipient, notification_type, channel, enabled=True)

        logger.info("Default preferences initialized", recipient_id=recipient_key(recipient))

    def enable_default_channels_for(self, recipient, notification_type: str) -> None:
        for channel in self.settings.enabled_channels:
            self.enable_channel(recipient, notification_type, channel)

    def disable_all_channels_for(self, recipient, notification_type: str) -> None:
        """Disable every channel the recipient has a row for."""
        for preference in self.preferences.find(recipient, notification_type):
            self.disable_channel(recipient, notification_type, preference.channel_name)

    # -------------------------------------------------------------------
    # History
    # -------------------------------------------------------------------
    def history(self, recipient, notification_type: str | None = None, limit: int = 50) -> list[DeliveryLog]:
        return self.logs.query(recipient, notification_type=notification_type, limit=limit)
