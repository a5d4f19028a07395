"""Recipients — who notifications are delivered to.

Any host entity can be a recipient by implementing the ``Notifiable``
protocol. ``HasNotificationPreferences`` implements it on top of an
injected ``NotificationDispatcher`` and adds preference helpers.
"""

from typing import Protocol, runtime_checkable

from protean.exceptions import ConfigurationError


@runtime_checkable
class Notifiable(Protocol):
    """An entity able to report its active channels for a notification type."""

    def get_notification_key(self) -> str: ...

    def active_channels_for(self, notification_type: str) -> list[str]: ...


def recipient_key(recipient) -> str:
    """Storage key for a recipient object or a bare identifier."""
    get_key = getattr(recipient, "get_notification_key", None)
    if callable(get_key):
        return str(get_key())
    return str(recipient)


class HasNotificationPreferences:
    """Mixin for host entities that own notification preferences.

    The host sets ``notification_dispatcher`` (usually once, when the
    entity is loaded) and provides ``get_notification_key``; by default
    the ``id`` attribute is used as the key.

    Example::

        user.set_notification_preferences({
            "order.shipped": {"mail": True, "sms": False},
            "order.delivered": {"mail": True, "database": True},
        })
    """

    notification_dispatcher = None

    def get_notification_key(self) -> str:
        return str(self.id)

    def _dispatcher(self):
        if self.notification_dispatcher is None:
            raise ConfigurationError(f"{type(self).__name__} has no notification_dispatcher bound")
        return self.notification_dispatcher

    def initialize_default_notification_preferences(self):
        self._dispatcher().initialize_default_preferences(self)

    def enable_notification_channel(self, notification_type: str, channel: str):
        self._dispatcher().enable_channel(self, notification_type, channel)

    def disable_notification_channel(self, notification_type: str, channel: str):
        self._dispatcher().disable_channel(self, notification_type, channel)

    def wants_notification_via(self, notification_type: str, channel: str) -> bool:
        return self._dispatcher().wants_notification_via(self, notification_type, channel)

    def active_channels_for(self, notification_type: str) -> list[str]:
        return self._dispatcher().active_channels_for(self, notification_type)

    def notification_preferences(self):
        return self._dispatcher().preferences_for(self)

    def set_notification_preferences(self, preferences: dict[str, dict[str, bool]]):
        self._dispatcher().set_preferences(self, preferences)

    def notification_history(self, notification_type: str | None = None, limit: int = 50):
        return self._dispatcher().history(self, notification_type, limit)

    def has_preference_for(self, notification_type: str, channel: str) -> bool:
        return self.preference_for(notification_type, channel) is not None

    def preference_for(self, notification_type: str, channel: str):
        return self._dispatcher().preferences.get(self, notification_type, channel)

    def enable_default_channels_for(self, notification_type: str):
        self._dispatcher().enable_default_channels_for(self, notification_type)

    def disable_all_channels_for(self, notification_type: str):
        self._dispatcher().disable_all_channels_for(self, notification_type)
