"""Notification settings (Pydantic Settings).

Static, read-only configuration for the dispatch layer. Scalar values can
be overridden from the environment with the ``NOTIFICATIONS_`` prefix,
e.g. ``NOTIFICATIONS_LOG_NOTIFICATIONS=false``.
"""

from typing import Any

from notification_management.mapping.rules import EventMappingRule
from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

WILDCARD = "*"


class ChannelSettings(BaseModel):
    """A custom channel: driver class, factory callable or dotted path."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    driver: Any
    enabled: bool = True
    description: str | None = None


class NotificationSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="NOTIFICATIONS_",
        extra="ignore",
        arbitrary_types_allowed=True,
    )

    # Custom channels on top of the built-in mail/database/broadcast
    channels: dict[str, ChannelSettings] = Field(default_factory=dict)

    # Channels enabled by default; what the "*" wildcard expands to
    enabled_channels: list[str] = Field(default_factory=lambda: ["mail", "database"])

    # Notification type -> default channels, e.g. {"user.logged": ["*"]}
    enabled_notifications: dict[str, list[str]] = Field(default_factory=lambda: {"user.logged": ["mail"]})

    log_notifications: bool = True

    # Notification type -> Notification subclass (or dotted import path)
    notification_types: dict[str, Any] = Field(
        default_factory=lambda: {
            "user.logged": "notification_management.notification.user_logged.UserLoggedNotification",
        }
    )

    # Event class (or event class name) -> mapping rule
    event_notifications: dict[Any, EventMappingRule] = Field(default_factory=dict)

    # When every explicit row for a type is disabled, fall back to the
    # configured defaults (True) or treat it as a full opt-out (False).
    fallback_when_all_disabled: bool = True

    def default_channels_for(self, notification_type: str) -> list[str]:
        """Type-level defaults with the wildcard expanded; [] when unconfigured."""
        channels = self.enabled_notifications.get(notification_type)
        if channels is None:
            return []
        if WILDCARD in channels:
            return list(self.enabled_channels)
        return list(channels)
