"""Channel registry — known channel names and their lazily built transports.

A registry instance is created once per process by ``build_services`` and
injected wherever channels are needed.
"""

from dataclasses import dataclass, field

import structlog
from notification_management.channel.fake_broadcast import FakeBroadcastChannel
from notification_management.channel.fake_database import FakeDatabaseChannel
from notification_management.channel.fake_mail import FakeMailChannel
from notification_management.channel.port import missing_capabilities
from notification_management.utils.imports import import_from_path
from protean.exceptions import ObjectNotFoundError, ValidationError

logger = structlog.get_logger(__name__)

BUILTIN_CHANNELS: dict[str, type] = {
    "mail": FakeMailChannel,
    "database": FakeDatabaseChannel,
    "broadcast": FakeBroadcastChannel,
}


@dataclass
class ChannelRegistration:
    name: str
    factory: object
    enabled: bool = True
    description: str | None = None
    builtin: bool = False
    instance: object | None = field(default=None, repr=False)


class ChannelRegistry:
    """Holds channel registrations and caches their transport instances."""

    def __init__(self):
        self._channels: dict[str, ChannelRegistration] = {}

    def register(self, name: str, factory, enabled: bool = True, description: str | None = None, builtin=False):
        """Register (or replace) a channel.

        ``factory`` may be a transport class, a zero-argument callable
        returning a transport, or a dotted import path to either. Classes
        are checked here; what a callable returns is checked on first
        ``get``.

        Raises:
            ValidationError: if the factory cannot be resolved or the
                transport class lacks ``send``/``can_send``.
        """
        if isinstance(factory, str):
            try:
                factory = import_from_path(factory)
            except (ImportError, AttributeError) as exc:
                raise ValidationError({"channels": [f"Channel '{name}' driver {factory!r} cannot be imported: {exc}"]}) from None

        if isinstance(factory, type):
            missing = missing_capabilities(factory)
            if missing:
                raise ValidationError(
                    {"channels": [f"Channel '{name}' driver {factory.__name__} must implement: {', '.join(missing)}"]}
                )
        elif not callable(factory):
            raise ValidationError({"channels": [f"Channel '{name}' driver must be a class or a callable"]})

        self._channels[name] = ChannelRegistration(
            name=name,
            factory=factory,
            enabled=enabled,
            description=description,
            builtin=builtin,
        )

    def unregister(self, name: str) -> None:
        self._channels.pop(name, None)

    def has(self, name: str) -> bool:
        return name in self._channels

    def get(self, name: str):
        """Return the transport for ``name``, building it on first use.

        Raises:
            ObjectNotFoundError: if the channel is not registered.
            ValidationError: if a callable factory produced an object that
                is not a usable transport. The registration is dropped, so
                later lookups report the channel as unregistered.
        """
        registration = self._channels.get(name)
        if registration is None:
            raise ObjectNotFoundError(f"Channel '{name}' is not registered.")

        if registration.instance is None:
            instance = registration.factory()
            missing = missing_capabilities(instance)
            if missing:
                self.unregister(name)
                logger.error("Channel transport rejected, unregistered", channel=name, missing=missing)
                raise ValidationError({"channels": [f"Channel '{name}' transport must implement: {', '.join(missing)}"]})
            registration.instance = instance
            logger.debug("Channel transport instantiated", channel=name)

        return registration.instance

    def names(self) -> list[str]:
        return list(self._channels)

    def all(self) -> dict[str, ChannelRegistration]:
        return dict(self._channels)

    def custom_names(self) -> list[str]:
        return [name for name, registration in self._channels.items() if not registration.builtin]

    def clear(self) -> None:
        self._channels.clear()

    # -------------------------------------------------------------------
    # Boot
    # -------------------------------------------------------------------
    def register_from_settings(self, settings) -> None:
        """Register the built-in channels plus every enabled configured one.

        An invalid channel is logged and skipped; it never aborts boot.
        """
        for name, channel_cls in BUILTIN_CHANNELS.items():
            self.register(name, channel_cls, description=f"Built-in {name} channel", builtin=True)

        for name, channel in settings.channels.items():
            if not channel.enabled:
                logger.info("Channel disabled in configuration, skipping", channel=name)
                continue
            try:
                self.register(name, channel.driver, description=channel.description)
            except ValidationError as exc:
                logger.error(
                    "Channel registration failed",
                    channel=name,
                    error=str(exc.messages),
                )
