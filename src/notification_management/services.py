"""Service composition — builds the dispatch stack for one process.

Nothing in this package is a module-level singleton; the host builds the
services once at startup and passes them to whatever needs them (the
FastAPI app, its event bus adapter, background jobs).
"""

from dataclasses import dataclass

import structlog
from notification_management.channel.registry import ChannelRegistry
from notification_management.channel.transport import ChannelTransport
from notification_management.config import NotificationSettings
from notification_management.delivery.dispatcher import NotificationDispatcher
from notification_management.mapping.listener import EventNotificationListener
from notification_management.mapping.mapper import EventNotificationMapper
from notification_management.preference.resolver import PreferenceResolver

logger = structlog.get_logger(__name__)


@dataclass
class NotificationServices:
    settings: NotificationSettings
    registry: ChannelRegistry
    resolver: PreferenceResolver
    transport: ChannelTransport
    dispatcher: NotificationDispatcher
    mapper: EventNotificationMapper
    listener: EventNotificationListener


def build_services(settings: NotificationSettings | None = None) -> NotificationServices:
    settings = settings or NotificationSettings()

    registry = ChannelRegistry()
    registry.register_from_settings(settings)

    resolver = PreferenceResolver(settings)
    transport = ChannelTransport(registry)
    dispatcher = NotificationDispatcher(settings, registry, resolver=resolver, transport=transport)
    mapper = EventNotificationMapper(dispatcher)
    listener = EventNotificationListener(mapper, settings.event_notifications)

    logger.info(
        "Notification services ready",
        channels=registry.names(),
        event_mappings=len(listener.event_types()),
    )

    return NotificationServices(
        settings=settings,
        registry=registry,
        resolver=resolver,
        transport=transport,
        dispatcher=dispatcher,
        mapper=mapper,
        listener=listener,
    )
