"""Event listener — the hook boundary between a host event bus and the mapper.

The host subscribes ``listener.notify`` for every event in
``listener.event_types()``. Failures are logged and suppressed here so one
broken mapping never stops the host's other listeners.
"""

import structlog
from notification_management.mapping.mapper import EventNotificationMapper

logger = structlog.get_logger(__name__)


class EventNotificationListener:
    def __init__(self, mapper: EventNotificationMapper, mappings: dict):
        self.mapper = mapper
        # Disabled rules are never bound
        self.mappings = {event_type: rule for event_type, rule in mappings.items() if rule.enabled is not False}

    def event_types(self) -> list:
        return list(self.mappings)

    def rule_for(self, event):
        """Rule bound to the event's class, or to its class name."""
        event_cls = type(event)
        rule = self.mappings.get(event_cls)
        if rule is None:
            rule = self.mappings.get(event_cls.__name__)
        return rule

    def listens_to(self, event) -> bool:
        return self.rule_for(event) is not None

    def notify(self, event) -> int:
        """Handle ``event``; never raises."""
        rule = self.rule_for(event)
        if rule is None:
            return 0

        try:
            return self.mapper.handle(event, rule)
        except Exception as exc:
            logger.exception(
                "Event notification mapping failed",
                event_name=type(event).__name__,
                notification_type=rule.notification_type,
                error=str(exc),
            )
            return 0

    __call__ = notify
