"""Event-notification mapper — turns a host event into notification sends.

Stateless; one ``handle`` call per (event, rule):

1. disabled rule → stop
2. condition false → stop
3. extract notifiable(s) from the event
4. nothing extracted (None / empty collection) → stop
5. extract data (mapping, or {})
6. fan out ``send_by_type`` to every ``Notifiable`` in order

A missing ``notification_type`` is a configuration error, raised once a
notifiable has been found.
"""

from collections.abc import Iterable, Mapping

import structlog
from notification_management.mapping.rules import EventMappingRule
from notification_management.recipient import Notifiable
from protean.exceptions import ConfigurationError

logger = structlog.get_logger(__name__)


class EventNotificationMapper:
    def __init__(self, dispatcher):
        self.dispatcher = dispatcher

    def handle(self, event, rule) -> int:
        """Dispatch notifications for ``event`` according to ``rule``.

        ``rule`` may be an ``EventMappingRule`` or its raw dict form.

        Returns:
            Number of recipients a send was issued for.
        """
        if not isinstance(rule, EventMappingRule):
            rule = EventMappingRule.model_validate(rule)

        if rule.enabled is False:
            return 0

        if rule.condition is not None and not rule.condition(event):
            logger.debug("Mapping condition not met", event_name=type(event).__name__)
            return 0

        notifiables = rule.notifiable.extract(event) if rule.notifiable is not None else None
        if _is_collection(notifiables):
            notifiables = list(notifiables)
        if _is_empty(notifiables):
            logger.debug("No notifiable extracted from event", event_name=type(event).__name__)
            return 0

        data = self.extract_data(event, rule)

        if not rule.notification_type:
            raise ConfigurationError("notification_type is required in event notification mapping.")

        sent = 0
        for notifiable in _as_sequence(notifiables):
            if not isinstance(notifiable, Notifiable):
                logger.warning(
                    "Extracted object is not notifiable, skipping",
                    event_name=type(event).__name__,
                    notifiable=type(notifiable).__name__,
                )
                continue
            self.dispatcher.send_by_type(notifiable, rule.notification_type, data)
            sent += 1

        return sent

    def extract_data(self, event, rule: EventMappingRule) -> dict:
        if rule.data is None:
            return {}
        result = rule.data.extract(event)
        return dict(result) if isinstance(result, Mapping) else {}


def _is_collection(value) -> bool:
    """Any iterable of recipients; strings, mappings and recipients are single values."""
    if isinstance(value, str | bytes | Mapping) or isinstance(value, Notifiable):
        return False
    return isinstance(value, Iterable)


def _is_empty(value) -> bool:
    return value is None or (isinstance(value, list) and not value)


def _as_sequence(value) -> list:
    return value if isinstance(value, list) else [value]
