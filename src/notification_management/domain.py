"""Notification Management bounded context — preference-aware dispatch.

Decides which delivery channels a recipient receives a notification
through, based on per-recipient, per-type, per-channel opt-in/opt-out
preferences with configured fallbacks. Maps host events to notifications
and keeps an audit trail of every delivery attempt.
"""

import structlog
from protean.domain import Domain

notification_management = Domain(name="notification_management")

logger = structlog.get_logger(__name__)
