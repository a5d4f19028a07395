"""Delivery channels — ports, built-in adapters and the channel registry.

Built-in channels are in-memory recording adapters; production transports
(SMTP, web push, Twilio, ...) are registered as custom channels through
``NotificationSettings.channels``.
"""

NATIVE_CHANNELS = ("mail", "database", "broadcast")
