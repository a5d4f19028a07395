"""Shared BDD fixtures and step definitions for notification dispatch."""

import pytest
from pytest_bdd import given, parsers, then


@pytest.fixture()
def outcome():
    """Container for the result (or error) of the last action."""
    return {"channels": None, "exc": None}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(
    parsers.cfparse('a recipient "{recipient_id}" with email "{email}"'),
    target_fixture="recipient",
)
def _recipient(make_user, recipient_id, email):
    return make_user(recipient_id, email=email)


@given(parsers.cfparse('the recipient enables "{channel}" for "{notification_type}"'))
def enable_channel(recipient, channel, notification_type):
    recipient.enable_notification_channel(notification_type, channel)


@given(parsers.cfparse('the recipient disables "{channel}" for "{notification_type}"'))
def disable_channel(recipient, channel, notification_type):
    recipient.disable_notification_channel(notification_type, channel)


@given(parsers.cfparse('"{notification_type}" defaults to every enabled channel'))
def wildcard_default(settings, notification_type):
    settings.enabled_notifications[notification_type] = ["*"]


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse('the resolved channels are "{channels}"'))
def resolved_channels(outcome, channels):
    assert outcome["channels"] == channels.split(",")


@then("no channels are resolved")
def no_channels(outcome):
    assert outcome["channels"] == []
