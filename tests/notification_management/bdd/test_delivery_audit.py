"""BDD tests for the delivery audit trail."""

from notification_management.channel.port import TransportFailure
from pytest_bdd import given, parsers, scenarios, then, when

scenarios("features/delivery_audit.feature")


@given(parsers.cfparse('the "{channel}" channel fails with "{reason}"'))
def failing_channel(services, channel, reason):
    services.registry.get(channel).configure(should_succeed=False, failure_reason=reason)


@when(parsers.cfparse('a "{notification_type}" notification is sent'))
def send_notification(dispatcher, recipient, outcome, notification_type):
    try:
        outcome["channels"] = dispatcher.send_by_type(recipient, notification_type, {"ip": "10.0.0.1"})
    except TransportFailure as exc:
        outcome["exc"] = exc


@then("the delivery fails")
def delivery_fails(outcome):
    assert isinstance(outcome["exc"], TransportFailure)


@then(parsers.cfparse('the history has {count:d} "{status}" entry'))
@then(parsers.cfparse('the history has {count:d} "{status}" entries'))
def history_entries(recipient, count, status):
    history = recipient.notification_history()
    assert len(history) == count
    assert all(entry.status == status for entry in history)


@then(parsers.cfparse('every failed entry reports "{reason}"'))
def failed_reason(recipient, reason):
    assert all(entry.error_message == reason for entry in recipient.notification_history())
