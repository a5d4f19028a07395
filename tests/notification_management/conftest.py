import pytest
from notification_management.config import NotificationSettings
from notification_management.recipient import HasNotificationPreferences
from notification_management.services import build_services
from protean import current_domain
from protean.integrations.pytest import DomainFixture


@pytest.fixture(scope="session")
def notification_bed():
    from notification_management.domain import notification_management

    bed = DomainFixture(notification_management)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(notification_bed):
    with notification_bed.domain_context():
        yield

        for _, provider in current_domain.providers.items():
            provider._data_reset()
        current_domain.event_store.store._data_reset()


class User(HasNotificationPreferences):
    """Minimal host entity used as a notifiable recipient."""

    def __init__(self, id, name="Alice", email=None, phone=None, dispatcher=None):
        self.id = id
        self.name = name
        self.email = email if email is not None else f"{name.lower()}@example.com"
        self.phone = phone
        self.notification_dispatcher = dispatcher

    def __repr__(self):
        return f"User({self.id!r})"


@pytest.fixture()
def settings():
    return NotificationSettings(
        enabled_channels=["mail", "database"],
        enabled_notifications={"user.logged": ["mail"]},
    )


@pytest.fixture()
def services(settings):
    return build_services(settings)


@pytest.fixture()
def dispatcher(services):
    return services.dispatcher


@pytest.fixture()
def make_user(dispatcher):
    def _make(id="user-1", **kwargs):
        kwargs.setdefault("dispatcher", dispatcher)
        return User(id, **kwargs)

    return _make
