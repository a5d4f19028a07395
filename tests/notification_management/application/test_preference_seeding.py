"""Tests for seeding and bulk-toggling a recipient's preferences."""

import pytest
from notification_management.config import NotificationSettings
from notification_management.services import build_services


@pytest.fixture()
def seeded_services():
    return build_services(
        NotificationSettings(
            enabled_channels=["mail", "database"],
            enabled_notifications={
                "user.logged": ["mail"],
                "marketing.promo": ["*"],
                "digest.weekly": [],
            },
        )
    )


def _triples(dispatcher, recipient):
    return {(p.notification_type, p.channel_name, p.enabled) for p in dispatcher.preferences_for(recipient)}


class TestInitializeDefaults:
    def test_seeds_configured_defaults_with_wildcard_expanded(self, seeded_services):
        dispatcher = seeded_services.dispatcher

        dispatcher.initialize_default_preferences("user-1")

        assert _triples(dispatcher, "user-1") == {
            ("user.logged", "mail", True),
            ("marketing.promo", "mail", True),
            ("marketing.promo", "database", True),
        }

    def test_existing_rows_win(self, seeded_services):
        dispatcher = seeded_services.dispatcher
        dispatcher.disable_channel("user-1", "user.logged", "mail")

        dispatcher.initialize_default_preferences("user-1")

        assert ("user.logged", "mail", False) in _triples(dispatcher, "user-1")

    def test_running_twice_creates_no_duplicates(self, seeded_services):
        dispatcher = seeded_services.dispatcher
        dispatcher.initialize_default_preferences("user-1")
        dispatcher.initialize_default_preferences("user-1")
        assert len(dispatcher.preferences_for("user-1")) == 3


class TestBulkToggles:
    def test_enable_default_channels_for(self, dispatcher):
        dispatcher.enable_default_channels_for("user-1", "order.shipped")
        assert dispatcher.active_channels_for("user-1", "order.shipped") == ["database", "mail"]

    def test_disable_all_channels_for(self, dispatcher):
        dispatcher.set_preferences("user-1", {"order.shipped": {"mail": True, "sms": True}})

        dispatcher.disable_all_channels_for("user-1", "order.shipped")

        assert _triples(dispatcher, "user-1") == {
            ("order.shipped", "mail", False),
            ("order.shipped", "sms", False),
        }

    def test_disable_all_leaves_other_types(self, dispatcher):
        dispatcher.set_preferences("user-1", {"order.shipped": {"mail": True}, "user.logged": {"mail": True}})
        dispatcher.disable_all_channels_for("user-1", "order.shipped")
        assert dispatcher.wants_notification_via("user-1", "user.logged", "mail") is True


class TestSeedingScenarios:
    def test_new_recipient_gets_one_login_row(self, dispatcher):
        dispatcher.initialize_default_preferences("user-1")

        assert _triples(dispatcher, "user-1") == {("user.logged", "mail", True)}
        assert dispatcher.active_channels_for("user-1", "user.logged") == ["mail"]

    def test_wildcard_seeds_every_global_channel(self):
        services = build_services(
            NotificationSettings(
                enabled_channels=["mail", "database", "sms"],
                enabled_notifications={"marketing.promo": ["*"]},
            )
        )
        dispatcher = services.dispatcher

        dispatcher.initialize_default_preferences("user-1")

        assert _triples(dispatcher, "user-1") == {
            ("marketing.promo", "mail", True),
            ("marketing.promo", "database", True),
            ("marketing.promo", "sms", True),
        }
        assert dispatcher.active_channels_for("user-1", "marketing.promo") == ["database", "mail", "sms"]
