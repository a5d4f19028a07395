"""Tests for the Notification base class and UserLoggedNotification."""

from notification_management.notification.notification import Notification, guess_notification_type
from notification_management.notification.user_logged import UserLoggedNotification


class OrderShippedNotification(Notification):
    pass


class MailOnlyNotification(Notification):
    notification_type = "security.alert"
    force_channels = ("mail",)


class InAppNotification(Notification):
    notification_type = "feed.update"
    allowed_channels = ("database", "broadcast")


class Recipient:
    name = "Alice"


class TestNotificationType:
    def test_guess_from_class_name(self):
        assert guess_notification_type("OrderShippedNotification") == "order.shipped"

    def test_guess_without_suffix(self):
        assert guess_notification_type("PasswordReset") == "password.reset"

    def test_explicit_type_wins(self):
        assert MailOnlyNotification().get_notification_type() == "security.alert"

    def test_guessed_type_on_instance(self):
        assert OrderShippedNotification().get_notification_type() == "order.shipped"


class TestVia:
    def test_passes_channels_through(self):
        assert OrderShippedNotification().via(["database", "mail"]) == ["database", "mail"]

    def test_force_channels_replace_preferences(self):
        assert MailOnlyNotification().via(["database"]) == ["mail"]

    def test_allowed_channels_intersect(self):
        assert InAppNotification().via(["database", "mail"]) == ["database"]

    def test_allowed_channels_can_leave_nothing(self):
        assert InAppNotification().via(["mail"]) == []

    def test_channel_defaults_are_immutable(self):
        assert Notification.force_channels == ()
        assert Notification.allowed_channels == ()
        assert OrderShippedNotification.force_channels is Notification.force_channels
        assert isinstance(MailOnlyNotification().via(["database"]), list)


class TestPayload:
    def test_falls_back_to_to_dict(self):
        notification = OrderShippedNotification({"order_id": "o-1"})
        payload = notification.payload_for("sms", Recipient())
        assert payload == {"type": "order.shipped", "data": {"order_id": "o-1"}}

    def test_data_is_copied(self):
        data = {"order_id": "o-1"}
        notification = OrderShippedNotification(data)
        data["order_id"] = "changed"
        assert notification.data["order_id"] == "o-1"


class TestUserLoggedNotification:
    def setup_method(self):
        self.notification = UserLoggedNotification(
            {"ip": "10.0.0.1", "user_agent": "Firefox", "logged_at": "2024-01-01T10:00:00"}
        )

    def test_mail_payload(self):
        payload = self.notification.payload_for("mail", Recipient())
        assert payload["subject"] == "New Login Detected"
        assert payload["greeting"] == "Hello Alice!"
        assert "IP Address: 10.0.0.1" in payload["lines"]
        assert "Location: Unknown" in payload["lines"]
        assert payload["action"]["url"] == "/account/security"

    def test_database_payload(self):
        payload = self.notification.payload_for("database", Recipient())
        assert payload["type"] == "user.logged"
        assert payload["ip"] == "10.0.0.1"
        assert payload["location"] is None

    def test_other_channels_get_login_details(self):
        payload = self.notification.payload_for("broadcast", Recipient())
        assert payload == {"type": "user.logged", "login_details": self.notification.data}
