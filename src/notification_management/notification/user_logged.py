"""User logged notification — sent when a new login is detected."""

from notification_management.notification.notification import Notification


class UserLoggedNotification(Notification):
    notification_type = "user.logged"

    def to_mail(self, recipient) -> dict:
        name = getattr(recipient, "name", None) or "there"
        return {
            "subject": "New Login Detected",
            "greeting": f"Hello {name}!",
            "lines": [
                "We detected a new login to your account.",
                f"IP Address: {self.data.get('ip', 'Unknown')}",
                f"Browser: {self.data.get('user_agent', 'Unknown')}",
                f"Location: {self.data.get('location') or 'Unknown'}",
                f"Time: {self.data.get('logged_at', 'Unknown')}",
                "If this wasn't you, please secure your account immediately.",
            ],
            "action": {"text": "View Account Activity", "url": "/account/security"},
        }

    def to_database(self, recipient) -> dict:
        return {
            "type": self.notification_type,
            "title": "New Login Detected",
            "message": f"A new login was detected from {self.data.get('ip', 'an unknown address')}",
            "ip": self.data.get("ip"),
            "user_agent": self.data.get("user_agent"),
            "location": self.data.get("location"),
            "logged_at": self.data.get("logged_at"),
        }

    def to_dict(self, recipient) -> dict:
        return {"type": self.notification_type, "login_details": self.data}
