"""Delivery log store — append and query audit entries."""

from notification_management.delivery.log import DeliveryLog
from notification_management.recipient import recipient_key
from protean.utils.globals import current_domain


class DeliveryLogStore:
    def _repo(self):
        return current_domain.repository_for(DeliveryLog)

    def append(self, entry: DeliveryLog) -> DeliveryLog:
        self._repo().add(entry)
        return entry

    def query(self, recipient, notification_type=None, status=None, limit=50) -> list[DeliveryLog]:
        """Entries for a recipient, newest first."""
        criteria = {"recipient_id": recipient_key(recipient)}
        if notification_type:
            criteria["notification_type"] = notification_type
        if status:
            criteria["status"] = status

        return self._repo()._dao.query.filter(**criteria).order_by("-created_at").limit(limit).all().items
