"""
Notification Sender
Boundary between the notification job and whatever transport delivers the
digest. Email delivery is handled outside this application; the default
sender writes each digest to the application log.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Dict, List
from fire_inventory.logger import get_logger

logger = get_logger("fire_inventory.buisness.maintenance.notifications")


@dataclass
class MaintenanceDigest:
    """All upcoming maintenance of one responsible person"""
    recipient_email: str
    recipient_name: str
    sender: str
    subject: str
    days_interval: int
    items: List[Dict] = field(default_factory=list)


class NotificationSender(ABC):
    """Delivers maintenance digests"""

    @abstractmethod
    def send(self, digest: MaintenanceDigest) -> None:
        """
        Deliver one digest.

        Raises:
            Exception: Any delivery failure; the caller records it per recipient
        """
        pass


class LoggingNotificationSender(NotificationSender):
    """Writes digests to the log instead of delivering them"""

    def send(self, digest: MaintenanceDigest) -> None:
        logger.info(
            f"Maintenance digest for {digest.recipient_name} <{digest.recipient_email}>: "
            f"{len(digest.items)} item(s), subject '{digest.subject}'"
        )
        for item in digest.items:
            logger.debug(
                f"  {item['equipment_name']} ({item['inventory_number'] or '-'}): "
                f"{item['template_name']} due {item['due_date']}"
            )
