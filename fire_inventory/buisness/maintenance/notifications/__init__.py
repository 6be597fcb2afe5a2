"""
Maintenance notification business logic
"""

from fire_inventory.buisness.maintenance.notifications.notification_sender import (
    MaintenanceDigest,
    NotificationSender,
    LoggingNotificationSender,
)
from fire_inventory.buisness.maintenance.notifications.upcoming_maintenance_notifier import (
    UpcomingMaintenanceNotifier,
)

__all__ = [
    'MaintenanceDigest',
    'NotificationSender',
    'LoggingNotificationSender',
    'UpcomingMaintenanceNotifier',
]
