"""
Upcoming Maintenance Notifier
Collects pending maintenance due within the configured window and sends one
digest per responsible person.
"""

from typing import Dict, Optional
from datetime import datetime, timedelta
from fire_inventory.buisness.core.settings_provider import (
    SettingsProvider,
    EMAIL_SETTINGS_KEY,
    EMAIL_SENDER_KEY,
)
from fire_inventory.buisness.maintenance.notifications.notification_sender import (
    MaintenanceDigest,
    NotificationSender,
)
from fire_inventory.services.maintenance.upcoming_maintenance_service import UpcomingMaintenanceService
from fire_inventory.utils.logging_sanitizer import sanitize_exception_message
from fire_inventory.logger import get_logger

logger = get_logger("fire_inventory.buisness.maintenance.notifications")

DEFAULT_UPCOMING_DAYS_INTERVAL = 7
DEFAULT_SENDER = 'Maintenance notifications <noreply@localhost>'


class UpcomingMaintenanceNotifier:
    """
    Builds and sends upcoming-maintenance digests.

    Settings read on every run (key "email_settings"):
    - upcoming_days_interval: window size in days (default 7)
    - upcoming_notifications_enabled: master switch (default True)
    and (key "email_sender"):
    - from_address: sender shown on the digest
    """

    def __init__(
        self,
        settings: SettingsProvider,
        sender: NotificationSender,
        query_service: Optional[UpcomingMaintenanceService] = None
    ):
        self.settings = settings
        self.sender = sender
        self.query_service = query_service or UpcomingMaintenanceService()

    def notify(self, now: Optional[datetime] = None) -> Dict:
        """
        Send digests for pending maintenance due between now and now + window.

        Returns:
            Summary with per-recipient status, skipped record count and overdue count
        """
        now = now or datetime.utcnow()

        if not self.settings.get_bool(EMAIL_SETTINGS_KEY, 'upcoming_notifications_enabled', True):
            logger.info("Upcoming maintenance notifications are disabled")
            return {
                'success': True,
                'message': 'Upcoming maintenance notifications are disabled',
                'details': [],
                'skipped': 0,
                'overdue': 0,
            }

        days_interval = self.settings.get_int(
            EMAIL_SETTINGS_KEY, 'upcoming_days_interval', DEFAULT_UPCOMING_DAYS_INTERVAL
        )
        from_address = self.settings.get_section(EMAIL_SENDER_KEY).get('from_address') or DEFAULT_SENDER

        records = self.query_service.get_pending_due_between(now, now + timedelta(days=days_interval))
        overdue = len(self.query_service.get_overdue(now))
        logger.info(f"Found {len(records)} upcoming maintenance tasks within {days_interval} days")

        digests = {}
        skipped = 0
        for record in records:
            person = record.template.responsible_person if record.template else None
            if person is None or not person.email:
                logger.debug(f"Skipping notification for maintenance {record.id} - no responsible person email")
                skipped += 1
                continue

            if person.email not in digests:
                digests[person.email] = MaintenanceDigest(
                    recipient_email=person.email,
                    recipient_name=person.full_name,
                    sender=from_address,
                    subject=f"Maintenance tasks in the next {days_interval} days",
                    days_interval=days_interval
                )
            digests[person.email].items.append({
                'record_id': record.id,
                'equipment_name': record.equipment.name,
                'inventory_number': record.equipment.inventory_number,
                'template_name': record.template.name,
                'due_date': record.due_date.date().isoformat(),
            })

        details = []
        for email, digest in digests.items():
            try:
                self.sender.send(digest)
                status = 'sent'
                error = None
            except Exception as e:
                logger.error(f"Error sending maintenance digest to {email}: {e}")
                status = 'error'
                error = sanitize_exception_message(e)
            details.append({
                'email': email,
                'maintenance_count': len(digest.items),
                'status': status,
                'error': error,
            })

        sent = sum(1 for d in details if d['status'] == 'sent')
        return {
            'success': sent == len(details),
            'message': f"Sent {sent} of {len(details)} maintenance notifications",
            'details': details,
            'skipped': skipped,
            'overdue': overdue,
        }
