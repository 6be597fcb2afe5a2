"""
Upcoming Maintenance Service
Read-side queries over pending maintenance records.
"""

from typing import List
from datetime import datetime
from sqlalchemy.orm import joinedload
from fire_inventory.data.maintenance.maintenance_records import (
    MaintenanceRecord,
    MAINTENANCE_STATUS_PENDING,
)
from fire_inventory.data.maintenance.maintenance_templates import MaintenanceTemplate


class UpcomingMaintenanceService:
    """
    Service for upcoming maintenance queries.

    Provides query methods for:
    - Pending records due inside a window
    - Pending records already past their due date
    """

    @staticmethod
    def get_pending_due_between(start: datetime, end: datetime) -> List[MaintenanceRecord]:
        """
        Get pending records with start <= due_date <= end, earliest first.

        Equipment, template and the template's responsible person are loaded eagerly.
        """
        return (
            MaintenanceRecord.query
            .options(
                joinedload(MaintenanceRecord.equipment),
                joinedload(MaintenanceRecord.template).joinedload(MaintenanceTemplate.responsible_person)
            )
            .filter(
                MaintenanceRecord.status == MAINTENANCE_STATUS_PENDING,
                MaintenanceRecord.due_date >= start,
                MaintenanceRecord.due_date <= end
            )
            .order_by(MaintenanceRecord.due_date)
            .all()
        )

    @staticmethod
    def get_overdue(now: datetime) -> List[MaintenanceRecord]:
        """Get pending records whose due date lies before now"""
        return (
            MaintenanceRecord.query
            .filter(
                MaintenanceRecord.status == MAINTENANCE_STATUS_PENDING,
                MaintenanceRecord.due_date < now
            )
            .order_by(MaintenanceRecord.due_date)
            .all()
        )
