"""
Maintenance Store
Repository interface the generator talks to, plus the SQLAlchemy implementation.
"""

from abc import ABC, abstractmethod
from datetime import datetime, time
from typing import List, Optional
from sqlalchemy.exc import IntegrityError
from fire_inventory import db
from fire_inventory.data.core.equipment import Equipment
from fire_inventory.data.maintenance.maintenance_templates import MaintenanceTemplate
from fire_inventory.data.maintenance.maintenance_records import (
    MaintenanceRecord,
    MAINTENANCE_STATUS_PENDING,
)
from fire_inventory.logger import get_logger

logger = get_logger("fire_inventory.buisness.maintenance.generation.store")


class DuplicateMaintenanceRecordError(Exception):
    """A record for the same equipment, template and day already exists"""

    def __init__(self, equipment_id, template_id, due_date):
        self.equipment_id = equipment_id
        self.template_id = template_id
        self.due_date = due_date
        super().__init__(
            f"Maintenance record for equipment {equipment_id}, template {template_id} "
            f"on {due_date.date().isoformat()} already exists"
        )


def day_bounds(value: datetime):
    """Inclusive start and end of the calendar day containing value"""
    day = value.date()
    return datetime.combine(day, time.min), datetime.combine(day, time.max)


class MaintenanceStore(ABC):
    """Abstract persistence boundary for maintenance generation"""

    @abstractmethod
    def load_equipment(self) -> List:
        """
        Load every equipment item considered by a run.

        Returns:
            Objects exposing id, name, category_id, last_check_date and purchase_date
        """
        pass

    @abstractmethod
    def load_templates(self) -> List:
        """
        Load every maintenance template.

        Returns:
            Objects exposing id, name, category_id, interval_months and responsible_person_id
        """
        pass

    @abstractmethod
    def record_exists_on_day(
        self,
        equipment_id: int,
        template_id: int,
        due_date: datetime
    ) -> bool:
        """
        Check whether a record exists for the pair on the calendar day of due_date.

        Args:
            equipment_id: Equipment ID
            template_id: Maintenance template ID
            due_date: Candidate due date

        Returns:
            True if a record's due_date falls within that day (bounds inclusive)
        """
        pass

    @abstractmethod
    def insert_pending_record(
        self,
        equipment_id: int,
        template_id: int,
        due_date: datetime,
        performed_by_id: Optional[int]
    ) -> Optional[int]:
        """
        Persist a new pending maintenance record.

        Returns:
            ID of the new record (None if the store does not assign one)

        Raises:
            DuplicateMaintenanceRecordError: If the store rejects the row as a duplicate
        """
        pass


class SqlAlchemyMaintenanceStore(MaintenanceStore):
    """MaintenanceStore backed by the application's SQLAlchemy session"""

    def __init__(self, session=None):
        self.session = session or db.session

    def load_equipment(self) -> List[Equipment]:
        return self.session.query(Equipment).order_by(Equipment.id).all()

    def load_templates(self) -> List[MaintenanceTemplate]:
        return self.session.query(MaintenanceTemplate).order_by(MaintenanceTemplate.id).all()

    def record_exists_on_day(self, equipment_id, template_id, due_date) -> bool:
        start_of_day, end_of_day = day_bounds(due_date)
        try:
            existing = (
                self.session.query(MaintenanceRecord.id)
                .filter(
                    MaintenanceRecord.equipment_id == equipment_id,
                    MaintenanceRecord.template_id == template_id,
                    MaintenanceRecord.due_date >= start_of_day,
                    MaintenanceRecord.due_date <= end_of_day
                )
                .first()
            )
        except Exception:
            self.session.rollback()
            raise
        return existing is not None

    def insert_pending_record(self, equipment_id, template_id, due_date, performed_by_id) -> Optional[int]:
        record = MaintenanceRecord(
            equipment_id=equipment_id,
            template_id=template_id,
            due_date=due_date,
            status=MAINTENANCE_STATUS_PENDING,
            performed_by_id=performed_by_id
        )
        try:
            self.session.add(record)
            self.session.commit()
        except IntegrityError as e:
            self.session.rollback()
            if 'uq_maintenance_records_equipment_template_day' in str(e.orig) or 'UNIQUE' in str(e.orig).upper():
                raise DuplicateMaintenanceRecordError(equipment_id, template_id, due_date) from e
            raise
        except Exception:
            self.session.rollback()
            raise

        logger.debug(f"Created maintenance record {record.id} for equipment {equipment_id}, template {template_id}")
        return record.id
