"""
Scheduled Jobs
The closed set of job kinds and the handler behind each one.
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Dict, Optional
from datetime import datetime
from fire_inventory.buisness.maintenance.generation import GenerationMode, MaintenanceGenerator
from fire_inventory.buisness.maintenance.notifications import UpcomingMaintenanceNotifier


class JobKind(Enum):
    MAINTENANCE_AUTO_GENERATOR = 'maintenance-auto-generator'
    UPCOMING_MAINTENANCE_NOTIFICATIONS = 'maintenance-notifications'


class BaseJob(ABC):
    """One runnable job; run() returns the details stored in the run log"""

    kind: JobKind

    @abstractmethod
    def run(self, now: Optional[datetime] = None) -> Dict:
        pass

    def error_summary(self, details: Dict) -> Optional[str]:
        """Message for a run that completed but recorded failures"""
        return None


class MaintenanceAutoGeneratorJob(BaseJob):
    """Generates every missing maintenance record within the 180 day horizon"""

    kind = JobKind.MAINTENANCE_AUTO_GENERATOR

    def __init__(self, generator: Optional[MaintenanceGenerator] = None):
        self.generator = generator or MaintenanceGenerator()

    def run(self, now=None):
        result = self.generator.generate(GenerationMode.ALL_MISSING, now=now)
        return result.to_dict()

    def error_summary(self, details):
        if details.get('errors'):
            return f"{details['errors']} maintenance records could not be created"
        return None


class UpcomingMaintenanceNotificationJob(BaseJob):
    """Sends the upcoming-maintenance digests"""

    kind = JobKind.UPCOMING_MAINTENANCE_NOTIFICATIONS

    def __init__(self, notifier: UpcomingMaintenanceNotifier):
        self.notifier = notifier

    def run(self, now=None):
        return self.notifier.notify(now=now)

    def error_summary(self, details):
        failed = [d['email'] for d in details.get('details', []) if d.get('status') == 'error']
        if failed:
            return f"Notifications failed for {len(failed)} recipient(s)"
        return None
