"""
Job Registry
Maps each JobKind to exactly one handler.
"""

from typing import Dict, List, Optional
from fire_inventory.buisness.scheduling.jobs import (
    BaseJob,
    JobKind,
    MaintenanceAutoGeneratorJob,
    UpcomingMaintenanceNotificationJob,
)
from fire_inventory.buisness.core.settings_provider import DatabaseSettingsProvider, SettingsProvider
from fire_inventory.buisness.maintenance.generation import MaintenanceGenerator
from fire_inventory.buisness.maintenance.notifications import (
    LoggingNotificationSender,
    NotificationSender,
    UpcomingMaintenanceNotifier,
)


class UnknownJobError(Exception):
    """Raised for a job name or kind without a registered handler"""

    def __init__(self, job_name):
        self.job_name = job_name
        super().__init__(f"Unknown job: {job_name}")


def parse_job_name(job_name: str) -> JobKind:
    """
    Resolve a job name as used in URLs and on the command line.

    Raises:
        UnknownJobError: If the name is not a known job kind
    """
    try:
        return JobKind(job_name)
    except ValueError:
        raise UnknownJobError(job_name)


class JobRegistry:
    def __init__(self):
        self._handlers: Dict[JobKind, BaseJob] = {}

    def register(self, job: BaseJob):
        if not isinstance(job.kind, JobKind):
            raise UnknownJobError(job.kind)
        if job.kind in self._handlers:
            raise ValueError(f"Job {job.kind.value} is already registered")
        self._handlers[job.kind] = job

    def handler_for(self, kind) -> BaseJob:
        if isinstance(kind, str):
            kind = parse_job_name(kind)
        try:
            return self._handlers[kind]
        except KeyError:
            raise UnknownJobError(getattr(kind, 'value', kind))

    def kinds(self) -> List[JobKind]:
        """Registered kinds in declaration order"""
        return [kind for kind in JobKind if kind in self._handlers]

    def validate(self):
        """Every declared kind must have a handler"""
        missing = [kind.value for kind in JobKind if kind not in self._handlers]
        if missing:
            raise ValueError(f"No handler registered for: {', '.join(missing)}")


def build_default_registry(
    settings: Optional[SettingsProvider] = None,
    sender: Optional[NotificationSender] = None,
    generator: Optional[MaintenanceGenerator] = None
) -> JobRegistry:
    registry = JobRegistry()
    registry.register(MaintenanceAutoGeneratorJob(generator))
    registry.register(UpcomingMaintenanceNotificationJob(
        UpcomingMaintenanceNotifier(
            settings or DatabaseSettingsProvider(),
            sender or LoggingNotificationSender()
        )
    ))
    registry.validate()
    return registry
