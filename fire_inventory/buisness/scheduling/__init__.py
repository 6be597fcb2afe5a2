"""
Scheduled job business logic
"""

from fire_inventory.buisness.scheduling.jobs import (
    JobKind,
    BaseJob,
    MaintenanceAutoGeneratorJob,
    UpcomingMaintenanceNotificationJob,
)
from fire_inventory.buisness.scheduling.job_registry import (
    JobRegistry,
    UnknownJobError,
    parse_job_name,
    build_default_registry,
)
from fire_inventory.buisness.scheduling.job_runner import JobRunner, JobOutcome, RUN_ALL_JOB_NAME

__all__ = [
    'JobKind',
    'BaseJob',
    'MaintenanceAutoGeneratorJob',
    'UpcomingMaintenanceNotificationJob',
    'JobRegistry',
    'UnknownJobError',
    'parse_job_name',
    'build_default_registry',
    'JobRunner',
    'JobOutcome',
    'RUN_ALL_JOB_NAME',
]
