"""
Scheduled job models package
"""

from .cron_job_logs import CronJobLog

__all__ = [
    'CronJobLog',
]
