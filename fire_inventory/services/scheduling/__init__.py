"""
Scheduling services
"""

from fire_inventory.services.scheduling.cron_job_log_service import CronJobLogService

__all__ = ['CronJobLogService']
