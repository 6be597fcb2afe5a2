"""
Cron Job Log Service
Monitoring queries over the job run log.
"""

from typing import Dict, List, Optional
from fire_inventory.data.scheduling.cron_job_logs import (
    CronJobLog,
    JOB_STATUS_RUNNING,
    JOB_STATUS_SUCCESS,
    JOB_STATUS_ERROR,
    JOB_STATUS_PARTIAL_SUCCESS,
)

DEFAULT_LOG_LIMIT = 50


class CronJobLogService:
    """Service for run log listing and per-job statistics"""

    @staticmethod
    def get_logs(job_name: Optional[str] = None, limit: int = DEFAULT_LOG_LIMIT) -> List[CronJobLog]:
        """Latest run logs, newest first, optionally for one job"""
        query = CronJobLog.query
        if job_name:
            query = query.filter(CronJobLog.job_name == job_name)
        return (
            query
            .order_by(CronJobLog.started_at.desc(), CronJobLog.id.desc())
            .limit(limit)
            .all()
        )

    @staticmethod
    def get_job_stats() -> Dict[str, Dict]:
        """
        Per job name: total runs, count per status and the most recent run.

        Returns:
            {job_name: {total, success, error, running, partial_success, last_run, last_status}}
        """
        stats = {}
        logs = CronJobLog.query.order_by(CronJobLog.started_at.desc(), CronJobLog.id.desc()).all()
        for log in logs:
            entry = stats.get(log.job_name)
            if entry is None:
                # rows are newest first, so the first one seen is the last run
                entry = stats[log.job_name] = {
                    'total': 0,
                    JOB_STATUS_SUCCESS: 0,
                    JOB_STATUS_ERROR: 0,
                    JOB_STATUS_RUNNING: 0,
                    JOB_STATUS_PARTIAL_SUCCESS: 0,
                    'last_run': log.started_at.isoformat() if log.started_at else None,
                    'last_status': log.status,
                }
            entry['total'] += 1
            if log.status in entry:
                entry[log.status] += 1
        return stats
