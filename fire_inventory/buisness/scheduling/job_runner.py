"""
Job Runner
Runs registered jobs and records every run in the cron_job_logs table.
"""

from dataclasses import dataclass
from typing import Dict, Optional
from datetime import datetime
from fire_inventory import db
from fire_inventory.buisness.scheduling.jobs import JobKind
from fire_inventory.buisness.scheduling.job_registry import JobRegistry, parse_job_name
from fire_inventory.data.scheduling.cron_job_logs import (
    CronJobLog,
    JOB_STATUS_RUNNING,
    JOB_STATUS_SUCCESS,
    JOB_STATUS_ERROR,
    JOB_STATUS_PARTIAL_SUCCESS,
)
from fire_inventory.utils.logging_sanitizer import sanitize_exception_message
from fire_inventory.logger import get_logger

logger = get_logger("fire_inventory.buisness.scheduling")

RUN_ALL_JOB_NAME = 'run-all-cron-jobs'


def _whole_seconds(started_at: datetime, completed_at: datetime) -> int:
    return int((completed_at - started_at).total_seconds())


@dataclass
class JobOutcome:
    """Result of one job run as reported to callers"""
    job_name: str
    status: str
    started_at: datetime
    completed_at: datetime
    duration_seconds: int
    details: Optional[Dict] = None
    error: Optional[str] = None
    log_id: Optional[int] = None

    @property
    def succeeded(self) -> bool:
        return self.status == JOB_STATUS_SUCCESS

    def to_dict(self) -> Dict:
        data = {
            'job': self.job_name,
            'status': self.status,
            'duration': self.duration_seconds,
        }
        if self.succeeded:
            data['result'] = self.details
        else:
            data['error'] = self.error
        return data


class JobRunner:
    """
    Executes jobs from a JobRegistry with a persisted run log.

    A run log row is committed with status "running" before the job starts and
    updated to "success" or "error" when it ends. Exceptions raised by a job are
    run-fatal: the session is rolled back, the row is marked "error" with a
    sanitized message and the outcome is returned instead of raised.
    """

    def __init__(self, registry: JobRegistry, session=None):
        self.registry = registry
        self.session = session or db.session

    def _commit(self):
        try:
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise

    def run(self, kind, now: Optional[datetime] = None) -> JobOutcome:
        """
        Run a single job.

        Args:
            kind: JobKind or job name
            now: Reference time passed to the job

        Raises:
            UnknownJobError: If no handler is registered for kind
        """
        if isinstance(kind, str):
            kind = parse_job_name(kind)
        job = self.registry.handler_for(kind)

        started_at = datetime.utcnow()
        log = CronJobLog(job_name=kind.value, status=JOB_STATUS_RUNNING, started_at=started_at)
        self.session.add(log)
        self._commit()
        log_id = log.id

        logger.info(f"Starting job {kind.value} (log {log_id})")

        try:
            details = job.run(now=now)
            status = JOB_STATUS_SUCCESS
            error = job.error_summary(details)
        except Exception as e:
            self.session.rollback()
            logger.error(f"Job {kind.value} failed: {e}", exc_info=True)
            details = None
            status = JOB_STATUS_ERROR
            error = sanitize_exception_message(e)

        completed_at = datetime.utcnow()
        duration = _whole_seconds(started_at, completed_at)

        log = self.session.get(CronJobLog, log_id)
        log.status = status
        log.completed_at = completed_at
        log.duration_seconds = duration
        log.details = details
        log.error_message = error
        self._commit()

        logger.info(f"Job {kind.value} finished with status {status} in {duration}s")
        return JobOutcome(
            job_name=kind.value,
            status=status,
            started_at=started_at,
            completed_at=completed_at,
            duration_seconds=duration,
            details=details,
            error=error,
            log_id=log_id
        )

    def run_all(self, now: Optional[datetime] = None) -> Dict:
        """
        Run every registered job sequentially and write one aggregate log row.

        Returns:
            {success, message, total_duration, results}
        """
        started_at = datetime.utcnow()
        kinds = self.registry.kinds()
        logger.info(f"Starting execution of {len(kinds)} jobs")

        outcomes = [self.run(kind, now=now) for kind in kinds]

        completed_at = datetime.utcnow()
        total_duration = _whole_seconds(started_at, completed_at)
        success_count = sum(1 for o in outcomes if o.succeeded)
        error_count = len(outcomes) - success_count

        if error_count == 0:
            status = JOB_STATUS_SUCCESS
        elif error_count == len(outcomes):
            status = JOB_STATUS_ERROR
        else:
            status = JOB_STATUS_PARTIAL_SUCCESS

        results = [o.to_dict() for o in outcomes]
        self.session.add(CronJobLog(
            job_name=RUN_ALL_JOB_NAME,
            status=status,
            started_at=started_at,
            completed_at=completed_at,
            duration_seconds=total_duration,
            details={
                'total_jobs': len(outcomes),
                'successful': success_count,
                'errors': error_count,
                'results': results,
            },
            error_message=f"{error_count} job(s) failed" if error_count else None
        ))
        self._commit()

        message = f"Executed {len(outcomes)} jobs: {success_count} succeeded, {error_count} failed"
        logger.info(message)
        return {
            'success': error_count == 0,
            'message': message,
            'total_duration': total_duration,
            'results': results,
        }
