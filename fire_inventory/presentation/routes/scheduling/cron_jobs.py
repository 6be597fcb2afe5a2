"""
Cron Job Routes

Unauthenticated triggers for the scheduled jobs (called by an external
scheduler) and the run log monitoring endpoints.
"""
from datetime import datetime

from flask import Blueprint, current_app, request, jsonify

from fire_inventory import csrf, db, limiter
from fire_inventory.buisness.scheduling import (
    JobKind,
    JobRunner,
    UnknownJobError,
    build_default_registry,
)
from fire_inventory.services.scheduling import CronJobLogService
from fire_inventory.services.scheduling.cron_job_log_service import DEFAULT_LOG_LIMIT
from fire_inventory.utils.logging_sanitizer import sanitize_exception_message
from fire_inventory.logger import get_logger

logger = get_logger("fire_inventory.routes.scheduling.cron_jobs")

cron_bp = Blueprint('cron', __name__)
csrf.exempt(cron_bp)


def _cron_rate_limit():
    return current_app.config['CRON_RATE_LIMIT']


def build_runner() -> JobRunner:
    return JobRunner(build_default_registry())


def _timestamp():
    return datetime.utcnow().isoformat()


def _run_job(kind):
    try:
        outcome = build_runner().run(kind)
    except UnknownJobError:
        raise
    except Exception as e:
        db.session.rollback()
        logger.error(f"Error running cron job {getattr(kind, 'value', kind)}: {e}", exc_info=True)
        return jsonify({"error": sanitize_exception_message(e), "timestamp": _timestamp()}), 500
    if not outcome.succeeded:
        return jsonify({"error": outcome.error, "timestamp": _timestamp()}), 500
    return jsonify({**(outcome.details or {}), "timestamp": _timestamp()})


@cron_bp.route('/maintenance-auto-generator', methods=['POST'])
@limiter.limit(_cron_rate_limit)
def maintenance_auto_generator():
    """Batch trigger: create every missing maintenance record in the next 180 days"""
    logger.info("Cron trigger: maintenance auto-generator")
    return _run_job(JobKind.MAINTENANCE_AUTO_GENERATOR)


@cron_bp.route('/maintenance-notifications', methods=['POST'])
@limiter.limit(_cron_rate_limit)
def maintenance_notifications():
    """Batch trigger: send upcoming maintenance digests"""
    logger.info("Cron trigger: maintenance notifications")
    return _run_job(JobKind.UPCOMING_MAINTENANCE_NOTIFICATIONS)


@cron_bp.route('/jobs/<job_name>', methods=['POST'])
@limiter.limit(_cron_rate_limit)
def run_job(job_name):
    """Trigger any registered job by name"""
    try:
        return _run_job(job_name)
    except UnknownJobError as e:
        return jsonify({"error": str(e)}), 404


@cron_bp.route('/run-all', methods=['POST'])
@limiter.limit(_cron_rate_limit)
def run_all():
    """Run every registered job; 207 when some of them failed"""
    try:
        summary = build_runner().run_all()
    except Exception as e:
        db.session.rollback()
        logger.error(f"Error in run-all cron jobs: {e}", exc_info=True)
        return jsonify({"error": sanitize_exception_message(e), "timestamp": _timestamp()}), 500

    return jsonify(summary), 200 if summary['success'] else 207


@cron_bp.route('/logs')
def cron_logs():
    """API endpoint: Latest run logs, newest first"""
    job_name = request.args.get('job_name', type=str) or None
    limit = request.args.get('limit', DEFAULT_LOG_LIMIT, type=int)
    if limit is None or limit <= 0:
        return jsonify({"error": "Invalid limit"}), 400

    logs = CronJobLogService.get_logs(job_name=job_name, limit=limit)
    return jsonify([log.to_dict() for log in logs])


@cron_bp.route('/stats')
def cron_stats():
    """API endpoint: Run counts and last status per job"""
    return jsonify(CronJobLogService.get_job_stats())
