"""
Test the job registry and the logged job runner.
"""
import pytest
from datetime import date, datetime

from fire_inventory.buisness.core.settings_provider import StaticSettingsProvider
from fire_inventory.buisness.maintenance.generation import MaintenanceGenerator, SqlAlchemyMaintenanceStore
from fire_inventory.buisness.scheduling import (
    BaseJob,
    JobKind,
    JobRegistry,
    JobRunner,
    MaintenanceAutoGeneratorJob,
    RUN_ALL_JOB_NAME,
    UnknownJobError,
    build_default_registry,
    parse_job_name,
)
from fire_inventory.data.scheduling.cron_job_logs import CronJobLog


class ExplodingStore(SqlAlchemyMaintenanceStore):
    def load_equipment(self):
        raise RuntimeError("could not connect to postgresql://fire:hunter2@db/inventory")


class FlakyStore(SqlAlchemyMaintenanceStore):
    def insert_pending_record(self, equipment_id, template_id, due_date, performed_by_id):
        raise RuntimeError("statement timeout")


class PartlyUnreadableStore(SqlAlchemyMaintenanceStore):
    def __init__(self, failing_equipment_id):
        super().__init__()
        self.failing_equipment_id = failing_equipment_id

    def record_exists_on_day(self, equipment_id, template_id, due_date):
        if equipment_id == self.failing_equipment_id:
            raise RuntimeError("canceling statement due to statement timeout")
        return super().record_exists_on_day(equipment_id, template_id, due_date)


def _registry(generator=None):
    return build_default_registry(settings=StaticSettingsProvider(), generator=generator)


def test_parse_job_name():
    assert parse_job_name('maintenance-auto-generator') is JobKind.MAINTENANCE_AUTO_GENERATOR
    assert parse_job_name('maintenance-notifications') is JobKind.UPCOMING_MAINTENANCE_NOTIFICATIONS
    with pytest.raises(UnknownJobError):
        parse_job_name('weekly-report')


def test_registry_requires_every_kind(app):
    registry = JobRegistry()
    registry.register(MaintenanceAutoGeneratorJob(MaintenanceGenerator()))

    with pytest.raises(ValueError):
        registry.validate()
    with pytest.raises(UnknownJobError):
        registry.handler_for(JobKind.UPCOMING_MAINTENANCE_NOTIFICATIONS)
    with pytest.raises(ValueError):
        registry.register(MaintenanceAutoGeneratorJob(MaintenanceGenerator()))


def test_default_registry_covers_all_kinds(app):
    registry = _registry()
    assert registry.kinds() == list(JobKind)
    assert registry.handler_for('maintenance-auto-generator').kind is JobKind.MAINTENANCE_AUTO_GENERATOR


def test_successful_run_is_logged(seed):
    category = seed.category()
    seed.equipment(category, purchase_date=date(2023, 6, 1))
    seed.template(category, interval_months=6)

    outcome = JobRunner(_registry()).run(JobKind.MAINTENANCE_AUTO_GENERATOR, now=datetime(2024, 1, 1))

    assert outcome.succeeded
    assert outcome.details == {'created': 2, 'skipped': 0, 'errors': 0}

    log = CronJobLog.query.one()
    assert log.job_name == 'maintenance-auto-generator'
    assert log.status == 'success'
    assert log.completed_at is not None
    assert log.completed_at >= log.started_at
    assert isinstance(log.duration_seconds, int)
    assert log.details == {'created': 2, 'skipped': 0, 'errors': 0}
    assert log.error_message is None


def test_per_candidate_errors_keep_run_successful(seed):
    category = seed.category()
    seed.equipment(category, purchase_date=date(2023, 6, 1))
    seed.template(category, interval_months=6)

    runner = JobRunner(_registry(MaintenanceGenerator(FlakyStore())))
    outcome = runner.run('maintenance-auto-generator', now=datetime(2024, 1, 1))

    assert outcome.status == 'success'
    log = CronJobLog.query.one()
    assert log.details['errors'] == 2
    assert log.error_message == '2 maintenance records could not be created'


def test_duplicate_check_errors_keep_run_successful(seed):
    category = seed.category()
    broken = seed.equipment(category, name='SCBA Set 1', purchase_date=date(2023, 6, 1))
    seed.equipment(category, name='SCBA Set 2', purchase_date=date(2023, 6, 1))
    seed.template(category, interval_months=6)

    runner = JobRunner(_registry(MaintenanceGenerator(PartlyUnreadableStore(broken.id))))
    outcome = runner.run(JobKind.MAINTENANCE_AUTO_GENERATOR, now=datetime(2024, 1, 1))

    assert outcome.status == 'success'
    log = CronJobLog.query.one()
    assert log.status == 'success'
    assert log.details == {'created': 2, 'skipped': 0, 'errors': 2}
    assert log.error_message == '2 maintenance records could not be created'


def test_run_fatal_error_marks_log_as_error(app):
    runner = JobRunner(_registry(MaintenanceGenerator(ExplodingStore())))
    outcome = runner.run(JobKind.MAINTENANCE_AUTO_GENERATOR)

    assert outcome.status == 'error'
    assert 'hunter2' not in outcome.error

    log = CronJobLog.query.one()
    assert log.status == 'error'
    assert log.completed_at is not None
    assert 'hunter2' not in log.error_message


def test_unknown_job_writes_no_log(app):
    with pytest.raises(UnknownJobError):
        JobRunner(_registry()).run('weekly-report')
    assert CronJobLog.query.count() == 0


def test_run_all_partial_success(app):
    runner = JobRunner(_registry(MaintenanceGenerator(ExplodingStore())))
    summary = runner.run_all()

    assert summary['success'] is False
    assert summary['message'] == 'Executed 2 jobs: 1 succeeded, 1 failed'
    assert [r['job'] for r in summary['results']] == [kind.value for kind in JobKind]
    assert summary['results'][0]['status'] == 'error'
    assert summary['results'][1]['status'] == 'success'

    aggregate = CronJobLog.query.filter_by(job_name=RUN_ALL_JOB_NAME).one()
    assert aggregate.status == 'partial_success'
    assert aggregate.details['errors'] == 1
    assert aggregate.error_message == '1 job(s) failed'
    assert CronJobLog.query.count() == 3


def test_run_all_success(app):
    summary = JobRunner(_registry()).run_all()

    assert summary['success'] is True
    aggregate = CronJobLog.query.filter_by(job_name=RUN_ALL_JOB_NAME).one()
    assert aggregate.status == 'success'
    assert aggregate.error_message is None


def test_run_all_every_job_failing(app):
    class BrokenJob(BaseJob):
        def __init__(self, kind):
            self.kind = kind

        def run(self, now=None):
            raise RuntimeError(f"{self.kind.value} broke")

    registry = JobRegistry()
    for kind in JobKind:
        registry.register(BrokenJob(kind))

    summary = JobRunner(registry).run_all()

    assert summary['success'] is False
    aggregate = CronJobLog.query.filter_by(job_name=RUN_ALL_JOB_NAME).one()
    assert aggregate.status == 'error'
