"""
Test the cron trigger and monitoring endpoints.
"""
from datetime import datetime
from dateutil.relativedelta import relativedelta

from fire_inventory.buisness.core.settings_provider import StaticSettingsProvider
from fire_inventory.buisness.maintenance.generation import MaintenanceGenerator, SqlAlchemyMaintenanceStore
from fire_inventory.buisness.scheduling import JobRunner, build_default_registry
from fire_inventory.data.maintenance.maintenance_records import MaintenanceRecord
from fire_inventory.data.scheduling.cron_job_logs import CronJobLog
from fire_inventory.presentation.routes.scheduling import cron_jobs


class ExplodingStore(SqlAlchemyMaintenanceStore):
    def load_equipment(self):
        raise RuntimeError("connection refused")


def _use_exploding_generator(monkeypatch):
    def build_runner():
        return JobRunner(build_default_registry(
            settings=StaticSettingsProvider(),
            generator=MaintenanceGenerator(ExplodingStore())
        ))
    monkeypatch.setattr(cron_jobs, 'build_runner', build_runner)


def test_maintenance_auto_generator(client, seed):
    category = seed.category()
    seed.equipment(category, last_check_date=(datetime.utcnow() - relativedelta(months=5)).date())
    seed.template(category, interval_months=6)

    response = client.post('/cron/maintenance-auto-generator')

    assert response.status_code == 200
    data = response.get_json()
    assert data['created'] == 1
    assert data['skipped'] == 0
    assert data['errors'] == 0
    assert 'timestamp' in data
    assert MaintenanceRecord.query.count() == 1

    log = CronJobLog.query.one()
    assert log.job_name == 'maintenance-auto-generator'
    assert log.status == 'success'


def test_maintenance_auto_generator_failure(client, monkeypatch):
    _use_exploding_generator(monkeypatch)

    response = client.post('/cron/maintenance-auto-generator')

    assert response.status_code == 500
    assert response.get_json()['error'] == 'connection refused'
    assert CronJobLog.query.one().status == 'error'


def test_maintenance_notifications(client, seed):
    response = client.post('/cron/maintenance-notifications')

    assert response.status_code == 200
    data = response.get_json()
    assert data['success'] is True
    assert data['details'] == []


def test_run_job_by_name(client):
    assert client.post('/cron/jobs/maintenance-notifications').status_code == 200
    assert client.post('/cron/jobs/weekly-report').status_code == 404


def test_run_all(client):
    response = client.post('/cron/run-all')

    assert response.status_code == 200
    data = response.get_json()
    assert data['success'] is True
    assert len(data['results']) == 2


def test_run_all_partial_failure_is_multi_status(client, monkeypatch):
    _use_exploding_generator(monkeypatch)

    response = client.post('/cron/run-all')

    assert response.status_code == 207
    assert response.get_json()['success'] is False


def test_run_all_unexpected_error(client, monkeypatch):
    def build_runner():
        raise RuntimeError("registry unavailable")
    monkeypatch.setattr(cron_jobs, 'build_runner', build_runner)

    response = client.post('/cron/run-all')

    assert response.status_code == 500
    data = response.get_json()
    assert data['error'] == 'registry unavailable'
    assert 'timestamp' in data


def _use_failing_runner(monkeypatch):
    def build_runner():
        raise RuntimeError("log table unavailable")
    monkeypatch.setattr(cron_jobs, 'build_runner', build_runner)


def _assert_json_server_error(response):
    assert response.status_code == 500
    assert response.is_json
    data = response.get_json()
    assert data['error'] == 'log table unavailable'
    assert 'timestamp' in data


def test_maintenance_auto_generator_unexpected_error(client, monkeypatch):
    _use_failing_runner(monkeypatch)
    _assert_json_server_error(client.post('/cron/maintenance-auto-generator'))


def test_maintenance_notifications_unexpected_error(client, monkeypatch):
    _use_failing_runner(monkeypatch)
    _assert_json_server_error(client.post('/cron/maintenance-notifications'))


def test_run_job_by_name_unexpected_error(client, monkeypatch):
    _use_failing_runner(monkeypatch)
    _assert_json_server_error(client.post('/cron/jobs/maintenance-auto-generator'))


def test_logs_and_stats(client, monkeypatch):
    client.post('/cron/maintenance-auto-generator')
    client.post('/cron/maintenance-auto-generator')
    _use_exploding_generator(monkeypatch)
    client.post('/cron/maintenance-auto-generator')
    client.post('/cron/maintenance-notifications')

    logs = client.get('/cron/logs').get_json()
    assert len(logs) == 4
    assert logs[0]['job_name'] == 'maintenance-notifications'

    limited = client.get('/cron/logs?job_name=maintenance-auto-generator&limit=2').get_json()
    assert len(limited) == 2
    assert all(log['job_name'] == 'maintenance-auto-generator' for log in limited)
    assert limited[0]['status'] == 'error'

    stats = client.get('/cron/stats').get_json()
    generator_stats = stats['maintenance-auto-generator']
    assert generator_stats['total'] == 3
    assert generator_stats['success'] == 2
    assert generator_stats['error'] == 1
    assert generator_stats['running'] == 0
    assert generator_stats['last_status'] == 'error'
    assert stats['maintenance-notifications']['total'] == 1


def test_cron_endpoints_skip_csrf(app, seed):
    app.config['WTF_CSRF_ENABLED'] = True
    client = app.test_client()

    assert client.post('/cron/maintenance-notifications').status_code == 200
    assert client.post('/maintenance/auto-generate', json={}).status_code == 400
