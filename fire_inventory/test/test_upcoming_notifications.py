"""
Test upcoming maintenance digests.
"""
from datetime import datetime

from fire_inventory.buisness.core.settings_provider import StaticSettingsProvider
from fire_inventory.buisness.maintenance.notifications import (
    NotificationSender,
    UpcomingMaintenanceNotifier,
)

NOW = datetime(2024, 3, 1, 6, 0)


class RecordingSender(NotificationSender):
    def __init__(self, failing_email=None):
        self.sent = []
        self.failing_email = failing_email

    def send(self, digest):
        if digest.recipient_email == self.failing_email:
            raise ConnectionError("mail provider rejected the request")
        self.sent.append(digest)


def _settings(**email_settings):
    return StaticSettingsProvider({
        'email_settings': email_settings,
        'email_sender': {'from_address': 'Wartung <wartung@example.org>'},
    })


def _setup(seed):
    category = seed.category()
    jonas = seed.person()
    anna = seed.person('Anna', 'Keller', 'anna.keller@example.org')
    nobody = seed.person('Lena', 'Brandt', None)
    scba = seed.equipment(category, name='SCBA Set 1')
    ladder = seed.equipment(category, name='Ladder')

    scba_check = seed.template(category, name='SCBA Inspection', responsible_person=jonas)
    ladder_check = seed.template(category, name='Ladder Check', responsible_person=anna)
    hose_check = seed.template(category, name='Hose Test', responsible_person=nobody)

    seed.record(scba, scba_check, datetime(2024, 3, 3))
    seed.record(ladder, scba_check, datetime(2024, 3, 5))
    seed.record(ladder, ladder_check, datetime(2024, 3, 7))
    seed.record(scba, hose_check, datetime(2024, 3, 4))
    # outside the window
    seed.record(scba, ladder_check, datetime(2024, 3, 20))
    # already done
    seed.record(ladder, hose_check, datetime(2024, 3, 2), status='completed')
    # overdue
    seed.record(scba, scba_check, datetime(2024, 2, 20))


def test_digests_grouped_by_responsible_person(seed):
    _setup(seed)
    sender = RecordingSender()

    summary = UpcomingMaintenanceNotifier(_settings(), sender).notify(now=NOW)

    assert summary['success'] is True
    assert summary['skipped'] == 1
    assert summary['overdue'] == 1
    by_email = {d.recipient_email: d for d in sender.sent}
    assert set(by_email) == {'jonas.weber@example.org', 'anna.keller@example.org'}

    jonas = by_email['jonas.weber@example.org']
    assert jonas.recipient_name == 'Jonas Weber'
    assert jonas.sender == 'Wartung <wartung@example.org>'
    assert [i['due_date'] for i in jonas.items] == ['2024-03-03', '2024-03-05']
    assert len(by_email['anna.keller@example.org'].items) == 1


def test_window_comes_from_settings(seed):
    _setup(seed)
    sender = RecordingSender()

    UpcomingMaintenanceNotifier(_settings(upcoming_days_interval=3), sender).notify(now=NOW)

    assert [d.recipient_email for d in sender.sent] == ['jonas.weber@example.org']
    assert len(sender.sent[0].items) == 1


def test_failed_recipient_does_not_stop_others(seed):
    _setup(seed)
    sender = RecordingSender(failing_email='anna.keller@example.org')

    summary = UpcomingMaintenanceNotifier(_settings(), sender).notify(now=NOW)

    assert summary['success'] is False
    statuses = {d['email']: d['status'] for d in summary['details']}
    assert statuses == {'jonas.weber@example.org': 'sent', 'anna.keller@example.org': 'error'}
    assert [d.recipient_email for d in sender.sent] == ['jonas.weber@example.org']


def test_disabled_notifications_send_nothing(seed):
    _setup(seed)
    sender = RecordingSender()

    summary = UpcomingMaintenanceNotifier(
        _settings(upcoming_notifications_enabled='false'), sender
    ).notify(now=NOW)

    assert summary['success'] is True
    assert sender.sent == []
