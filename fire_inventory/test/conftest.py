"""
Pytest configuration and fixtures
"""
import pytest
from fire_inventory import create_app
from fire_inventory import db as _db
from fire_inventory.data.core.category import Category
from fire_inventory.data.core.person import Person
from fire_inventory.data.core.equipment import Equipment
from fire_inventory.data.maintenance.maintenance_templates import MaintenanceTemplate
from fire_inventory.data.maintenance.maintenance_records import MaintenanceRecord


@pytest.fixture(scope='function')
def app():
    """Create Flask application with an empty in-memory database"""
    app = create_app({
        'SECRET_KEY': 'test-secret-key',
        'SQLALCHEMY_DATABASE_URI': 'sqlite:///:memory:',
        'TESTING': True,
        'WTF_CSRF_ENABLED': False,
        'RATELIMIT_ENABLED': False,
        'ENABLE_HTTPS': False,
        'FORCE_HTTPS_REDIRECT': False,
        'SESSION_COOKIE_SECURE': False,
    })

    with app.app_context():
        _db.create_all()
        yield app
        _db.session.remove()
        _db.drop_all()


@pytest.fixture(scope='function')
def client(app):
    """Create Flask test client"""
    return app.test_client()


class Seeder:
    """Small helpers for inserting test rows"""

    def category(self, name='Breathing Apparatus'):
        category = Category(name=name)
        _db.session.add(category)
        _db.session.commit()
        return category

    def person(self, first_name='Jonas', last_name='Weber', email='jonas.weber@example.org'):
        person = Person(first_name=first_name, last_name=last_name, email=email)
        _db.session.add(person)
        _db.session.commit()
        return person

    def equipment(self, category=None, name='SCBA Set 1', last_check_date=None, purchase_date=None):
        item = Equipment(
            name=name,
            inventory_number=name.upper().replace(' ', '-'),
            category_id=category.id if category else None,
            last_check_date=last_check_date,
            purchase_date=purchase_date
        )
        _db.session.add(item)
        _db.session.commit()
        return item

    def template(self, category=None, name='SCBA Inspection', interval_months=6, responsible_person=None):
        template = MaintenanceTemplate(
            name=name,
            category_id=category.id if category else None,
            interval_months=interval_months,
            responsible_person_id=responsible_person.id if responsible_person else None
        )
        _db.session.add(template)
        _db.session.commit()
        return template

    def record(self, equipment, template, due_date, status='pending'):
        record = MaintenanceRecord(
            equipment_id=equipment.id,
            template_id=template.id if template else None,
            due_date=due_date,
            status=status
        )
        _db.session.add(record)
        _db.session.commit()
        return record


@pytest.fixture(scope='function')
def seed(app):
    """Helper for inserting categories, persons, equipment, templates and records"""
    return Seeder()
