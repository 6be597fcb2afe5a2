#!/usr/bin/env python3
"""
Debug Data Insertion
Inserts sample categories, persons, equipment, maintenance templates and
settings from debug_data.json. Safe to run repeatedly.
"""

from pathlib import Path
import json
from fire_inventory import db
from fire_inventory.buisness.core.settings_provider import DatabaseSettingsProvider
from fire_inventory.data.core.category import Category
from fire_inventory.data.core.person import Person
from fire_inventory.data.core.equipment import Equipment
from fire_inventory.data.maintenance.maintenance_templates import MaintenanceTemplate
from fire_inventory.logger import get_logger

logger = get_logger("fire_inventory.debug")

DEBUG_DATA_FILE = Path(__file__).parent / 'debug_data.json'


def load_debug_data(path=DEBUG_DATA_FILE):
    if not path.exists():
        raise FileNotFoundError(f"Debug data file not found: {path}")
    with open(path, 'r') as f:
        return json.load(f)


def _person_id(name):
    """Resolve "First Last" to a person id"""
    if not name:
        return None
    first_name, _, last_name = name.partition(' ')
    person = Person.query.filter_by(first_name=first_name, last_name=last_name).first()
    if person is None:
        raise ValueError(f"Unknown person in debug data: {name}")
    return person.id


def _category_id(name):
    if not name:
        return None
    category = Category.query.filter_by(name=name).first()
    if category is None:
        raise ValueError(f"Unknown category in debug data: {name}")
    return category.id


def insert_debug_data(debug_data=None):
    """
    Insert debug data in dependency order

    Raises:
        Exception: If insertion fails (fail-fast)
    """
    debug_data = debug_data if debug_data is not None else load_debug_data()
    core = debug_data.get('Core', {})
    maintenance = debug_data.get('Maintenance', {})

    logger.info("Inserting debug data...")
    try:
        for data in core.get('categories', []):
            Category.find_or_create_from_dict(data, lookup_fields=['name'], commit=False)
        for data in core.get('persons', []):
            Person.find_or_create_from_dict(data, lookup_fields=['first_name', 'last_name'], commit=False)
        db.session.flush()

        for data in core.get('equipment', []):
            row = dict(data)
            row['category_id'] = _category_id(row.pop('category', None))
            row['responsible_person_id'] = _person_id(row.pop('responsible_person', None))
            Equipment.find_or_create_from_dict(row, lookup_fields=['inventory_number'], commit=False)

        for data in maintenance.get('maintenance_templates', []):
            row = dict(data)
            row['category_id'] = _category_id(row.pop('category', None))
            row['responsible_person_id'] = _person_id(row.pop('responsible_person', None))
            if isinstance(row.get('checks'), list):
                row['checks'] = '\n'.join(row['checks'])
            MaintenanceTemplate.find_or_create_from_dict(row, lookup_fields=['name'], commit=False)

        db.session.commit()
    except Exception as e:
        db.session.rollback()
        logger.error(f"Debug data insertion failed: {e}")
        raise

    settings = DatabaseSettingsProvider()
    for key, value in debug_data.get('Settings', {}).items():
        if settings.get(key) is None:
            settings.set(key, value)

    logger.info("Debug data inserted")
