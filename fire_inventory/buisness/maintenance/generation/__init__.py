"""
Maintenance Generation Business Logic
Projects due dates from template intervals and creates pending maintenance records.
"""

from fire_inventory.buisness.maintenance.generation.schedule_projector import (
    GenerationMode,
    add_months,
    compute_horizon,
    project_due_dates,
    resolve_baseline,
)
from fire_inventory.buisness.maintenance.generation.generation_result import GenerationResult
from fire_inventory.buisness.maintenance.generation.maintenance_store import (
    DuplicateMaintenanceRecordError,
    MaintenanceStore,
    SqlAlchemyMaintenanceStore,
)
from fire_inventory.buisness.maintenance.generation.maintenance_generator import (
    MaintenanceGenerator,
    template_applies_to,
)

__all__ = [
    'GenerationMode',
    'add_months',
    'compute_horizon',
    'project_due_dates',
    'resolve_baseline',
    'GenerationResult',
    'DuplicateMaintenanceRecordError',
    'MaintenanceStore',
    'SqlAlchemyMaintenanceStore',
    'MaintenanceGenerator',
    'template_applies_to',
]
