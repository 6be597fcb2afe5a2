"""
Maintenance models package
"""

from .maintenance_templates import MaintenanceTemplate
from .maintenance_records import MaintenanceRecord

__all__ = [
    'MaintenanceTemplate',
    'MaintenanceRecord',
]
