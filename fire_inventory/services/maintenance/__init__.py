"""
Maintenance services
"""

from fire_inventory.services.maintenance.upcoming_maintenance_service import UpcomingMaintenanceService

__all__ = ['UpcomingMaintenanceService']
