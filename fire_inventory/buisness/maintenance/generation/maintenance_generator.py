"""
Maintenance Generator
Main orchestrator for automatic maintenance generation.
Matches templates to equipment, projects due dates, guards against duplicates,
writes pending records and aggregates the run counts.
"""

from typing import Dict, Optional
from datetime import datetime
from fire_inventory.buisness.maintenance.generation.schedule_projector import (
    GenerationMode,
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
from fire_inventory.logger import get_logger

logger = get_logger("fire_inventory.buisness.maintenance.generation")


def template_applies_to(template, equipment) -> bool:
    """A template applies when both carry the same, non-null category"""
    return template.category_id is not None and template.category_id == equipment.category_id


class MaintenanceGenerator:
    """
    Orchestrator for maintenance generation runs.

    Responsibilities:
    - Template matching per equipment item
    - Due-date projection per equipment/template pair
    - Duplicate prevention and record creation
    - Per-candidate error isolation and result aggregation

    Failures while loading equipment or templates are run-fatal and propagate.
    Everything after that is recovered per candidate and counted.
    """

    def __init__(self, store: Optional[MaintenanceStore] = None):
        self.store = store or SqlAlchemyMaintenanceStore()

    def generate(
        self,
        mode: GenerationMode = GenerationMode.NEXT_ONLY,
        now: Optional[datetime] = None
    ) -> GenerationResult:
        """
        Run one generation pass over all equipment.

        Args:
            mode: NEXT_ONLY (3 month horizon, one date per pair) or ALL_MISSING (180 days, every date)
            now: Run time, defaults to the current UTC time

        Returns:
            GenerationResult with created/skipped/errors counts
        """
        mode = GenerationMode.parse(mode)
        now = now or datetime.utcnow()
        horizon = compute_horizon(mode, now)
        result = GenerationResult(mode=mode, started_at=now, horizon=horizon)

        equipment_items = self.store.load_equipment()
        templates = self.store.load_templates()

        logger.info(
            f"Generating maintenance ({mode.value}) for {len(equipment_items)} equipment items "
            f"and {len(templates)} templates, horizon {horizon.isoformat()}"
        )

        for item in equipment_items:
            matching_templates = [t for t in templates if template_applies_to(t, item)]

            if not matching_templates:
                logger.debug(f"No template found for equipment {item.name}")
                result.record_skipped()
                result.equipment_without_template.append({'id': item.id, 'name': item.name})
                continue

            for template in matching_templates:
                self._generate_for_pair(item, template, mode, now, horizon, result)

        result.completed_at = datetime.utcnow()
        logger.info(
            f"Maintenance generation completed: {result.created} created, "
            f"{result.skipped} skipped, {result.errors} errors"
        )
        return result

    def _generate_for_pair(self, item, template, mode, now, horizon, result: GenerationResult):
        """Project and persist the candidates of one equipment/template pair"""
        interval = template.interval_months
        if not isinstance(interval, int) or isinstance(interval, bool) or interval <= 0:
            logger.warning(f"Template {template.name} has no valid interval ({interval!r}), skipping")
            result.record_skipped()
            return

        try:
            baseline = resolve_baseline(item.last_check_date, item.purchase_date, now)
            due_dates = project_due_dates(baseline, interval, horizon, mode)
        except (TypeError, ValueError) as e:
            logger.error(f"Could not project due dates for equipment {item.name}: {e}")
            result.record_error(f"equipment {item.id}, template {template.id}: {e}")
            return

        for due_date in due_dates:
            self._process_candidate(item, template, due_date, result)

    def _process_candidate(self, item, template, due_date: datetime, result: GenerationResult):
        """Duplicate check then insert for a single candidate; never raises"""
        day = due_date.date().isoformat()
        try:
            if self.store.record_exists_on_day(item.id, template.id, due_date):
                logger.debug(f"Maintenance already exists for {item.name} on {day}")
                result.record_skipped()
                return

            record_id = self.store.insert_pending_record(
                equipment_id=item.id,
                template_id=template.id,
                due_date=due_date,
                performed_by_id=template.responsible_person_id
            )
            result.record_created(record_id)
            logger.info(f"Created maintenance for {item.name} ({template.name}) due {day}")

        except DuplicateMaintenanceRecordError:
            # another run inserted the same day between our check and insert
            logger.debug(f"Maintenance for {item.name} on {day} was created concurrently")
            result.record_skipped()
        except Exception as e:
            logger.error(f"Error creating maintenance for {item.name} on {day}: {e}")
            result.record_error(f"equipment {item.id}, template {template.id}, {day}: {e}")

    def coverage(self) -> Dict:
        """
        Summarize which equipment items have an applicable template.

        Returns:
            Counts of equipment, templates and covered items plus the uncovered items
        """
        equipment_items = self.store.load_equipment()
        templates = self.store.load_templates()

        without_template = [
            {'id': item.id, 'name': item.name}
            for item in equipment_items
            if not any(template_applies_to(t, item) for t in templates)
        ]

        return {
            'equipment_count': len(equipment_items),
            'template_count': len(templates),
            'covered_count': len(equipment_items) - len(without_template),
            'equipment_without_template': without_template,
        }
