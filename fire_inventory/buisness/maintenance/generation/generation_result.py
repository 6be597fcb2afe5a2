"""
Generation Result Data Structure
Aggregated counts and details of one maintenance generation run.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple
from datetime import datetime
from fire_inventory.buisness.maintenance.generation.schedule_projector import GenerationMode


@dataclass
class GenerationResult:
    """Result of a maintenance generation run over all equipment"""
    mode: GenerationMode
    started_at: datetime
    horizon: datetime
    created: int = 0
    skipped: int = 0
    errors: int = 0
    completed_at: Optional[datetime] = None
    equipment_without_template: List[Dict] = field(default_factory=list)
    created_record_ids: List[int] = field(default_factory=list)
    error_details: List[str] = field(default_factory=list)

    def record_created(self, record_id: Optional[int]):
        self.created += 1
        if record_id is not None:
            self.created_record_ids.append(record_id)

    def record_skipped(self):
        self.skipped += 1

    def record_error(self, message: str):
        self.errors += 1
        self.error_details.append(message)

    def to_dict(self) -> Dict:
        """Counts only; this is the shape reported to callers and run logs"""
        return {
            'created': self.created,
            'skipped': self.skipped,
            'errors': self.errors,
        }

    def notification(self) -> Tuple[str, str]:
        """(level, message) for the interactive trigger's toast"""
        if self.created > 0:
            message = f"{self.created} new maintenance records created"
            if self.errors:
                message += f" ({self.errors} errors)"
            return 'success', message
        if self.errors:
            return 'info', f"No new maintenance records created ({self.errors} errors)"
        return 'info', 'No new maintenance records required'
