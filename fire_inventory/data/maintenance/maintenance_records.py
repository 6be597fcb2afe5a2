from fire_inventory.data.core.created_base import CreatedBase
from fire_inventory import db
from sqlalchemy.orm import validates

MAINTENANCE_STATUS_PENDING = 'pending'
MAINTENANCE_STATUS_SCHEDULED = 'scheduled'
MAINTENANCE_STATUS_IN_PROGRESS = 'in_progress'
MAINTENANCE_STATUS_COMPLETED = 'completed'

MAINTENANCE_STATUSES = (
    MAINTENANCE_STATUS_PENDING,
    MAINTENANCE_STATUS_SCHEDULED,
    MAINTENANCE_STATUS_IN_PROGRESS,
    MAINTENANCE_STATUS_COMPLETED,
)


class MaintenanceRecord(CreatedBase):
    __tablename__ = 'maintenance_records'
    __table_args__ = (
        # at most one record per equipment, template and calendar day
        db.UniqueConstraint(
            'equipment_id', 'template_id', 'due_day',
            name='uq_maintenance_records_equipment_template_day'
        ),
    )

    equipment_id = db.Column(db.Integer, db.ForeignKey('equipment.id'), nullable=False, index=True)
    template_id = db.Column(db.Integer, db.ForeignKey('maintenance_templates.id'), nullable=True, index=True)
    due_date = db.Column(db.DateTime, nullable=False)
    due_day = db.Column(db.Date, nullable=False)
    status = db.Column(db.String(20), default=MAINTENANCE_STATUS_PENDING, nullable=False)

    # copied from the template when the record is created
    performed_by_id = db.Column(db.Integer, db.ForeignKey('persons.id'), nullable=True)
    performed_date = db.Column(db.DateTime, nullable=True)
    minutes_spent = db.Column(db.Integer, nullable=True)
    notes = db.Column(db.Text, nullable=True)

    # Relationships
    equipment = db.relationship('Equipment', back_populates='maintenance_records')
    template = db.relationship('MaintenanceTemplate', back_populates='maintenance_records')
    performed_by = db.relationship('Person', foreign_keys=[performed_by_id])

    @validates('due_date')
    def _sync_due_day(self, key, value):
        self.due_day = value.date() if value is not None else None
        return value

    def __repr__(self):
        return f'<MaintenanceRecord equipment={self.equipment_id} template={self.template_id} due={self.due_date}>'
