from fire_inventory.data.core.created_base import CreatedBase
from fire_inventory import db

EQUIPMENT_STATUS_READY = 'ready'
EQUIPMENT_STATUS_DEFECTIVE = 'defective'
EQUIPMENT_STATUS_INSPECTION_DUE = 'inspection_due'
EQUIPMENT_STATUS_IN_MAINTENANCE = 'in_maintenance'

EQUIPMENT_STATUSES = (
    EQUIPMENT_STATUS_READY,
    EQUIPMENT_STATUS_DEFECTIVE,
    EQUIPMENT_STATUS_INSPECTION_DUE,
    EQUIPMENT_STATUS_IN_MAINTENANCE,
)


class Equipment(CreatedBase):
    __tablename__ = 'equipment'

    name = db.Column(db.String(200), nullable=False)
    inventory_number = db.Column(db.String(100), nullable=True)
    serial_number = db.Column(db.String(100), nullable=True)
    barcode = db.Column(db.String(100), nullable=True)
    manufacturer = db.Column(db.String(100), nullable=True)
    model = db.Column(db.String(100), nullable=True)
    status = db.Column(db.String(30), default=EQUIPMENT_STATUS_READY, nullable=False)
    category_id = db.Column(db.Integer, db.ForeignKey('categories.id'), nullable=True)
    responsible_person_id = db.Column(db.Integer, db.ForeignKey('persons.id'), nullable=True)
    purchase_date = db.Column(db.Date, nullable=True)
    last_check_date = db.Column(db.Date, nullable=True)
    next_check_date = db.Column(db.Date, nullable=True)
    notes = db.Column(db.Text, nullable=True)

    # Relationships
    category = db.relationship('Category', back_populates='equipment')
    responsible_person = db.relationship('Person', foreign_keys=[responsible_person_id])
    maintenance_records = db.relationship('MaintenanceRecord', back_populates='equipment', lazy='dynamic')

    def __repr__(self):
        return f'<Equipment {self.name} ({self.inventory_number})>'
