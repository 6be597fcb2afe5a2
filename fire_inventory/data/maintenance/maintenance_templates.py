from fire_inventory.data.core.created_base import CreatedBase
from fire_inventory import db


class MaintenanceTemplate(CreatedBase):
    __tablename__ = 'maintenance_templates'

    name = db.Column(db.String(200), nullable=False)
    description = db.Column(db.Text, nullable=True)
    category_id = db.Column(db.Integer, db.ForeignKey('categories.id'), nullable=True)

    # frequency
    interval_months = db.Column(db.Integer, nullable=False)

    # who performs the check
    responsible_person_id = db.Column(db.Integer, db.ForeignKey('persons.id'), nullable=True)

    estimated_minutes = db.Column(db.Integer, nullable=True)
    checks = db.Column(db.Text, nullable=True)
    checklist_url = db.Column(db.String(500), nullable=True)

    # Relationships
    category = db.relationship('Category', back_populates='maintenance_templates')
    responsible_person = db.relationship('Person', foreign_keys=[responsible_person_id])
    maintenance_records = db.relationship('MaintenanceRecord', back_populates='template', lazy='dynamic')

    def __repr__(self):
        return f'<MaintenanceTemplate {self.name} every {self.interval_months} months>'
