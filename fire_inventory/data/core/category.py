from fire_inventory.data.core.created_base import CreatedBase
from fire_inventory import db


class Category(CreatedBase):
    __tablename__ = 'categories'

    name = db.Column(db.String(100), unique=True, nullable=False)
    description = db.Column(db.Text, nullable=True)

    # Relationships
    equipment = db.relationship('Equipment', back_populates='category', lazy='dynamic')
    maintenance_templates = db.relationship('MaintenanceTemplate', back_populates='category', lazy='dynamic')

    def __repr__(self):
        return f'<Category {self.name}>'
