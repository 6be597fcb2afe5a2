from fire_inventory.data.core.created_base import CreatedBase
from fire_inventory import db


class Person(CreatedBase):
    __tablename__ = 'persons'

    first_name = db.Column(db.String(100), nullable=False)
    last_name = db.Column(db.String(100), nullable=False)
    email = db.Column(db.String(255), nullable=True)
    phone = db.Column(db.String(50), nullable=True)
    role = db.Column(db.String(100), nullable=True)

    @property
    def full_name(self):
        return f"{self.first_name} {self.last_name}"

    def __repr__(self):
        return f'<Person {self.full_name}>'
