"""
Core models package for the fire inventory
"""

from .category import Category
from .person import Person
from .equipment import Equipment
from .setting import Setting

__all__ = [
    'Category',
    'Person',
    'Equipment',
    'Setting',
]
