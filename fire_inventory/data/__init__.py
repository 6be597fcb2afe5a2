"""
Data layer: SQLAlchemy models for the fire inventory
"""
