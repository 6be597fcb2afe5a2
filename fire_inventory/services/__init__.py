"""
Service layer: read-side queries
"""
