"""
Maintenance routes
"""
