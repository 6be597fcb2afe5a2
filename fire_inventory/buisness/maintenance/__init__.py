"""
Maintenance business logic: generation and notifications
"""
