"""
Scheduled job routes
"""
