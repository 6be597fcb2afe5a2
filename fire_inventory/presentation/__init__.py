"""
Presentation layer: HTTP routes
"""
