"""
Business layer for the fire inventory
"""
