"""
Debug data insertion
"""
