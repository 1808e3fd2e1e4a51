"""
CardHub
ID card rendering and QR verification for students, teachers and staff
"""

__version__ = "1.0.0"
