"""
Business-time service.

A Flask API that adds business days and business hours to a timestamp,
following a fixed work schedule, weekends and a remote holiday list.
"""

__version__ = "1.0.0"
