"""
Appointment Booking Service

A small FastAPI backend that registers users, checks their credentials,
books doctor/date/slot combinations once and lists appointments.
"""

__version__ = "1.0.0"
