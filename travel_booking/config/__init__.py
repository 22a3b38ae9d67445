"""
Configuration package for the travel booking service.

Contains environment settings and database connection management.
"""

from travel_booking.config.settings import Settings, get_settings, settings
from travel_booking.config.database import SessionLocal, init_db

__all__ = ['Settings', 'get_settings', 'settings', 'SessionLocal', 'init_db']
