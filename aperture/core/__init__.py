"""
Aperture Core
=============

Core utilities and shared functionality for Aperture modules.
"""

from .config import Config
from .database import Database
from .logging_service import LoggingService, logger

__all__ = ['Config', 'Database', 'LoggingService', 'logger']
