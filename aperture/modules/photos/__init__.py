"""
Photos Module
=============

Portfolio photo management.

Provides:
- Public photo listing (newest first, optional category filter)
- Multi-file upload to the media store
- Photo deletion from the media store and the database
"""

from flask import Blueprint

photos_bp = Blueprint('photos', __name__, url_prefix='/api')

from . import routes
from .database import PhotoDatabase

__all__ = ['photos_bp', 'PhotoDatabase']
