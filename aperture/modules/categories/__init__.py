"""
Categories Module
=================

Named groupings of photos used for gallery filtering.

Provides:
- Public category listing
- Admin category creation (slug ids, duplicates rejected)
- Default categories on a fresh database
"""

from flask import Blueprint

categories_bp = Blueprint('categories', __name__, url_prefix='/api')

from . import routes
from .routes import seed_default_categories

__all__ = ['categories_bp', 'seed_default_categories']
