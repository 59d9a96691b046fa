"""
Blog Posts Module
=================

Blog article management for the portfolio site.

Provides:
- Public post listing and single post lookup by slug
- Post creation and editing with optional cover image upload
- Post deletion
"""

from flask import Blueprint

posts_bp = Blueprint('posts', __name__, url_prefix='/api')

from . import routes

__all__ = ['posts_bp']
