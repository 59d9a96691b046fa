"""
Aperture Modules
================

Flask blueprints making up the portfolio JSON API.
"""

__all__ = ['auth', 'categories', 'photos', 'posts', 'about', 'health']
