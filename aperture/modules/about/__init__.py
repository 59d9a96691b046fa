"""
About Module
============

The single "about" document shown on the about page, with a built-in
default until an admin saves one.
"""

from flask import Blueprint

about_bp = Blueprint('about', __name__, url_prefix='/api')

from . import routes

__all__ = ['about_bp']
