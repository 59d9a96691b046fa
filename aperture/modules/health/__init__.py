"""
Health Module
=============

Public liveness endpoint used by the hosting platform.
"""

from flask import Blueprint

health_bp = Blueprint('health', __name__, url_prefix='/api')

from . import routes

__all__ = ['health_bp']
