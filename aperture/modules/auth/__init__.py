"""
Aperture Auth Module

Provides admin authentication for the JSON API:
- Username/password login issuing a signed JWT
- Bearer token verification for protected routes
- Admin identity store with hashed passwords
"""

from flask import Blueprint

auth_bp = Blueprint('auth', __name__, url_prefix='/api')

from . import routes
from .database import AdminDatabase
from .utils import token_required, create_access_token, decode_access_token

__all__ = ['auth_bp', 'AdminDatabase', 'token_required', 'create_access_token', 'decode_access_token']
