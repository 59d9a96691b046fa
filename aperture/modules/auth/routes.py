"""
Auth Routes
===========

- POST /api/login        -- exchange admin credentials for a JWT
- GET  /api/auth/verify  -- check a stored token is still valid
"""

from flask import g, jsonify

from . import auth_bp
from .database import AdminDatabase
from .utils import create_access_token, token_required
from ...core.helpers import get_payload, text_field
from ...core.logging_service import LoggingService


@auth_bp.route('/login', methods=['POST'])
def login():
    """Admin login"""
    data = get_payload()
    username = text_field(data, 'username')
    password = text_field(data, 'password', strip=False)

    if not username or not password:
        return jsonify({'error': 'Username and password are required'}), 400

    try:
        admin = AdminDatabase.verify_credentials(username, password)
    except Exception as e:
        LoggingService.log_error_with_traceback('auth', e)
        return jsonify({'error': 'Login failed'}), 500

    if not admin:
        LoggingService.log_security_event('Failed admin login', {'username': username})
        return jsonify({'error': 'Invalid username or password'}), 401

    AdminDatabase.update_last_login(admin['id'])
    LoggingService.log_user_action('auth', 'login', user_id=username)
    return jsonify({'token': create_access_token(admin['username'])})


@auth_bp.route('/auth/verify', methods=['GET'])
@token_required
def verify():
    """Token check for the admin dashboard"""
    return jsonify({'valid': True, 'username': g.admin.get('username')})
