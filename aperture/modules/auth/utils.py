from datetime import datetime, timedelta, timezone
from functools import wraps

import jwt
from flask import current_app, g, jsonify, request

from ...core.logging_service import LoggingService


def get_jwt_secret():
    return current_app.config.get('JWT_SECRET_KEY') or current_app.config['SECRET_KEY']


def create_access_token(username):
    """Sign a short-lived token for an admin"""
    now = datetime.now(timezone.utc)
    payload = {
        'sub': username,
        'username': username,
        'iat': now,
        'exp': now + timedelta(minutes=current_app.config['JWT_EXPIRES_MINUTES']),
    }
    return jwt.encode(payload, get_jwt_secret(), algorithm=current_app.config['JWT_ALGORITHM'])


def decode_access_token(token):
    """Verify signature and expiry, raising jwt.InvalidTokenError on failure"""
    return jwt.decode(
        token,
        get_jwt_secret(),
        algorithms=[current_app.config['JWT_ALGORITHM']],
    )


def _token_from_header(auth_header):
    # "Bearer <token>" - the token is whatever follows the first space
    parts = (auth_header or '').split(' ')
    if len(parts) < 2 or not parts[1]:
        return None
    return parts[1]


def token_required(f):
    """Decorator to require a valid bearer token.

    401 when no token is sent, 403 when it does not verify.
    """
    @wraps(f)
    def decorated_function(*args, **kwargs):
        token = _token_from_header(request.headers.get('Authorization'))
        if not token:
            return jsonify({'error': 'Authentication required'}), 401

        try:
            payload = decode_access_token(token)
        except jwt.InvalidTokenError as e:
            LoggingService.log_security_event('Rejected bearer token', {'reason': str(e)})
            return jsonify({'error': 'Invalid or expired token'}), 403

        g.admin = payload
        return f(*args, **kwargs)

    return decorated_function
