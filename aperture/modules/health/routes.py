import time
from datetime import datetime

from flask import current_app, jsonify

from . import health_bp
from ...core import storage
from ...core.database import Database

_started_at = time.time()


def _check_database():
    try:
        Database.ping()
        return 'ok'
    except Exception as e:
        return f'error: {e}'


@health_bp.route('/health', methods=['GET'])
def health():
    """Liveness plus database and media storage checks"""
    database = _check_database()
    status = 'ok' if database == 'ok' else 'critical'

    result = {
        'status': status,
        'timestamp': datetime.now().isoformat(),
        'checks': {
            'database': database,
            'media_storage': storage.get_storage_type(),
            'media_configured': storage.is_configured(),
            'uptime_seconds': int(time.time() - _started_at),
        },
    }
    if not result['checks']['media_configured']:
        current_app.logger.debug('health: media storage is not configured')
    return jsonify(result), 200 if status == 'ok' else 503
