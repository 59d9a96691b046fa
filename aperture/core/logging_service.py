"""
Centralized logging service for Aperture.
Provides structured logging with database storage and easy integration.
"""

import json
import logging
import traceback
from datetime import datetime, timedelta

from flask import current_app, has_app_context, has_request_context, request

from .database import Database

console = logging.getLogger('aperture')


class LoggingService:
    """Centralized logging service for application-wide logging"""

    @staticmethod
    def _get_db_path():
        if not has_app_context():
            return None
        return current_app.config.get('DATABASE')

    @staticmethod
    def _get_request_context():
        """Extract request context information"""
        if not has_request_context():
            return None, None, None

        ip_address = request.headers.get('X-Forwarded-For', request.remote_addr)
        if ip_address and ',' in ip_address:
            ip_address = ip_address.split(',')[0].strip()

        user_agent = request.headers.get('User-Agent', '')
        return ip_address, user_agent, request.path

    @staticmethod
    def log(level, source, message, details=None, user_id=None):
        """
        Log a message to the database and the "aperture" logger

        Args:
            level (str): Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            source (str): Source component (photos, posts, auth, etc.)
            message (str): Main log message
            details (str/dict): Additional details (JSON-encoded if dict)
            user_id (str): Optional user identifier
        """
        level = level.upper()
        if isinstance(details, dict):
            details = json.dumps(details, indent=2, default=str)

        console.log(getattr(logging, level, logging.INFO), f"[{source}] {message}")
        if details:
            console.debug(f"[{source}] details: {details}")

        db_path = LoggingService._get_db_path()
        if not db_path:
            return

        try:
            ip_address, user_agent, request_path = LoggingService._get_request_context()
            with Database.connect(db_path) as conn:
                conn.execute("""
                    INSERT INTO app_logs
                    (timestamp, level, source, message, details, ip_address, user_agent, request_path, user_id)
                    VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
                """, (
                    datetime.now().isoformat(), level, source, message, details,
                    ip_address, user_agent, request_path, user_id
                ))
        except Exception as e:
            # Console entry above is the fallback
            console.warning(f"Logging service error: {e}")

    @staticmethod
    def debug(source, message, details=None, user_id=None):
        LoggingService.log('DEBUG', source, message, details, user_id)

    @staticmethod
    def info(source, message, details=None, user_id=None):
        LoggingService.log('INFO', source, message, details, user_id)

    @staticmethod
    def warning(source, message, details=None, user_id=None):
        LoggingService.log('WARNING', source, message, details, user_id)

    @staticmethod
    def error(source, message, details=None, user_id=None):
        LoggingService.log('ERROR', source, message, details, user_id)

    @staticmethod
    def critical(source, message, details=None, user_id=None):
        LoggingService.log('CRITICAL', source, message, details, user_id)

    @staticmethod
    def log_user_action(source, action, user_id=None, details=None):
        """Log admin actions (login, upload, delete, etc.)"""
        LoggingService.info(source, f"User action: {action}", details, user_id)

    @staticmethod
    def log_error_with_traceback(source, error, details=None):
        """Log error with full traceback"""
        error_details = {
            'error_type': type(error).__name__,
            'error_message': str(error),
            'traceback': traceback.format_exc()
        }
        if details:
            error_details['additional_details'] = details

        LoggingService.error(source, f"Exception occurred: {type(error).__name__}", error_details)

    @staticmethod
    def log_security_event(message, details=None):
        """Log security-related events"""
        LoggingService.warning('security', message, details)

    @staticmethod
    def get_recent_logs(limit=50, level=None):
        """Most recent log rows, newest first"""
        db_path = LoggingService._get_db_path()
        if not db_path:
            return []

        with Database.connect(db_path) as conn:
            if level:
                rows = conn.execute(
                    'SELECT * FROM app_logs WHERE level = ? ORDER BY id DESC LIMIT ?',
                    (level.upper(), limit)
                ).fetchall()
            else:
                rows = conn.execute(
                    'SELECT * FROM app_logs ORDER BY id DESC LIMIT ?', (limit,)
                ).fetchall()
        return [dict(row) for row in rows]

    @staticmethod
    def cleanup_old_logs(days_to_keep=30, max_rows=None):
        """Delete entries older than `days_to_keep` and, when `max_rows` is
        given, all but the newest `max_rows` entries.

        Returns the number of deleted rows.
        """
        db_path = LoggingService._get_db_path()
        if not db_path:
            return 0

        cutoff_iso = (datetime.now() - timedelta(days=days_to_keep)).isoformat()
        try:
            with Database.connect(db_path) as conn:
                cursor = conn.execute('DELETE FROM app_logs WHERE timestamp < ?', (cutoff_iso,))
                deleted_count = cursor.rowcount
                if max_rows:
                    cursor = conn.execute('''
                        DELETE FROM app_logs WHERE id NOT IN (
                            SELECT id FROM app_logs ORDER BY id DESC LIMIT ?
                        )
                    ''', (max_rows,))
                    deleted_count += cursor.rowcount

            LoggingService.info('log_cleanup', f"Cleaned up {deleted_count} old log entries")
            return deleted_count
        except Exception as e:
            LoggingService.error('system', f"Failed to cleanup old logs: {e}")
            return 0

    @staticmethod
    def auto_cleanup(days_to_keep=30, max_rows=None, interval_hours=6):
        """Run cleanup_old_logs unless it already ran within `interval_hours`.

        Rate-limited via the 'log_cleanup' rows cleanup_old_logs writes.
        Returns the deleted count, or None when skipped.
        """
        db_path = LoggingService._get_db_path()
        if not db_path:
            return None

        cutoff = (datetime.now() - timedelta(hours=interval_hours)).isoformat()
        with Database.connect(db_path) as conn:
            recent = conn.execute("""
                SELECT COUNT(*) FROM app_logs
                WHERE source = 'log_cleanup'
                AND timestamp > ?
            """, (cutoff,)).fetchone()[0]
        if recent:
            return None

        return LoggingService.cleanup_old_logs(days_to_keep, max_rows)


# Convenience instance for easy importing
logger = LoggingService()
