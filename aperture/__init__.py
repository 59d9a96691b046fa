"""
Aperture - Photography Portfolio Backend
========================================

A Flask extension serving the JSON API behind a photography portfolio and
blog site with an admin dashboard:
- Photo gallery with categories and multi-file uploads
- Blog posts with cover images
- Editable "about" page
- JWT admin authentication
- Local (Pillow) or Cloudinary media storage

Usage:
    from flask import Flask
    from aperture import Aperture

    app = Flask(__name__)
    Aperture(app)
"""

import importlib
import os
import secrets

from flask import current_app, jsonify, request, send_from_directory
from flask_cors import CORS

from .core.config import Config
from .core.database import Database
from .core.helpers import PayloadError
from .core.logging_service import LoggingService

__version__ = '0.1.0'

# (feature name, module, blueprint attribute)
MODULES = [
    ('auth', 'aperture.modules.auth', 'auth_bp'),
    ('categories', 'aperture.modules.categories', 'categories_bp'),
    ('photos', 'aperture.modules.photos', 'photos_bp'),
    ('posts', 'aperture.modules.posts', 'posts_bp'),
    ('about', 'aperture.modules.about', 'about_bp'),
    ('health', 'aperture.modules.health', 'health_bp'),
]


class Aperture:
    """Flask extension wiring config, database, storage and blueprints.

    Args:
        app: Flask application (or call init_app later).
        config: Optional dict. ``{'features': {'about': False}}`` skips a
            module's blueprint.
    """

    def __init__(self, app=None, config=None):
        self._config = config or {}
        self._registered = []
        if app is not None:
            self.init_app(app)

    def init_app(self, app):
        self._apply_config(app)
        self._setup_data_dir(app)
        self._setup_secrets(app)

        Database.init_db(app.config['DATABASE'])

        origins = app.config['CORS_ORIGINS']
        if origins != '*':
            origins = [o.strip() for o in origins.split(',') if o.strip()]
        CORS(app, resources={r'/api/*': {'origins': origins}})

        self._register_blueprints(app)
        self._register_media_route(app)
        self._register_error_handlers(app)
        app.before_request(self._auto_cleanup_logs)

        with app.app_context():
            self._seed(app)

        app.extensions['aperture'] = self

    def is_enabled(self, feature):
        return self._config.get('features', {}).get(feature, True)

    def get_registered_modules(self):
        return list(self._registered)

    # ------------------------------------------------------------------

    def _apply_config(self, app):
        """Copy Config defaults into app.config without clobbering app values"""
        for key in dir(Config):
            if key.isupper() and app.config.get(key) is None:
                app.config[key] = getattr(Config, key)

        data_dir = app.config['DATA_DIR']
        if not app.config.get('DATABASE'):
            app.config['DATABASE'] = os.path.join(data_dir, 'aperture.db')
        if not app.config.get('UPLOAD_FOLDER'):
            app.config['UPLOAD_FOLDER'] = os.path.join(data_dir, 'uploads')

        # Leave headroom over a full batch for the multipart envelope
        if app.config.get('MAX_CONTENT_LENGTH') is None:
            app.config['MAX_CONTENT_LENGTH'] = (
                app.config['MAX_FILES_PER_UPLOAD'] * app.config['MAX_FILE_SIZE'] + 1024 * 1024
            )

    def _setup_data_dir(self, app):
        os.makedirs(app.config['DATA_DIR'], exist_ok=True)
        if app.config['MEDIA_STORAGE'] == 'local':
            os.makedirs(app.config['UPLOAD_FOLDER'], exist_ok=True)

    def _setup_secrets(self, app):
        if not app.config.get('JWT_SECRET_KEY') and not app.config.get('SECRET_KEY'):
            app.config['JWT_SECRET_KEY'] = secrets.token_urlsafe(32)
            app.logger.warning(
                'No JWT_SECRET_KEY or FLASK_SECRET_KEY set; using a random key. '
                'Admin tokens will not survive a restart.'
            )

    def _register_blueprints(self, app):
        for name, module_path, attr in MODULES:
            if not self.is_enabled(name):
                continue
            blueprint = getattr(importlib.import_module(module_path), attr)
            app.register_blueprint(blueprint)
            self._registered.append(name)

    def _register_media_route(self, app):
        """Serve locally stored images under /uploads/"""
        def serve_upload(filename):
            return send_from_directory(app.config['UPLOAD_FOLDER'], filename)

        app.add_url_rule('/uploads/<path:filename>', 'aperture_uploads', serve_upload)

    def _register_error_handlers(self, app):
        messages = {404: 'Not found', 405: 'Method not allowed', 413: 'Upload is too large'}

        def api_error(e):
            if not request.path.startswith('/api/'):
                return e
            return jsonify({'error': messages.get(e.code, e.name)}), e.code

        for code in messages:
            app.register_error_handler(code, api_error)

        def bad_payload(e):
            return jsonify({'error': str(e)}), 400

        app.register_error_handler(PayloadError, bad_payload)

    def _auto_cleanup_logs(self):
        """Prune app_logs, rate-limited to once per LOG_CLEANUP_INTERVAL_HOURS"""
        config = current_app.config
        try:
            LoggingService.auto_cleanup(
                days_to_keep=config['LOG_RETENTION_DAYS'],
                max_rows=config['LOG_MAX_ROWS'],
                interval_hours=config['LOG_CLEANUP_INTERVAL_HOURS'],
            )
        except Exception as e:
            current_app.logger.warning(f"aperture: log cleanup failed: {e}")

    def _seed(self, app):
        from .modules.auth.database import AdminDatabase
        from .modules.categories import seed_default_categories

        username = app.config.get('ADMIN_USERNAME')
        if not app.config.get('ADMIN_PASSWORD'):
            app.logger.warning('ADMIN_PASSWORD is not set; no admin account was created')
        elif AdminDatabase.seed_admin(username, app.config['ADMIN_PASSWORD']):
            LoggingService.info('auth', f'Admin account created: {username}')

        if self.is_enabled('categories'):
            seed_default_categories()


__all__ = ['Aperture', 'Config', 'Database', 'LoggingService']
