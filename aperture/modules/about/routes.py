import json

from flask import current_app, jsonify, request

from . import about_bp
from ..auth.utils import token_required
from ...core import storage
from ...core.database import Database
from ...core.helpers import get_payload, is_image_upload, text_field, utc_now_iso
from ...core.logging_service import LoggingService

ABOUT_KEY = 'about'

TEXT_FIELDS = ['paragraph1', 'paragraph2', 'paragraph3', 'experience', 'projects', 'awards']

DEFAULT_ABOUT = {
    'imageUrl': 'https://images.unsplash.com/photo-1452587925148-ce544e77e70d?w=1200',
    'paragraph1': 'Photography, for me, is the art of freezing a moment in time. '
                  'Every frame tells a story through light, shadow and composition.',
    'paragraph2': 'I work across portraits, landscapes and city streets, looking for '
                  'quiet details that usually go unnoticed.',
    'paragraph3': 'Get in touch if you would like to work together on a project.',
    'experience': '5+ Years',
    'projects': '100+',
    'awards': '3',
    'updatedAt': None,
}

# ===== Database Helper Functions =====

def get_about_db():
    """Stored about document, or None if it was never saved"""
    with Database.connect() as conn:
        row = conn.execute('SELECT value FROM site_settings WHERE key = ?', (ABOUT_KEY,)).fetchone()
    return json.loads(row['value']) if row else None

def save_about_db(document):
    """Upsert the whole about document"""
    with Database.connect() as conn:
        conn.execute('''
            INSERT INTO site_settings (key, value, updated_at)
            VALUES (?, ?, ?)
            ON CONFLICT(key) DO UPDATE SET
                value = excluded.value,
                updated_at = excluded.updated_at
        ''', (ABOUT_KEY, json.dumps(document), document['updatedAt']))
    return document

# ===== Routes =====

@about_bp.route('/about', methods=['GET'])
def get_about():
    """About page content"""
    try:
        return jsonify(get_about_db() or DEFAULT_ABOUT)
    except Exception as e:
        LoggingService.log_error_with_traceback('about', e)
        return jsonify({'error': 'Could not load about content'}), 500

@about_bp.route('/about', methods=['POST'])
@token_required
def save_about():
    """Replace about page content"""
    payload = get_payload()
    document = {field: text_field(payload, field) for field in TEXT_FIELDS}
    image_url_field = text_field(payload, 'imageUrl')

    try:
        current = get_about_db() or DEFAULT_ABOUT

        image = request.files.get('image')
        if image and image.filename:
            if not is_image_upload(image):
                return jsonify({'error': 'Image must be an image file'}), 400
            result = storage.upload_image(image.read(), image.filename, current_app.config['ABOUT_FOLDER'])
            image_url = result['url']
        else:
            image_url = image_url_field or current['imageUrl']

        document['imageUrl'] = image_url
        document['updatedAt'] = utc_now_iso()

        save_about_db(document)
    except Exception as e:
        LoggingService.log_error_with_traceback('about', e)
        return jsonify({'error': f'Could not save about content: {e}'}), 500

    LoggingService.log_user_action('about', 'updated about content')
    return jsonify(document)
