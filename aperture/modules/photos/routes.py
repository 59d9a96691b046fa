"""
Photo Routes
============

- GET    /api/photos          -- list photos (public, ?category= filter)
- POST   /api/upload          -- multipart upload, files under "photos"
- DELETE /api/photos?id=<id>  -- remove a photo
"""

import os

from flask import current_app, jsonify, request

from . import photos_bp
from .database import PhotoDatabase
from ..auth.utils import token_required
from ...core import storage
from ...core.helpers import is_image_upload, no_cache, utc_now_iso
from ...core.logging_service import LoggingService


def _validate_uploads(files):
    """Read every file up front so nothing is stored if one is invalid.

    Returns (list of (filename, bytes), error message or None).
    """
    max_files = current_app.config['MAX_FILES_PER_UPLOAD']
    max_size = current_app.config['MAX_FILE_SIZE']

    if not files:
        return [], 'No files uploaded'
    if len(files) > max_files:
        return [], f'At most {max_files} files can be uploaded at once'

    payloads = []
    for file in files:
        if not is_image_upload(file):
            return [], f'Only image files can be uploaded: {file.filename}'
        file_bytes = file.read()
        if len(file_bytes) > max_size:
            return [], f'File is too large: {file.filename}'
        payloads.append((file.filename, file_bytes))
    return payloads, None


@photos_bp.route('/photos', methods=['GET'])
def get_photos():
    """List photos"""
    try:
        photos = PhotoDatabase.list_photos(category=request.args.get('category') or None)
        return no_cache(jsonify(photos))
    except Exception as e:
        LoggingService.log_error_with_traceback('photos', e)
        return jsonify({'error': 'Could not load photos'}), 500


@photos_bp.route('/upload', methods=['POST'])
@token_required
def upload_photos():
    """Upload one or more photos"""
    files = [f for f in request.files.getlist('photos') if f and f.filename]
    payloads, error = _validate_uploads(files)
    if error:
        return jsonify({'error': error}), 400

    if not storage.is_configured():
        LoggingService.error('photos', 'Media storage configuration missing')
        return jsonify({'error': 'Server configuration error: media storage is not configured'}), 500

    category = (request.form.get('category') or '').strip() or 'all'
    folder = current_app.config['PHOTOS_FOLDER']
    uploaded = []

    # Each file is stored independently; earlier files stay if a later one fails
    try:
        for filename, file_bytes in payloads:
            result = storage.upload_image(file_bytes, filename, folder)
            photo = {
                'id': result['public_id'],
                'url': result['url'],
                'originalUrl': result['original_url'],
                'category': category,
                'title': os.path.splitext(filename)[0],
                'width': result['width'],
                'height': result['height'],
                'date': utc_now_iso(),
            }
            PhotoDatabase.create_photo(photo)
            uploaded.append(photo)
    except Exception as e:
        LoggingService.log_error_with_traceback('photos', e, {
            'stored': [p['id'] for p in uploaded],
            'requested': len(payloads),
        })
        return jsonify({'error': f'Upload error: {e}'}), 500

    LoggingService.log_user_action('photos', f'uploaded {len(uploaded)} photo(s) to {category}')
    return jsonify(uploaded)


@photos_bp.route('/photos', methods=['DELETE'])
@token_required
def delete_photo():
    """Delete a photo by id (query param, ids may contain slashes)"""
    photo_id = request.args.get('id')
    if not photo_id:
        return jsonify({'error': 'ID is required'}), 400

    try:
        if not PhotoDatabase.get_photo(photo_id):
            return jsonify({'error': 'Photo not found'}), 404

        # Best effort - the record goes even if the media store refuses
        try:
            storage.delete_image(photo_id)
        except Exception as e:
            LoggingService.error('photos', f'Media delete failed for {photo_id}: {e}')

        PhotoDatabase.delete_photo(photo_id)
    except Exception as e:
        LoggingService.log_error_with_traceback('photos', e)
        return jsonify({'error': 'Delete error'}), 500

    LoggingService.log_user_action('photos', f'deleted photo {photo_id}')
    return jsonify({'message': 'Deleted', 'id': photo_id})
