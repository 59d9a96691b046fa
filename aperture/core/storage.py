"""
Media Storage
=============

Image upload with Cloudinary / local branching.

Both backends return the same shape:
    {'public_id', 'url', 'original_url', 'width', 'height'}

`public_id` is "<folder>/<name>" in both cases and is what photo records use
as their id, so deletes can go straight back to the store.
"""

import io
import os
import secrets
import time

from flask import current_app
from PIL import Image, ImageOps
from werkzeug.utils import safe_join, secure_filename


class StorageError(Exception):
    """Raised when the media store cannot accept or remove a file"""


def get_storage_type():
    """Get storage type (local or cloudinary)"""
    return (current_app.config.get('MEDIA_STORAGE') or 'local').lower()


def is_cloudinary():
    return get_storage_type() == 'cloudinary'


def get_cloudinary_config():
    return {
        'cloud_name': current_app.config.get('CLOUDINARY_CLOUD_NAME'),
        'api_key': current_app.config.get('CLOUDINARY_API_KEY'),
        'api_secret': current_app.config.get('CLOUDINARY_API_SECRET'),
    }


def is_configured():
    """Whether the selected backend can accept uploads"""
    if is_cloudinary():
        return all(get_cloudinary_config().values())
    return bool(current_app.config.get('UPLOAD_FOLDER'))


def upload_image(file_bytes, filename, folder):
    """Upload an image to Cloudinary or the local upload folder.

    Args:
        file_bytes: Raw bytes of the uploaded file.
        filename: Original client filename (used for the extension only).
        folder: Subfolder name (e.g. "portfolio", "blog", "about").

    Returns:
        dict with public_id, url, original_url, width and height.
    """
    if not is_configured():
        raise StorageError(f"Media storage '{get_storage_type()}' is not configured")

    if is_cloudinary():
        return _upload_to_cloudinary(file_bytes, folder)
    return _save_locally(file_bytes, filename, folder)


def _upload_to_cloudinary(file_bytes, folder):
    """Upload to Cloudinary, letting it limit the width and pick quality."""
    import cloudinary
    import cloudinary.uploader

    cloudinary.config(secure=True, **get_cloudinary_config())

    result = cloudinary.uploader.upload(
        io.BytesIO(file_bytes),
        folder=folder,
        transformation=[
            {'width': current_app.config['MAX_IMAGE_WIDTH'], 'crop': 'limit'},
            {'quality': 'auto'},
        ],
    )

    return {
        'public_id': result['public_id'],
        'url': result['secure_url'],
        'original_url': result['secure_url'],
        'width': result.get('width'),
        'height': result.get('height'),
    }


def _new_file_stem():
    return f"{int(time.time() * 1000)}-{secrets.token_hex(4)}"


def _save_locally(file_bytes, filename, folder):
    """Keep the original and write a resized JPEG web copy."""
    upload_root = current_app.config['UPLOAD_FOLDER']
    max_width = current_app.config['MAX_IMAGE_WIDTH']
    quality = current_app.config['IMAGE_QUALITY']

    img = Image.open(io.BytesIO(file_bytes))
    img = ImageOps.exif_transpose(img)

    if img.width > max_width:
        new_height = max(1, round(img.height * max_width / img.width))
        img = img.resize((max_width, new_height), Image.Resampling.LANCZOS)

    # JPEG has no alpha or palette
    if img.mode not in ('RGB', 'L'):
        img = img.convert('RGB')

    stem = _new_file_stem()
    safe_name = secure_filename(filename or '')
    ext = safe_name.rsplit('.', 1)[-1].lower() if '.' in safe_name else 'jpg'

    web_dir = os.path.join(upload_root, folder)
    originals_dir = os.path.join(web_dir, 'originals')
    os.makedirs(originals_dir, exist_ok=True)

    with open(os.path.join(originals_dir, f"{stem}.{ext}"), 'wb') as f:
        f.write(file_bytes)
    img.save(os.path.join(web_dir, f"{stem}.jpg"), format='JPEG', quality=quality)

    return {
        'public_id': f"{folder}/{stem}",
        'url': f"/uploads/{folder}/{stem}.jpg",
        'original_url': f"/uploads/{folder}/originals/{stem}.{ext}",
        'width': img.width,
        'height': img.height,
    }


def delete_image(public_id):
    """Delete an image by its public id.

    Returns True when something was removed, False when nothing matched.
    Raises on store failures; callers decide whether that matters.
    """
    if not public_id:
        return False

    if is_cloudinary():
        return _delete_cloudinary_image(public_id)
    return _delete_local_image(public_id)


def _delete_cloudinary_image(public_id):
    import cloudinary
    import cloudinary.uploader

    cloudinary.config(secure=True, **get_cloudinary_config())
    result = cloudinary.uploader.destroy(public_id)
    return result.get('result') == 'ok'


def _delete_local_image(public_id):
    upload_root = current_app.config['UPLOAD_FOLDER']
    if '/' not in public_id:
        return False

    folder, stem = public_id.rsplit('/', 1)
    web_path = safe_join(upload_root, folder, f"{stem}.jpg")
    originals_dir = safe_join(upload_root, folder, 'originals')
    if web_path is None or originals_dir is None:
        raise StorageError(f"Refusing to delete outside the upload folder: {public_id}")

    removed = False
    if os.path.isfile(web_path):
        os.unlink(web_path)
        removed = True

    if os.path.isdir(originals_dir):
        for name in os.listdir(originals_dir):
            if name.rsplit('.', 1)[0] == stem:
                os.unlink(os.path.join(originals_dir, name))
                removed = True

    return removed
