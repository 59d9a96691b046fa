"""
Shared helpers for slugs, excerpts, timestamps, request bodies and response headers.
"""

import re
from datetime import datetime, timezone

from flask import request

EXCERPT_LENGTH = 150


def slugify(text):
    """Create a URL-friendly slug ("Night Lights!" -> "night-lights")"""
    if not text:
        return ''
    slug = re.sub(r'[^\w\s-]', '', text.lower())
    slug = re.sub(r'[-\s]+', '-', slug)
    return slug.strip('-')


def make_excerpt(content, length=EXCERPT_LENGTH):
    """First `length` characters of the content followed by an ellipsis"""
    return f"{(content or '')[:length]}..."


def utc_now_iso():
    """Current UTC time as an ISO-8601 string with millisecond precision"""
    return datetime.now(timezone.utc).isoformat(timespec='milliseconds').replace('+00:00', 'Z')


def no_cache(response):
    """Stop browsers (mobile Safari in particular) from caching a listing"""
    response.headers['Cache-Control'] = 'no-store, no-cache, must-revalidate, proxy-revalidate'
    response.headers['Pragma'] = 'no-cache'
    response.headers['Expires'] = '0'
    return response


def is_image_upload(file):
    """True when a werkzeug FileStorage looks like an image upload"""
    return bool(file and file.filename and (file.mimetype or '').startswith('image/'))


class PayloadError(ValueError):
    """Request body is not an object of text fields"""


def get_payload():
    """Form fields for form/multipart requests, the JSON object otherwise.

    Raises PayloadError when the JSON body is an array or a scalar.
    """
    if request.form:
        return request.form.to_dict()
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise PayloadError('Request body must be a JSON object')
    return data


def text_field(payload, key, strip=True):
    """String value of `key` in the payload, '' when missing or null"""
    value = payload.get(key)
    if value is None:
        return ''
    if not isinstance(value, str):
        raise PayloadError(f"'{key}' must be a string")
    return value.strip() if strip else value
