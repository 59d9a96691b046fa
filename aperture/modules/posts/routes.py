"""
Blog Post Routes
================

Public:
- GET /api/posts           -- all posts, newest first
- GET /api/posts/<slug>    -- single post

Admin (bearer token):
- POST   /api/posts        -- create (multipart or JSON)
- PUT    /api/posts?id=    -- update
- DELETE /api/posts?id=    -- delete record (cover image is left in storage)
"""

import time

from flask import current_app, jsonify, request

from . import posts_bp
from ..auth.utils import token_required
from ...core import storage
from ...core.database import Database
from ...core.helpers import (
    get_payload, is_image_upload, make_excerpt, slugify, text_field, utc_now_iso,
)
from ...core.logging_service import LoggingService

POST_COLUMNS = 'id, title, slug, content, excerpt, cover_image, date, updated_at'

# ===== Database Helper Functions =====

def _row_to_dict(row):
    post = {
        'id': row['id'],
        'title': row['title'],
        'content': row['content'],
        'excerpt': row['excerpt'],
        'coverImage': row['cover_image'] or '',
        'date': row['date'],
        'slug': row['slug'],
    }
    if row['updated_at']:
        post['updatedAt'] = row['updated_at']
    return post

def create_slug(title, exclude_id=None):
    """Create URL-friendly slug with uniqueness checking"""
    slug = slugify(title) or 'post'

    base_slug = slug
    counter = 1

    with Database.connect() as conn:
        while True:
            row = conn.execute('SELECT id FROM posts WHERE slug = ?', (slug,)).fetchone()
            if not row or row['id'] == exclude_id:
                break
            slug = f"{base_slug}-{counter}"
            counter += 1

    return slug

def get_all_posts_db():
    with Database.connect() as conn:
        rows = conn.execute(f'SELECT {POST_COLUMNS} FROM posts ORDER BY date DESC, rowid DESC').fetchall()
    return [_row_to_dict(row) for row in rows]

def get_post_db(post_id):
    with Database.connect() as conn:
        row = conn.execute(f'SELECT {POST_COLUMNS} FROM posts WHERE id = ?', (post_id,)).fetchone()
    return _row_to_dict(row) if row else None

def get_post_by_slug_db(slug):
    with Database.connect() as conn:
        row = conn.execute(f'SELECT {POST_COLUMNS} FROM posts WHERE slug = ?', (slug,)).fetchone()
    return _row_to_dict(row) if row else None

def create_post_db(title, content, excerpt=None, cover_image=None):
    """Create new post, returns it in API shape"""
    slug = create_slug(title)
    post = {
        'id': f"{int(time.time() * 1000)}-{slug}",
        'title': title,
        'content': content,
        'excerpt': excerpt or make_excerpt(content),
        'coverImage': cover_image or '',
        'date': utc_now_iso(),
        'slug': slug,
    }

    with Database.connect() as conn:
        conn.execute(f'''
            INSERT INTO posts ({POST_COLUMNS})
            VALUES (?, ?, ?, ?, ?, ?, ?, NULL)
        ''', (post['id'], post['title'], post['slug'], post['content'],
              post['excerpt'], post['coverImage'], post['date']))
    return post

def update_post_db(post_id, title, content, excerpt=None, cover_image=None):
    """Update an existing post.

    Title, content and slug are always replaced; excerpt and cover only when
    given. Returns the updated post, or None if it does not exist.
    """
    current = get_post_db(post_id)
    if not current:
        return None

    slug = current['slug']
    if current['title'] != title:
        slug = create_slug(title, exclude_id=post_id)

    updated = dict(current)
    updated.update({
        'title': title,
        'content': content,
        'slug': slug,
        'updatedAt': utc_now_iso(),
    })
    if excerpt:
        updated['excerpt'] = excerpt
    if cover_image:
        updated['coverImage'] = cover_image

    with Database.connect() as conn:
        cursor = conn.execute('''
            UPDATE posts
            SET title = ?, slug = ?, content = ?, excerpt = ?, cover_image = ?, updated_at = ?
            WHERE id = ?
        ''', (updated['title'], updated['slug'], updated['content'], updated['excerpt'],
              updated['coverImage'], updated['updatedAt'], post_id))
        if cursor.rowcount == 0:
            return None
    return updated

def delete_post_db(post_id):
    with Database.connect() as conn:
        cursor = conn.execute('DELETE FROM posts WHERE id = ?', (post_id,))
        return cursor.rowcount > 0

# ===== Request Helpers =====

def _resolve_cover_image(cover_url):
    """Upload a cover file if one was sent, else fall back to the URL field.

    Returns (url or None, error message or None).
    """
    file = request.files.get('coverImage')
    if file and file.filename:
        if not is_image_upload(file):
            return None, 'Cover image must be an image file'
        result = storage.upload_image(file.read(), file.filename, current_app.config['POSTS_FOLDER'])
        return result['url'], None

    return cover_url or None, None

# ===== Routes =====

@posts_bp.route('/posts', methods=['GET'])
def get_posts():
    """List posts"""
    try:
        return jsonify(get_all_posts_db())
    except Exception as e:
        LoggingService.log_error_with_traceback('posts', e)
        return jsonify({'error': 'Could not load posts'}), 500

@posts_bp.route('/posts/<slug>', methods=['GET'])
def get_post(slug):
    """Get single post by slug"""
    try:
        post = get_post_by_slug_db(slug)
    except Exception as e:
        LoggingService.log_error_with_traceback('posts', e)
        return jsonify({'error': 'Could not load post'}), 500

    if not post:
        return jsonify({'error': 'Post not found'}), 404
    return jsonify(post)

@posts_bp.route('/posts', methods=['POST'])
@token_required
def create_post():
    """Create post"""
    payload = get_payload()
    title = text_field(payload, 'title')
    content = text_field(payload, 'content')
    excerpt = text_field(payload, 'excerpt') or None
    cover_url = text_field(payload, 'coverImage')

    if not title or not content:
        return jsonify({'error': 'Title and content are required'}), 400

    try:
        cover_image, error = _resolve_cover_image(cover_url)
        if error:
            return jsonify({'error': error}), 400

        post = create_post_db(title, content, excerpt=excerpt, cover_image=cover_image)
    except Exception as e:
        LoggingService.log_error_with_traceback('posts', e)
        return jsonify({'error': f'Could not create post: {e}'}), 500

    LoggingService.log_user_action('posts', f"created post {post['id']}")
    return jsonify(post), 201

@posts_bp.route('/posts', methods=['PUT'])
@token_required
def update_post():
    """Update post"""
    post_id = request.args.get('id')
    if not post_id:
        return jsonify({'error': 'ID is required'}), 400

    payload = get_payload()
    title = text_field(payload, 'title')
    content = text_field(payload, 'content')
    excerpt = text_field(payload, 'excerpt') or None
    cover_url = text_field(payload, 'coverImage')

    if not title or not content:
        return jsonify({'error': 'Title and content are required'}), 400

    try:
        if not get_post_db(post_id):
            return jsonify({'error': 'Post not found'}), 404

        cover_image, error = _resolve_cover_image(cover_url)
        if error:
            return jsonify({'error': error}), 400

        post = update_post_db(post_id, title, content, excerpt=excerpt, cover_image=cover_image)
    except Exception as e:
        LoggingService.log_error_with_traceback('posts', e)
        return jsonify({'error': f'Could not update post: {e}'}), 500

    if not post:
        return jsonify({'error': 'Post not found'}), 404

    LoggingService.log_user_action('posts', f'updated post {post_id}')
    return jsonify(post)

@posts_bp.route('/posts', methods=['DELETE'])
@token_required
def delete_post():
    """Delete post"""
    post_id = request.args.get('id')
    if not post_id:
        return jsonify({'error': 'ID is required'}), 400

    try:
        if not delete_post_db(post_id):
            return jsonify({'error': 'Post not found'}), 404
    except Exception as e:
        LoggingService.log_error_with_traceback('posts', e)
        return jsonify({'error': 'Could not delete post'}), 500

    LoggingService.log_user_action('posts', f'deleted post {post_id}')
    return jsonify({'message': 'Deleted', 'id': post_id})
