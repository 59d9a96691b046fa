import sqlite3

from flask import jsonify

from . import categories_bp
from ..auth.utils import token_required
from ...core.database import Database
from ...core.helpers import get_payload, no_cache, slugify, text_field
from ...core.logging_service import LoggingService

DEFAULT_CATEGORIES = [
    {'id': 'portrait', 'name': 'Portrait'},
    {'id': 'landscape', 'name': 'Landscape'},
    {'id': 'urban', 'name': 'Urban'},
    {'id': 'minimal', 'name': 'Minimal'},
]

# ===== Database Helper Functions =====

def get_all_categories_db():
    with Database.connect() as conn:
        rows = conn.execute('SELECT id, name FROM categories ORDER BY name').fetchall()
    return [{'id': row['id'], 'name': row['name']} for row in rows]

def create_category_db(category_id, name):
    """Insert a category, returns False when the id is already taken"""
    try:
        with Database.connect() as conn:
            conn.execute('INSERT INTO categories (id, name) VALUES (?, ?)', (category_id, name))
        return True
    except sqlite3.IntegrityError:
        return False

def seed_default_categories():
    """Populate the default categories when the table is empty"""
    with Database.connect() as conn:
        count = conn.execute('SELECT COUNT(*) FROM categories').fetchone()[0]
        if count:
            return 0
        conn.executemany(
            'INSERT INTO categories (id, name) VALUES (?, ?)',
            [(c['id'], c['name']) for c in DEFAULT_CATEGORIES]
        )
    LoggingService.info('categories', 'Default categories created')
    return len(DEFAULT_CATEGORIES)

# ===== Routes =====

@categories_bp.route('/categories', methods=['GET'])
def get_categories():
    """List categories"""
    try:
        return no_cache(jsonify(get_all_categories_db()))
    except Exception as e:
        LoggingService.log_error_with_traceback('categories', e)
        return jsonify({'error': 'Could not load categories'}), 500

@categories_bp.route('/categories', methods=['POST'])
@token_required
def create_category():
    """Create category"""
    name = text_field(get_payload(), 'name')

    if not name:
        return jsonify({'error': 'Category name is required'}), 400

    category_id = slugify(name)
    if not category_id:
        return jsonify({'error': 'Category name must contain letters or digits'}), 400

    try:
        if not create_category_db(category_id, name):
            return jsonify({'error': 'Category already exists'}), 400
    except Exception as e:
        LoggingService.log_error_with_traceback('categories', e)
        return jsonify({'error': 'Could not create category'}), 500

    LoggingService.log_user_action('categories', f'created category {category_id}')
    return jsonify({'id': category_id, 'name': name}), 201
