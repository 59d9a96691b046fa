import os
import sqlite3
from contextlib import contextmanager

from flask import current_app

SCHEMA = [
    '''
    CREATE TABLE IF NOT EXISTS categories (
        id TEXT PRIMARY KEY,
        name TEXT NOT NULL,
        created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
    )
    ''',
    '''
    CREATE TABLE IF NOT EXISTS photos (
        id TEXT PRIMARY KEY,
        url TEXT NOT NULL,
        original_url TEXT,
        category TEXT NOT NULL DEFAULT 'all',
        title TEXT,
        width INTEGER,
        height INTEGER,
        date TEXT NOT NULL
    )
    ''',
    'CREATE INDEX IF NOT EXISTS idx_photos_date ON photos(date)',
    'CREATE INDEX IF NOT EXISTS idx_photos_category ON photos(category)',
    '''
    CREATE TABLE IF NOT EXISTS posts (
        id TEXT PRIMARY KEY,
        title TEXT NOT NULL,
        slug TEXT NOT NULL UNIQUE,
        content TEXT NOT NULL,
        excerpt TEXT,
        cover_image TEXT,
        date TEXT NOT NULL,
        updated_at TEXT
    )
    ''',
    'CREATE INDEX IF NOT EXISTS idx_posts_date ON posts(date)',
    '''
    CREATE TABLE IF NOT EXISTS site_settings (
        key TEXT PRIMARY KEY,
        value TEXT NOT NULL,
        updated_at TEXT
    )
    ''',
    '''
    CREATE TABLE IF NOT EXISTS admins (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        username TEXT NOT NULL UNIQUE,
        password_hash TEXT NOT NULL,
        created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
        last_login TIMESTAMP
    )
    ''',
    '''
    CREATE TABLE IF NOT EXISTS app_logs (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        timestamp TEXT NOT NULL,
        level TEXT NOT NULL,
        source TEXT NOT NULL,
        message TEXT NOT NULL,
        details TEXT,
        ip_address TEXT,
        user_agent TEXT,
        request_path TEXT,
        user_id TEXT
    )
    ''',
    'CREATE INDEX IF NOT EXISTS idx_logs_timestamp ON app_logs(timestamp DESC)',
    'CREATE INDEX IF NOT EXISTS idx_logs_level ON app_logs(level)',
    'CREATE INDEX IF NOT EXISTS idx_logs_source ON app_logs(source, timestamp)',
]


class Database:
    """Thin SQLite wrapper shared by every module.

    Each `with Database.connect() as conn:` block is one transaction:
    committed on success, rolled back on error, and the connection is
    always closed afterwards.
    """

    @staticmethod
    def get_path():
        return current_app.config['DATABASE']

    @staticmethod
    @contextmanager
    def connect(path=None):
        conn = sqlite3.connect(path or Database.get_path())
        conn.row_factory = sqlite3.Row
        try:
            with conn:
                yield conn
        finally:
            conn.close()

    @staticmethod
    def init_db(path):
        """Create the database file and every table"""
        db_dir = os.path.dirname(path)
        if db_dir:
            os.makedirs(db_dir, exist_ok=True)

        with Database.connect(path) as conn:
            cursor = conn.cursor()
            for statement in SCHEMA:
                cursor.execute(statement)

    @staticmethod
    def ping(path=None):
        """Run a trivial query, raising if the database is unusable"""
        with Database.connect(path) as conn:
            conn.execute('SELECT 1').fetchone()
        return True
