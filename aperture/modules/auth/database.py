from werkzeug.security import check_password_hash, generate_password_hash

from ...core.database import Database


class AdminDatabase:
    @staticmethod
    def get_admin(username):
        """Get admin by username"""
        with Database.connect() as conn:
            row = conn.execute(
                'SELECT id, username, password_hash, created_at, last_login FROM admins WHERE username = ?',
                (username,)
            ).fetchone()
        return dict(row) if row else None

    @staticmethod
    def create_admin(username, password):
        """Create a new admin, returns the new id"""
        with Database.connect() as conn:
            cursor = conn.execute(
                'INSERT INTO admins (username, password_hash) VALUES (?, ?)',
                (username, generate_password_hash(password))
            )
            return cursor.lastrowid

    @staticmethod
    def verify_credentials(username, password):
        """Return the admin row when the password matches, else None"""
        admin = AdminDatabase.get_admin(username)
        if admin and check_password_hash(admin['password_hash'], password):
            return admin
        return None

    @staticmethod
    def update_last_login(admin_id):
        with Database.connect() as conn:
            conn.execute('UPDATE admins SET last_login = CURRENT_TIMESTAMP WHERE id = ?', (admin_id,))

    @staticmethod
    def seed_admin(username, password):
        """Create the configured admin if it does not exist yet.

        Returns True when an account was created.
        """
        if not username or not password:
            return False
        if AdminDatabase.get_admin(username):
            return False
        AdminDatabase.create_admin(username, password)
        return True
