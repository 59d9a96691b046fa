from ...core.database import Database

PHOTO_COLUMNS = 'id, url, original_url, category, title, width, height, date'


class PhotoDatabase:
    @staticmethod
    def _row_to_dict(row):
        return {
            'id': row['id'],
            'url': row['url'],
            'originalUrl': row['original_url'],
            'category': row['category'],
            'title': row['title'],
            'width': row['width'],
            'height': row['height'],
            'date': row['date'],
        }

    @staticmethod
    def list_photos(category=None):
        """All photos, newest first"""
        with Database.connect() as conn:
            if category:
                rows = conn.execute(f'''
                    SELECT {PHOTO_COLUMNS} FROM photos
                    WHERE category = ?
                    ORDER BY date DESC, rowid DESC
                ''', (category,)).fetchall()
            else:
                rows = conn.execute(f'''
                    SELECT {PHOTO_COLUMNS} FROM photos
                    ORDER BY date DESC, rowid DESC
                ''').fetchall()
        return [PhotoDatabase._row_to_dict(row) for row in rows]

    @staticmethod
    def get_photo(photo_id):
        with Database.connect() as conn:
            row = conn.execute(
                f'SELECT {PHOTO_COLUMNS} FROM photos WHERE id = ?', (photo_id,)
            ).fetchone()
        return PhotoDatabase._row_to_dict(row) if row else None

    @staticmethod
    def create_photo(photo):
        """Insert one photo record (dict in API shape)"""
        with Database.connect() as conn:
            conn.execute(f'''
                INSERT INTO photos ({PHOTO_COLUMNS})
                VALUES (?, ?, ?, ?, ?, ?, ?, ?)
            ''', (
                photo['id'], photo['url'], photo.get('originalUrl'), photo['category'],
                photo.get('title'), photo.get('width'), photo.get('height'), photo['date']
            ))
        return photo

    @staticmethod
    def delete_photo(photo_id):
        with Database.connect() as conn:
            cursor = conn.execute('DELETE FROM photos WHERE id = ?', (photo_id,))
            return cursor.rowcount > 0
