import os
from dotenv import load_dotenv

load_dotenv(override=True)

class Config:
    """
    Base configuration for Aperture.
    Every value can be overridden through environment variables or by
    setting the key on app.config before Aperture(app) runs.
    """
    # Flask settings
    SECRET_KEY = os.getenv('FLASK_SECRET_KEY')

    # JWT settings - falls back to SECRET_KEY when unset
    JWT_SECRET_KEY = os.getenv('JWT_SECRET_KEY')
    JWT_ALGORITHM = 'HS256'
    JWT_EXPIRES_MINUTES = int(os.getenv('JWT_EXPIRES_MINUTES', '60'))

    # Admin account seeded into the admins table on first start
    ADMIN_USERNAME = os.getenv('ADMIN_USERNAME', 'admin')
    ADMIN_PASSWORD = os.getenv('ADMIN_PASSWORD')

    # Get DATA_DIR from environment, or use a default if not set
    DATA_DIR = os.getenv('DATA_DIR', os.path.join(os.getcwd(), 'data'))

    # Derived from DATA_DIR at init time when left unset
    DATABASE = os.getenv('DATABASE')
    UPLOAD_FOLDER = os.getenv('UPLOAD_FOLDER')

    # Media storage: "local" (Pillow resizing) or "cloudinary"
    MEDIA_STORAGE = os.getenv('MEDIA_STORAGE', 'local')
    CLOUDINARY_CLOUD_NAME = os.getenv('CLOUDINARY_CLOUD_NAME')
    CLOUDINARY_API_KEY = os.getenv('CLOUDINARY_API_KEY')
    CLOUDINARY_API_SECRET = os.getenv('CLOUDINARY_API_SECRET')

    # Storage folders per content type
    PHOTOS_FOLDER = os.getenv('CLOUDINARY_FOLDER', 'portfolio')
    POSTS_FOLDER = 'blog'
    ABOUT_FOLDER = 'about'

    # Image processing
    MAX_IMAGE_WIDTH = int(os.getenv('MAX_IMAGE_WIDTH', '1200'))
    IMAGE_QUALITY = int(os.getenv('IMAGE_QUALITY', '85'))

    # Upload limits
    MAX_FILES_PER_UPLOAD = int(os.getenv('MAX_FILES_PER_UPLOAD', '10'))
    MAX_FILE_SIZE = int(os.getenv('MAX_FILE_SIZE', str(10 * 1024 * 1024)))

    # Comma separated list, "*" allows any origin
    CORS_ORIGINS = os.getenv('CORS_ORIGINS', '*')

    # Port for local server
    PORT = int(os.getenv('PORT', '3001'))

    # app_logs pruning, run at most once per interval on incoming requests
    LOG_RETENTION_DAYS = int(os.getenv('LOG_RETENTION_DAYS', '30'))
    LOG_MAX_ROWS = int(os.getenv('LOG_MAX_ROWS', '10000'))
    LOG_CLEANUP_INTERVAL_HOURS = float(os.getenv('LOG_CLEANUP_INTERVAL_HOURS', '6'))
