import os
from dotenv import load_dotenv

load_dotenv()

DATA_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), 'data')


class Config:
    IS_PRODUCTION = (
        os.getenv('ENVIRONMENT') == 'production' or
        os.getenv('FLASK_ENV') == 'production'
    )

    # Left unset, Aperture generates a random signing key per process
    SECRET_KEY = os.getenv('FLASK_SECRET_KEY')
    JWT_SECRET_KEY = os.getenv('JWT_SECRET_KEY')
    PORT = int(os.getenv('PORT', '3001'))

    # Storage paths
    DATA_DIR = DATA_DIR
    DATABASE = os.path.join(DATA_DIR, 'aperture.db')
    UPLOAD_FOLDER = os.path.join(DATA_DIR, 'uploads')

    # Media: "local" or "cloudinary"
    MEDIA_STORAGE = os.getenv('MEDIA_STORAGE', 'local')

    # Admin account created on first start
    ADMIN_USERNAME = os.getenv('ADMIN_USERNAME', 'admin')
    ADMIN_PASSWORD = os.getenv('ADMIN_PASSWORD')

    # Front end dev server
    CORS_ORIGINS = os.getenv('CORS_ORIGINS', 'http://localhost:5173')
