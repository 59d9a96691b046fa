"""
Aperture Starter Template
=========================

A ready-to-run Flask application serving the portfolio API.

Run with:
    python app.py

Visit:
    http://localhost:3001/api/health  - Health check
    http://localhost:3001/api/photos  - Gallery photos
"""

from flask import Flask
from aperture import Aperture

from config import Config

# Create Flask app
app = Flask(__name__)
app.config.from_object(Config)

# Initialize Aperture - this registers all API modules
aperture = Aperture(app)


# =============================================================================
# Run the app
# =============================================================================

if __name__ == '__main__':
    port = app.config['PORT']
    print("\n" + "=" * 60)
    print("Aperture Portfolio API")
    print("=" * 60)
    print(f"Health:          http://localhost:{port}/api/health")
    print(f"Photos:          http://localhost:{port}/api/photos")
    print(f"Admin login:     POST http://localhost:{port}/api/login")
    print("=" * 60 + "\n")

    app.run(host='0.0.0.0', port=port, debug=not Config.IS_PRODUCTION)
