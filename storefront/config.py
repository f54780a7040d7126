"""
Configuration settings for the Storefront catalog and admin console
"""
import os
from datetime import timedelta


def _env_flag(name, default=False):
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ('1', 'true', 'yes', 'on')


class Config:
    """Flask application configuration"""

    # Flask secret key for sessions
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'dev-secret-key-change-in-production-12345'

    # Database configuration
    basedir = os.path.abspath(os.path.dirname(os.path.dirname(__file__)))
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or \
        'sqlite:///' + os.path.join(basedir, 'instance', 'storefront.db')
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Product image uploads (5MB limit, enforced by Flask with a 413)
    UPLOAD_FOLDER = os.environ.get('UPLOAD_DIR') or os.path.join(basedir, 'uploads')
    MAX_CONTENT_LENGTH = 5 * 1024 * 1024

    # Public contact details shown on the catalog page
    CONTACT_EMAIL = os.environ.get('CONTACT_EMAIL', '')

    # Seeded super-admin, created on startup only when no super-admin exists
    SUPER_ADMIN_USERNAME = os.environ.get('SUPER_ADMIN_USERNAME') or 'admin'
    SUPER_ADMIN_PASSWORD = os.environ.get('SUPER_ADMIN_PASSWORD') or 'admin123'

    # Werkzeug hash method; the iteration count is the cost factor
    PASSWORD_HASH_METHOD = 'pbkdf2:sha256:600000'

    # Re-read the role flag from the database on every request instead of
    # trusting the claim stored in the session at login time
    ADMIN_ROLE_RECHECK = _env_flag('ADMIN_ROLE_RECHECK')

    # Server-side sessions: the cookie only carries an opaque token
    SESSION_COOKIE_NAME = 'storefront_session'
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SECURE = _env_flag('SESSION_COOKIE_SECURE')
    SESSION_COOKIE_SAMESITE = 'Lax'
    PERMANENT_SESSION_LIFETIME = timedelta(hours=12)


class TestConfig(Config):
    """Testing configuration"""
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    SUPER_ADMIN_USERNAME = 'root'
    SUPER_ADMIN_PASSWORD = 's3cr3t'
    PASSWORD_HASH_METHOD = 'pbkdf2:sha256:1000'
    CONTACT_EMAIL = 'shop@example.com'
    ADMIN_ROLE_RECHECK = False
