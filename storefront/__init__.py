"""
Storefront - Application Factory

This module provides the Flask application factory pattern for creating
and configuring the application instance.
"""

import logging
import os

from flask import Flask, render_template

from storefront.config import Config
from storefront.extensions import db, login_manager

logger = logging.getLogger(__name__)


def create_app(config_class=Config, session_store=None):
    """Create and configure the Flask application.

    Args:
        config_class: Configuration class to use (default: Config)
        session_store: SessionStore for server-side sessions (default: in-memory)

    Returns:
        Configured Flask application instance
    """
    from storefront.auth import AnonymousIdentity, InMemorySessionStore, ServerSideSessionInterface, get_session_manager

    app = Flask(__name__)
    app.config.from_object(config_class)

    app.session_interface = ServerSideSessionInterface(session_store or InMemorySessionStore())

    # Initialize extensions
    db.init_app(app)
    login_manager.init_app(app)
    login_manager.login_view = 'admin.login'
    login_manager.login_message_category = 'info'
    login_manager.anonymous_user = AnonymousIdentity

    @login_manager.user_loader
    def load_identity(user_id):
        return get_session_manager().load_identity(user_id)

    # Register blueprints
    from storefront.admin import admin_bp
    from storefront.catalog import catalog_bp

    app.register_blueprint(catalog_bp)
    app.register_blueprint(admin_bp, url_prefix='/admin')

    from storefront.cli import register_commands
    register_commands(app)

    _register_error_handlers(app)

    with app.app_context():
        _ensure_sqlite_folder(app.config['SQLALCHEMY_DATABASE_URI'])
        db.create_all()
        _ensure_default_data(app)

    return app


def _register_error_handlers(app):
    from storefront.errors import NotFound, PasswordHashingError, StoreUnavailable

    @app.errorhandler(StoreUnavailable)
    def store_unavailable(e):
        # Already logged with the underlying exception where it was raised
        return render_template('error.html', message=e.message), 503

    @app.errorhandler(PasswordHashingError)
    def password_hashing_failed(e):
        # Logged by PasswordHasher; the password itself never is
        return render_template('error.html', message=e.message), 500

    @app.errorhandler(NotFound)
    def not_found(e):
        return render_template('error.html', message=e.message), 404

    @app.errorhandler(404)
    def page_not_found(e):
        return render_template('error.html', message='404 - Page Not Found'), 404

    @app.errorhandler(413)
    def too_large(e):
        return render_template('error.html', message='File too large. Images must be 5MB or smaller.'), 413


def _ensure_sqlite_folder(uri):
    path = uri[len('sqlite:///'):] if uri.startswith('sqlite:///') else ''
    if path and path != ':memory:' and os.path.dirname(path):
        os.makedirs(os.path.dirname(path), exist_ok=True)


def _ensure_default_data(app):
    """Ensure the default settings and a super admin exist.

    Never drops or rewrites existing accounts, so restarts keep every admin
    and their passwords.
    """
    from storefront.accounts import get_account_service
    from storefront.services import ensure_default_settings

    ensure_default_settings()

    username = app.config.get('SUPER_ADMIN_USERNAME')
    password = app.config.get('SUPER_ADMIN_PASSWORD')
    account = get_account_service().ensure_super_admin(username, password)
    if account is not None and password == 'admin123' and not app.config.get('TESTING'):
        logger.warning('Super admin %s was seeded with the default password; change SUPER_ADMIN_PASSWORD', username)
