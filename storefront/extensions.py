"""
Flask Extensions

Admin identity is resolved by Flask-Login from the server-side session
record; the account table is only consulted at login time unless
ADMIN_ROLE_RECHECK is enabled.
"""

from flask_sqlalchemy import SQLAlchemy
from flask_login import LoginManager

# Database instance
db = SQLAlchemy()

# Login manager for the admin console
login_manager = LoginManager()
