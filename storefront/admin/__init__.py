"""
Admin Blueprint

Admin console: login/logout, products, contact settings and (for super
admins) account management.
"""

from flask import Blueprint

admin_bp = Blueprint('admin', __name__)

from storefront.admin import routes, accounts  # noqa: E402, F401
