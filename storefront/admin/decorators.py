"""
Admin Decorators

Route gates for the admin console. Each one runs before the view body, so a
denied request never reaches any side effect. They can be stacked in either
order.
"""

from functools import wraps

from flask import flash, redirect, url_for
from flask_login import current_user

from storefront.auth.guards import require_authenticated, require_super_admin
from storefront.errors import AuthenticationRequired, Forbidden
from storefront.extensions import login_manager


def login_required(f):
    """Admit any authenticated admin; anonymous visitors go to the login page."""
    @wraps(f)
    def wrapper(*args, **kwargs):
        try:
            require_authenticated(current_user)
        except AuthenticationRequired:
            return login_manager.unauthorized()
        return f(*args, **kwargs)
    return wrapper


def super_admin_required(f):
    """Admit super admins only.

    - Anonymous visitors are sent to the login page
    - Authenticated admins without the role land on the admin dashboard
    """
    @wraps(f)
    def wrapper(*args, **kwargs):
        try:
            require_super_admin(current_user)
        except AuthenticationRequired:
            return login_manager.unauthorized()
        except Forbidden as e:
            flash(e.message, 'danger')
            return redirect(url_for('admin.index'))
        return f(*args, **kwargs)
    return wrapper
