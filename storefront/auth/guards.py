"""
Authorization checks.

Both checks take the identity resolved for the request (Flask-Login's
``current_user``) and raise instead of returning a flag, so a caller cannot
forget to act on a denial.
"""

from storefront.errors import AuthenticationRequired, Forbidden


def require_authenticated(identity):
    if identity is None or not getattr(identity, 'is_authenticated', False):
        raise AuthenticationRequired()
    return identity


def require_super_admin(identity):
    require_authenticated(identity)
    if not getattr(identity, 'is_super_admin', False):
        raise Forbidden('Only super admins can do that.')
    return identity
