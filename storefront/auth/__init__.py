"""
Auth Package

Password hashing, server-side sessions and authorization checks for the
admin console.
"""

from storefront.auth.guards import require_authenticated, require_super_admin
from storefront.auth.manager import AdminIdentity, AnonymousIdentity, SessionManager, get_session_manager
from storefront.auth.passwords import PasswordHasher
from storefront.auth.sessions import InMemorySessionStore, ServerSideSessionInterface, SessionStore

__all__ = [
    'AdminIdentity',
    'AnonymousIdentity',
    'InMemorySessionStore',
    'PasswordHasher',
    'ServerSideSessionInterface',
    'SessionManager',
    'SessionStore',
    'get_session_manager',
    'require_authenticated',
    'require_super_admin',
]
