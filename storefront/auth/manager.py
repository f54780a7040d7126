"""
Session Manager

Turns a username/password pair into an authenticated session and back.
A session moves Anonymous -> Authenticated (login) -> Terminated (logout);
the role claim is copied from the account at login time.
"""

import logging

from flask import current_app, session
from flask_login import AnonymousUserMixin, login_user, logout_user

from storefront.errors import InvalidCredentials

logger = logging.getLogger(__name__)

# Keys written into the server-side session record
ACCOUNT_ID = 'account_id'
USERNAME = 'username'
IS_AUTHENTICATED = 'is_authenticated'
IS_SUPER_ADMIN = 'is_super_admin'


class AdminIdentity:
    """Authenticated admin as seen by Flask-Login for the current request."""

    is_authenticated = True
    is_active = True
    is_anonymous = False

    def __init__(self, account_id, username, is_super_admin=False):
        self.id = account_id
        self.username = username
        self.is_super_admin = bool(is_super_admin)

    def get_id(self):
        return str(self.id)

    def __repr__(self):
        return f'<AdminIdentity {self.username} super={self.is_super_admin}>'


class AnonymousIdentity(AnonymousUserMixin):
    is_super_admin = False
    username = None


class SessionManager:
    """Login, logout and per-request identity resolution."""

    def __init__(self, repository, hasher, recheck_role=False):
        self._repository = repository
        self._hasher = hasher
        self._recheck_role = recheck_role

    def authenticate(self, username, password):
        """Return the matching account or raise InvalidCredentials.

        Unknown usernames still pay for a hash comparison so response time
        does not reveal which usernames exist.
        """
        account = self._repository.find_by_username(username) if username else None
        if account is None:
            self._hasher.verify_dummy(password)
            raise InvalidCredentials()
        if not self._hasher.verify(password, account.password_hash):
            raise InvalidCredentials()
        return account

    def login(self, username, password):
        try:
            account = self.authenticate(username, password)
        except InvalidCredentials:
            logger.warning('Failed admin login attempt')
            raise

        identity = AdminIdentity(account.id, account.username, account.is_super_admin)
        # New token on every login; whatever the browser held before is retired
        session.terminate()
        session[ACCOUNT_ID] = account.id
        session[USERNAME] = account.username
        session[IS_AUTHENTICATED] = True
        session[IS_SUPER_ADMIN] = bool(account.is_super_admin)
        login_user(identity)
        logger.info('Admin %s logged in (super_admin=%s)', account.username, identity.is_super_admin)
        return identity

    def logout(self):
        username = session.get(USERNAME)
        logout_user()
        session.terminate()
        if username:
            logger.info('Admin %s logged out', username)

    def load_identity(self, user_id):
        """Flask-Login user loader: rebuild the identity from session claims."""
        if not session.get(IS_AUTHENTICATED):
            return None
        account_id = session.get(ACCOUNT_ID)
        if account_id is None or str(account_id) != str(user_id):
            return None

        is_super_admin = session.get(IS_SUPER_ADMIN, False)
        if self._recheck_role:
            account = self._repository.get_by_id(account_id)
            if account is None:
                return None
            is_super_admin = account.is_super_admin
        return AdminIdentity(account_id, session.get(USERNAME), is_super_admin)


def get_session_manager():
    from storefront.accounts import get_account_repository, get_password_hasher

    return SessionManager(
        get_account_repository(),
        get_password_hasher(),
        recheck_role=current_app.config.get('ADMIN_ROLE_RECHECK', False),
    )
