"""
Admin account lifecycle: creation, deletion and the bootstrap super admin.

The service owns the transaction: repository calls flush, the service
commits once the whole operation has succeeded and rolls back otherwise.
"""

from __future__ import annotations

import logging
import threading
from typing import Sequence

from sqlalchemy.exc import SQLAlchemyError

from storefront.errors import CannotDeleteLastSuperAdmin, DuplicateUsername, NotFound, StoreUnavailable
from storefront.models import AdminAccount

from .repository import AdminAccountRepository

logger = logging.getLogger(__name__)

# Serializes "count super admins, decide, delete" within this process. The
# delete statement re-checks the count itself, which covers other processes.
_super_admin_lock = threading.Lock()


class AccountService:
    """Encapsulates admin account use cases."""

    def __init__(self, repository: AdminAccountRepository, hasher, session) -> None:
        self._repository = repository
        self._hasher = hasher
        self._session = session

    def list_accounts(self) -> Sequence[AdminAccount]:
        return self._repository.list_all()

    def get_account(self, account_id: int) -> AdminAccount:
        account = self._repository.get_by_id(account_id)
        if account is None:
            raise NotFound('Account not found')
        return account

    def create_account(self, username: str, password: str, is_super_admin: bool = False) -> AdminAccount:
        if not username:
            raise ValueError('Username must not be empty')
        if not password:
            raise ValueError('Password must not be empty')

        # Checked before hashing so a rejected password is never hashed
        if self._repository.find_by_username(username) is not None:
            raise DuplicateUsername()

        password_hash = self._hasher.hash(password)
        account = self._repository.insert(username, password_hash, is_super_admin)
        self._commit('create_account')
        logger.info('Created admin account %s (super_admin=%s)', username, bool(is_super_admin))
        return account

    def delete_account(self, account_id: int) -> None:
        with _super_admin_lock:
            account = self._repository.get_by_id(account_id)
            if account is None:
                raise NotFound('Account not found')
            username = account.username

            if account.is_super_admin and self._repository.count_super_admins() <= 1:
                logger.warning('Refused to delete %s: last super admin', username)
                raise CannotDeleteLastSuperAdmin()

            if not self._repository.delete_unless_last_super_admin(account_id):
                self._rollback()
                # Either removed or demoted concurrently; re-read to tell which
                if self._repository.get_by_id(account_id) is None:
                    raise NotFound('Account not found')
                logger.warning('Refused to delete %s: last super admin', username)
                raise CannotDeleteLastSuperAdmin()
            self._commit('delete_account')
        logger.info('Deleted admin account %s', username)

    def promote(self, username: str) -> AdminAccount:
        """Grant super admin rights. Reachable from the CLI only."""
        account = self._repository.find_by_username(username)
        if account is None:
            raise NotFound('Account not found')
        if not account.is_super_admin:
            self._repository.set_super_admin(account.id, True)
            self._commit('promote')
            logger.info('Promoted %s to super admin', username)
        return self._repository.get_by_id(account.id)

    def ensure_super_admin(self, username: str, password: str) -> AdminAccount | None:
        """Make sure at least one super admin exists.

        Existing accounts and their passwords are never touched when a super
        admin is already present, so this is safe to run on every startup.
        """
        if self._repository.count_super_admins() > 0:
            logger.debug('Super admin already present, skipping bootstrap')
            return None

        existing = self._repository.find_by_username(username) if username else None
        if existing is not None:
            logger.warning('No super admin found; promoting existing account %s', username)
            return self.promote(username)

        if not username or not password:
            logger.error('No super admin exists and SUPER_ADMIN_USERNAME/SUPER_ADMIN_PASSWORD are not set')
            return None

        account = self.create_account(username, password, is_super_admin=True)
        logger.info('Default admin user %s created with super admin privileges', username)
        return account

    def _commit(self, operation):
        try:
            self._session.commit()
        except SQLAlchemyError as e:
            self._session.rollback()
            logger.exception('Account store failure during %s commit', operation)
            raise StoreUnavailable() from e

    def _rollback(self):
        try:
            self._session.rollback()
        except SQLAlchemyError as e:
            logger.exception('Account store rollback failed')
            raise StoreUnavailable() from e
