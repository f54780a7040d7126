"""
Credential store for admin accounts.

``AdminAccountRepository`` is the interface the session manager and the
account service depend on; ``SqlAdminAccountRepository`` implements it on
top of the Flask-SQLAlchemy session. Repositories flush but never commit:
the caller owns the transaction.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Protocol, Sequence

from sqlalchemy import delete, func, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import aliased

from storefront.errors import DuplicateUsername, NotFound, StoreUnavailable
from storefront.models import AdminAccount

logger = logging.getLogger(__name__)


class AdminAccountRepository(Protocol):
    """Abstract repository interface for admin account persistence."""

    def find_by_username(self, username: str) -> AdminAccount | None:
        ...

    def get_by_id(self, account_id: int) -> AdminAccount | None:
        ...

    def insert(self, username: str, password_hash: str, is_super_admin: bool) -> AdminAccount:
        ...

    def delete(self, account_id: int) -> None:
        ...

    def delete_unless_last_super_admin(self, account_id: int) -> bool:
        ...

    def set_super_admin(self, account_id: int, is_super_admin: bool) -> None:
        ...

    def count_super_admins(self) -> int:
        ...

    def list_all(self) -> Sequence[AdminAccount]:
        ...


@contextmanager
def store_errors(operation):
    """Translate database failures into StoreUnavailable, keeping the detail in the log."""
    try:
        yield
    except SQLAlchemyError as e:
        logger.exception('Account store failure during %s', operation)
        raise StoreUnavailable() from e


class SqlAdminAccountRepository(AdminAccountRepository):
    """Admin account repository backed by SQLAlchemy models."""

    def __init__(self, session) -> None:
        self._session = session

    def find_by_username(self, username: str) -> AdminAccount | None:
        with store_errors('find_by_username'):
            stmt = select(AdminAccount).where(AdminAccount.username == username)
            return self._session.execute(stmt).scalar_one_or_none()

    def get_by_id(self, account_id: int) -> AdminAccount | None:
        with store_errors('get_by_id'):
            return self._session.get(AdminAccount, account_id)

    def insert(self, username: str, password_hash: str, is_super_admin: bool) -> AdminAccount:
        account = AdminAccount(
            username=username,
            password_hash=password_hash,
            is_super_admin=bool(is_super_admin),
        )
        try:
            self._session.add(account)
            self._session.flush()
        except IntegrityError as e:
            # Lost a race with another create for the same username
            self._session.rollback()
            raise DuplicateUsername() from e
        except SQLAlchemyError as e:
            self._session.rollback()
            logger.exception('Account store failure during insert')
            raise StoreUnavailable() from e
        return account

    def delete(self, account_id: int) -> None:
        with store_errors('delete'):
            result = self._session.execute(
                delete(AdminAccount).where(AdminAccount.id == account_id),
                execution_options={'synchronize_session': False},
            )
        if result.rowcount == 0:
            raise NotFound('Account not found')
        self._forget(account_id)

    def delete_unless_last_super_admin(self, account_id: int) -> bool:
        """Delete in one statement that re-counts super admins itself.

        Returns False when nothing was deleted, either because the account
        is gone or because it is the only super admin left.
        """
        # Aliased so the count is not correlated to the row being deleted
        counted = aliased(AdminAccount)
        super_count = (
            select(func.count(counted.id))
            .where(counted.is_super_admin.is_(True))
            .scalar_subquery()
        )
        stmt = delete(AdminAccount).where(
            AdminAccount.id == account_id,
            (AdminAccount.is_super_admin.is_(False)) | (super_count > 1),
        )
        with store_errors('delete_unless_last_super_admin'):
            result = self._session.execute(stmt, execution_options={'synchronize_session': False})
        if result.rowcount != 1:
            return False
        self._forget(account_id)
        return True

    def set_super_admin(self, account_id: int, is_super_admin: bool) -> None:
        with store_errors('set_super_admin'):
            result = self._session.execute(
                update(AdminAccount)
                .where(AdminAccount.id == account_id)
                .values(is_super_admin=bool(is_super_admin))
            )
        if result.rowcount == 0:
            raise NotFound('Account not found')

    def count_super_admins(self) -> int:
        with store_errors('count_super_admins'):
            stmt = select(func.count(AdminAccount.id)).where(AdminAccount.is_super_admin.is_(True))
            return self._session.execute(stmt).scalar_one()

    def list_all(self) -> Sequence[AdminAccount]:
        with store_errors('list_all'):
            stmt = select(AdminAccount).order_by(AdminAccount.created_at, AdminAccount.id)
            return list(self._session.execute(stmt).scalars().all())

    def _forget(self, account_id: int) -> None:
        # Bulk deletes bypass the identity map; drop the stale instance so a
        # later get_by_id goes back to the database
        key = self._session.identity_key(AdminAccount, account_id)
        account = self._session.identity_map.get(key)
        if account is not None:
            self._session.expunge(account)
