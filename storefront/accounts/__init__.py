"""
Accounts Package

Credential store and lifecycle service for admin accounts.
"""

from flask import current_app

from storefront.accounts.repository import AdminAccountRepository, SqlAdminAccountRepository
from storefront.accounts.service import AccountService
from storefront.auth.passwords import PasswordHasher
from storefront.extensions import db


def get_account_repository():
    return SqlAdminAccountRepository(db.session)


def get_password_hasher():
    hasher = current_app.extensions.get('storefront.hasher')
    if hasher is None:
        hasher = PasswordHasher.from_config(current_app.config)
        current_app.extensions['storefront.hasher'] = hasher
    return hasher


def get_account_service():
    return AccountService(get_account_repository(), get_password_hasher(), db.session)


__all__ = [
    'AccountService',
    'AdminAccountRepository',
    'SqlAdminAccountRepository',
    'get_account_repository',
    'get_account_service',
    'get_password_hasher',
]
