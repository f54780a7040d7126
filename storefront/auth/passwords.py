"""
Password hashing for admin accounts.

Wraps Werkzeug's salted, iterated hashes. The method string (for example
``pbkdf2:sha256:600000``) carries the cost factor and is embedded in every
digest, so raising it later only affects new hashes.
"""

import logging

from werkzeug.security import check_password_hash, generate_password_hash

from storefront.errors import PasswordHashingError

logger = logging.getLogger(__name__)

DEFAULT_METHOD = 'pbkdf2:sha256:600000'


class PasswordHasher:
    """Hash and verify admin passwords."""

    def __init__(self, method=DEFAULT_METHOD, salt_length=16):
        self.method = method
        self.salt_length = salt_length
        self._dummy_digest = None

    @classmethod
    def from_config(cls, config):
        return cls(method=config.get('PASSWORD_HASH_METHOD', DEFAULT_METHOD))

    def hash(self, password: str) -> str:
        try:
            return generate_password_hash(password, method=self.method, salt_length=self.salt_length)
        except (ValueError, TypeError, OSError) as e:
            logger.error('Password hashing failed with method %s: %s', self.method, type(e).__name__)
            raise PasswordHashingError() from e

    def verify(self, password: str, digest: str) -> bool:
        if not password or not digest:
            return False
        try:
            return check_password_hash(digest, password)
        except (ValueError, TypeError) as e:
            # A corrupted row must not let anyone in, but operators need to know
            logger.error('Stored password hash could not be parsed: %s', type(e).__name__)
            return False

    def verify_dummy(self, password: str) -> bool:
        """Spend the same work as a real verify when the username is unknown."""
        if self._dummy_digest is None:
            self._dummy_digest = self.hash('storefront-timing-equalizer')
        check_password_hash(self._dummy_digest, password or '')
        return False
