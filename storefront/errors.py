"""
Error taxonomy shared by the account, session and catalog layers.

Messages on these exceptions are safe to show to the person making the
request; internal detail (SQL errors, other accounts' identifiers) stays in
the log.
"""


class StorefrontError(Exception):
    """Base class for application errors."""

    message = 'Something went wrong.'

    def __init__(self, message=None):
        super().__init__(message or self.message)
        if message:
            self.message = message


class InvalidCredentials(StorefrontError):
    """Unknown username or wrong password; the two are never distinguished."""

    message = 'Invalid credentials'


class DuplicateUsername(StorefrontError):
    message = 'Username already exists'


class NotFound(StorefrontError):
    message = 'Not found'


class CannotDeleteLastSuperAdmin(StorefrontError):
    message = 'Cannot delete the last super admin'


class Forbidden(StorefrontError):
    """The resolved session may not perform the operation."""

    message = 'Forbidden'


class AuthenticationRequired(Forbidden):
    """The session is anonymous or has been terminated."""

    message = 'Please log in to access this page.'


class StoreUnavailable(StorefrontError):
    """The underlying database failed; details are logged, not surfaced."""

    message = 'The service is temporarily unavailable. Please try again later.'


class PasswordHashingError(StorefrontError):
    message = 'Could not process the password.'


class InvalidUpload(StorefrontError):
    message = 'Not an image! Please upload an image.'
