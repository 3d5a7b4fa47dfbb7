class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class DuplicateEmailError(ValidationError):
    """Raised when registering an e-mail that already has an account."""


class ImportFormatError(ValidationError):
    """Raised when an uploaded roster file yields no usable rows."""


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""


class UserNotFoundError(AuthenticationError):
    """No account matches the e-mail and role."""


class WrongPasswordError(AuthenticationError):
    """The account exists but the password does not match."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class StorageError(Exception):
    """Raised by key-value store backends when a read or write fails."""
