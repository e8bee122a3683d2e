"""Domain-specific exceptions for accounts services."""


class AccountsServiceError(Exception):
    """Base exception for accounts services."""
    pass


class EmailAlreadyRegisteredError(AccountsServiceError):
    """Raised when registering an email that already has an account."""
    pass


class InvalidRoleError(AccountsServiceError):
    """Raised when the requested role is not employee or moderator."""
    pass


class InvalidCredentialsError(AccountsServiceError):
    """Raised when authentication credentials are invalid."""
    pass


class InactiveAccountError(AccountsServiceError):
    """Raised when account is deactivated."""
    pass


class ReservedEmailError(AccountsServiceError):
    """Raised when registering an address reserved for dummy-login accounts."""
    pass
