"""Services for accounts business logic."""

from .exceptions import (
    AccountsServiceError,
    EmailAlreadyRegisteredError,
    InvalidRoleError,
    InvalidCredentialsError,
    InactiveAccountError,
    ReservedEmailError,
)
from .user_registration import register_user
from .user_authentication import authenticate_user, get_dummy_user, issue_access_token

__all__ = [
    # Exceptions
    'AccountsServiceError',
    'EmailAlreadyRegisteredError',
    'InvalidRoleError',
    'InvalidCredentialsError',
    'InactiveAccountError',
    'ReservedEmailError',
    # Services
    'register_user',
    'authenticate_user',
    'get_dummy_user',
    'issue_access_token',
]
