"""User registration service."""

from django.conf import settings
from django.db import transaction

from apps.accounts.models import User, UserRole
from apps.accounts.repositories import UserStore
from apps.pvz.repositories import StoreConflict

from .exceptions import EmailAlreadyRegisteredError, InvalidRoleError, ReservedEmailError


def is_reserved_email(email: str) -> bool:
    """True for addresses in the dummy-login domain."""
    domain = email.rpartition('@')[2]
    return domain.lower() == settings.DUMMY_LOGIN_EMAIL_DOMAIN.lower()


@transaction.atomic
def register_user(*, email: str, password: str, role: str) -> User:
    """
    Register a new employee or moderator.

    Args:
        email: User's email address (unique, case-insensitive)
        password: User's password (will be hashed)
        role: 'employee' or 'moderator'

    Returns:
        Created User instance

    Raises:
        InvalidRoleError: If role is not a known role
        ReservedEmailError: If the email belongs to the dummy-login domain
        EmailAlreadyRegisteredError: If the email is already taken
    """
    if role not in UserRole.values:
        raise InvalidRoleError(f"Invalid role. Must be one of: {UserRole.values}")

    if is_reserved_email(email):
        raise ReservedEmailError("This email domain is reserved")

    if UserStore.find_by_email(email) is not None:
        raise EmailAlreadyRegisteredError("User with this email already exists")

    try:
        return UserStore.create(email=email, password=password, role=role)
    except StoreConflict:
        # Concurrent registration won the unique index
        raise EmailAlreadyRegisteredError("User with this email already exists")
