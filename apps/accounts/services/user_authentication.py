"""User authentication and token issuing."""

from django.conf import settings
from django.db import transaction
from django.utils import timezone
from rest_framework_simplejwt.tokens import RefreshToken

from apps.accounts.models import User, UserRole
from apps.accounts.repositories import UserStore

from .exceptions import InvalidCredentialsError, InactiveAccountError, InvalidRoleError


@transaction.atomic
def authenticate_user(*, email: str, password: str) -> User:
    """
    Authenticate user with email and password.

    Args:
        email: User's email
        password: User's password

    Returns:
        Authenticated User instance

    Raises:
        InvalidCredentialsError: If credentials are invalid
        InactiveAccountError: If account is deactivated
    """
    user = UserStore.find_by_email(email)
    if user is None or not user.check_password(password):
        raise InvalidCredentialsError("Invalid email or password")

    if not user.is_active:
        raise InactiveAccountError("Account is deactivated")

    user.last_login = timezone.now()
    user.save(update_fields=['last_login'])

    return user


@transaction.atomic
def get_dummy_user(*, role: str) -> User:
    """
    Return the shared service account for ``role``, creating it on first use.

    Backs /dummyLogin, which hands out tokens without credentials so the
    API can be exercised per role.

    Raises:
        InvalidRoleError: If role is not a known role
    """
    if role not in UserRole.values:
        raise InvalidRoleError(f"Invalid role. Must be one of: {UserRole.values}")

    email = f"{role}@{settings.DUMMY_LOGIN_EMAIL_DOMAIN}"
    user, created = User.objects.get_or_create(email=email, defaults={'role': role})
    if created or user.role != role or user.has_usable_password():
        # The account must carry exactly this role and no password
        user.role = role
        user.set_unusable_password()
        user.save(update_fields=['role', 'password'])
    return user


def issue_access_token(user: User) -> str:
    """Issue a JWT access token carrying the user's role claim."""
    refresh = RefreshToken.for_user(user)
    refresh['role'] = user.role
    return str(refresh.access_token)
