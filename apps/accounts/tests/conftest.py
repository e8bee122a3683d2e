import pytest
from rest_framework.test import APIClient
from apps.accounts.models import User, UserRole


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def user(db):
    """Create and return an employee account."""
    return User.objects.create_user(
        email='testuser@example.com',
        password='TestPass123!',
        role=UserRole.EMPLOYEE,
    )


@pytest.fixture
def user_inactive(db):
    """Create and return an inactive user."""
    return User.objects.create_user(
        email='inactive@example.com',
        password='TestPass123!',
        role=UserRole.MODERATOR,
        is_active=False,
    )
