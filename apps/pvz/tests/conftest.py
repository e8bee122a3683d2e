import pytest
from datetime import timedelta
from django.utils import timezone
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User, UserRole
from apps.pvz.models import PickupPoint, Reception, ReceptionStatus, Product, City, ProductType


def authenticated(user):
    """Return an API client carrying a JWT for ``user``."""
    client = APIClient()
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def employee(db):
    """Create and return a pickup point employee."""
    return User.objects.create_user(
        email='employee@example.com',
        password='TestPass123!',
        role=UserRole.EMPLOYEE,
    )


@pytest.fixture
def moderator(db):
    """Create and return a moderator."""
    return User.objects.create_user(
        email='moderator@example.com',
        password='TestPass123!',
        role=UserRole.MODERATOR,
    )


@pytest.fixture
def employee_client(employee):
    """Return API client authenticated as employee."""
    return authenticated(employee)


@pytest.fixture
def moderator_client(moderator):
    """Return API client authenticated as moderator."""
    return authenticated(moderator)


@pytest.fixture
def pickup_point(db):
    """Create and return a pickup point in Kazan."""
    return PickupPoint.objects.create(city=City.KAZAN)


@pytest.fixture
def other_pickup_point(db):
    """Create and return a pickup point in Moscow."""
    return PickupPoint.objects.create(
        city=City.MOSCOW,
        registration_date=timezone.now() + timedelta(seconds=1),
    )


@pytest.fixture
def active_reception(pickup_point):
    """Reception in progress at ``pickup_point``."""
    return Reception.objects.create(
        pickup_point=pickup_point,
        status=ReceptionStatus.IN_PROGRESS,
    )


@pytest.fixture
def closed_reception(pickup_point):
    """Closed reception at ``pickup_point``, opened a day ago."""
    return Reception.objects.create(
        pickup_point=pickup_point,
        status=ReceptionStatus.CLOSED,
        date_time=timezone.now() - timedelta(days=1),
    )


@pytest.fixture
def reception_with_products(active_reception):
    """Active reception holding electronics, then clothes."""
    Product.objects.create(reception=active_reception, type=ProductType.ELECTRONICS, sequence=1)
    Product.objects.create(reception=active_reception, type=ProductType.CLOTHES, sequence=2)
    return active_reception
