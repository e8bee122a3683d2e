"""Pickup point registration and lookup."""

from uuid import UUID

from django.db import transaction

from apps.pvz.models import City, PickupPoint
from apps.pvz.repositories import PickupPointStore

from .authorization import Action, require_permission
from .exceptions import InvalidCityError, PickupPointNotFoundError


@transaction.atomic
def create_pickup_point(*, actor_role, city: str) -> PickupPoint:
    """
    Register a new pickup point (moderators only).

    Args:
        actor_role: Role of the caller
        city: One of the served cities

    Returns:
        Created PickupPoint instance

    Raises:
        AccessDeniedError: If the caller is not a moderator
        InvalidCityError: If city is not served
    """
    require_permission(actor_role, Action.CREATE_PICKUP_POINT)

    if city not in City.values:
        raise InvalidCityError(f"Invalid city. Must be one of: {City.values}")

    return PickupPointStore.create(city=city)


def get_pickup_point(*, pickup_point_id: UUID, for_update: bool = False) -> PickupPoint:
    """
    Fetch a pickup point, optionally locking its row.

    Raises:
        PickupPointNotFoundError: If it does not exist
    """
    if for_update:
        pickup_point = PickupPointStore.lock(pickup_point_id)
    else:
        pickup_point = PickupPointStore.find_by_id(pickup_point_id)

    if pickup_point is None:
        raise PickupPointNotFoundError(f"Pickup point with ID {pickup_point_id} not found")
    return pickup_point
