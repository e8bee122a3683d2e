"""
Reception lifecycle.

Per pickup point the lifecycle is a two-state machine:

    NoActiveReception --open--> InProgress --close--> NoActiveReception

A reception moves in_progress -> close exactly once; closed receptions are
never reopened. "The current reception" is always looked up in the store
(latest in_progress row for the pickup point), never cached.

Concurrent opens are serialized by a row lock on the pickup point; the
partial unique index on in-progress receptions backs this up, and its
violation is reported as ``ActiveReceptionExistsError``.
"""

from typing import Optional
from uuid import UUID

from django.db import transaction

from apps.pvz.models import Reception, ReceptionStatus
from apps.pvz.repositories import ReceptionStore, StoreConflict

from .authorization import Action, require_permission
from .exceptions import ActiveReceptionExistsError, NoActiveReceptionError
from .pickup_point_management import get_pickup_point


def get_active_reception(*, pickup_point_id: UUID, for_update: bool = False) -> Optional[Reception]:
    """Latest in-progress reception of the pickup point, or None."""
    return ReceptionStore.get_last_for_pickup_point(
        pickup_point_id,
        status=ReceptionStatus.IN_PROGRESS,
        for_update=for_update
    )


def require_active_reception(*, pickup_point_id: UUID, for_update: bool = False) -> Reception:
    """
    Like ``get_active_reception`` but fails when nothing is in progress.

    Raises:
        NoActiveReceptionError: If the pickup point has no open reception
    """
    reception = get_active_reception(pickup_point_id=pickup_point_id, for_update=for_update)
    if reception is None:
        raise NoActiveReceptionError("No active reception for this pickup point")
    return reception


@transaction.atomic
def open_reception(*, actor_role, pickup_point_id: UUID) -> Reception:
    """
    Open a new reception at a pickup point (employees only).

    Args:
        actor_role: Role of the caller
        pickup_point_id: UUID of the pickup point

    Returns:
        Created Reception (status in_progress)

    Raises:
        AccessDeniedError: If the caller is not an employee
        PickupPointNotFoundError: If the pickup point doesn't exist
        ActiveReceptionExistsError: If a reception is already in progress
    """
    require_permission(actor_role, Action.OPEN_RECEPTION)

    pickup_point = get_pickup_point(pickup_point_id=pickup_point_id, for_update=True)

    if get_active_reception(pickup_point_id=pickup_point.id) is not None:
        raise ActiveReceptionExistsError("Previous reception is not closed yet")

    try:
        return ReceptionStore.create(pickup_point=pickup_point)
    except StoreConflict:
        raise ActiveReceptionExistsError("Previous reception is not closed yet")


@transaction.atomic
def close_last_reception(*, actor_role, pickup_point_id: UUID) -> Reception:
    """
    Close the reception in progress at a pickup point (employees only).

    Args:
        actor_role: Role of the caller
        pickup_point_id: UUID of the pickup point

    Returns:
        The closed Reception

    Raises:
        AccessDeniedError: If the caller is not an employee
        PickupPointNotFoundError: If the pickup point doesn't exist
        NoActiveReceptionError: If nothing is in progress
    """
    require_permission(actor_role, Action.CLOSE_RECEPTION)

    pickup_point = get_pickup_point(pickup_point_id=pickup_point_id, for_update=True)
    reception = require_active_reception(pickup_point_id=pickup_point.id, for_update=True)

    return ReceptionStore.close(reception)
