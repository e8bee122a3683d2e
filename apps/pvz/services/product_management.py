"""
Product intake ledger.

Products of a reception form an append-only sequence that may only shrink
at the tail (LIFO). Both operations act on the pickup point's reception in
progress; neither ever opens one.
"""

from uuid import UUID

from django.db import transaction

from apps.pvz.models import Product, ProductType
from apps.pvz.repositories import ProductStore, StoreConflict

from .authorization import Action, require_permission
from .exceptions import (
    InvalidProductTypeError,
    NothingToDeleteError,
    ConcurrentProductAppendError,
)
from .pickup_point_management import get_pickup_point
from .reception_management import require_active_reception


@transaction.atomic
def add_product(*, actor_role, pickup_point_id: UUID, product_type: str) -> Product:
    """
    Append a product to the reception in progress (employees only).

    Args:
        actor_role: Role of the caller
        pickup_point_id: UUID of the pickup point
        product_type: One of the known product types

    Returns:
        Created Product

    Raises:
        AccessDeniedError: If the caller is not an employee
        PickupPointNotFoundError: If the pickup point doesn't exist
        NoActiveReceptionError: If no reception is in progress
        InvalidProductTypeError: If product_type is unknown
        ConcurrentProductAppendError: If a parallel append took the slot
    """
    require_permission(actor_role, Action.ADD_PRODUCT)

    pickup_point = get_pickup_point(pickup_point_id=pickup_point_id, for_update=True)
    reception = require_active_reception(pickup_point_id=pickup_point.id, for_update=True)

    if product_type not in ProductType.values:
        raise InvalidProductTypeError(
            f"Invalid product type. Must be one of: {ProductType.values}"
        )

    try:
        return ProductStore.add(reception=reception, product_type=product_type)
    except StoreConflict:
        raise ConcurrentProductAppendError("Another product was added at the same time, retry")


@transaction.atomic
def delete_last_product(*, actor_role, pickup_point_id: UUID) -> Product:
    """
    Remove the most recently added product of the reception in progress.

    Args:
        actor_role: Role of the caller
        pickup_point_id: UUID of the pickup point

    Returns:
        The deleted Product (no longer in the database)

    Raises:
        AccessDeniedError: If the caller is not an employee
        PickupPointNotFoundError: If the pickup point doesn't exist
        NoActiveReceptionError: If no reception is in progress
        NothingToDeleteError: If the reception has no products
    """
    require_permission(actor_role, Action.DELETE_LAST_PRODUCT)

    pickup_point = get_pickup_point(pickup_point_id=pickup_point_id, for_update=True)
    reception = require_active_reception(pickup_point_id=pickup_point.id, for_update=True)

    product = ProductStore.delete_last_for_reception(reception.id)
    if product is None:
        raise NothingToDeleteError("No products to delete in the current reception")
    return product
