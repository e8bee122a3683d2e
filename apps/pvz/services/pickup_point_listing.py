"""
Pickup point listing with reception date filter and pagination.

A pickup point is listed when at least one of its receptions was opened
within [date_start, date_end] (inclusive; either bound may be omitted, and
with neither bound every pickup point is listed). Each listed pickup point
carries only the receptions inside the window, each with its full product
sequence. Results are ordered by registration, then paged with a 1-based
``page`` and a ``limit`` clamped to [1, PVZ_LIST_MAX_LIMIT].

The page is read inside one transaction. Each prefetch query may still see
its own snapshot (PostgreSQL READ COMMITTED), but every product write is a
single-row insert or delete, so a reception never comes back with a
half-written product sequence.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from django.conf import settings
from django.db import transaction

from apps.pvz.models import PickupPoint, Reception, Product
from apps.pvz.repositories import PickupPointStore

from .authorization import Action, require_permission
from .exceptions import InvalidDateRangeError


@dataclass(frozen=True)
class ReceptionListing:
    reception: Reception
    products: list[Product]


@dataclass(frozen=True)
class PickupPointListing:
    pvz: PickupPoint
    receptions: list[ReceptionListing]


def clamp_page(page: Optional[int]) -> int:
    """Pages are 1-based; anything lower (or missing) means the first page."""
    if page is None or page < 1:
        return 1
    return page


def clamp_limit(limit: Optional[int]) -> int:
    """Out-of-range or missing limits fall back to the default page size."""
    if limit is None or limit < 1 or limit > settings.PVZ_LIST_MAX_LIMIT:
        return settings.PVZ_LIST_DEFAULT_LIMIT
    return limit


@transaction.atomic
def list_pickup_points(
    *,
    actor_role,
    date_start: Optional[datetime] = None,
    date_end: Optional[datetime] = None,
    page: Optional[int] = 1,
    limit: Optional[int] = None
) -> list[PickupPointListing]:
    """
    List pickup points with their receptions and products.

    Args:
        actor_role: Role of the caller
        date_start: Earliest reception open time to include (inclusive)
        date_end: Latest reception open time to include (inclusive)
        page: 1-based page number
        limit: Page size, 1..PVZ_LIST_MAX_LIMIT

    Returns:
        List of PickupPointListing, possibly empty

    Raises:
        AccessDeniedError: If the role may not list pickup points
        InvalidDateRangeError: If date_start is after date_end
    """
    require_permission(actor_role, Action.LIST_PICKUP_POINTS)

    if date_start is not None and date_end is not None and date_start > date_end:
        raise InvalidDateRangeError("Start date must not be after end date")

    pickup_points = PickupPointStore.list_with_filter(
        start=date_start,
        end=date_end,
        page=clamp_page(page),
        limit=clamp_limit(limit),
    )

    return [
        PickupPointListing(
            pvz=pickup_point,
            receptions=[
                ReceptionListing(reception=reception, products=list(reception.products.all()))
                for reception in pickup_point.filtered_receptions
            ],
        )
        for pickup_point in pickup_points
    ]
