"""
Persistence boundary for pickup points, receptions and products.

Each store is a thin class of static methods over the Django ORM:

- lookups return ``None`` when nothing matches, never raise ``DoesNotExist``;
- constraint violations (``IntegrityError``) are re-raised as
  ``StoreConflict`` so services can translate them into domain errors;
- every other database failure propagates unchanged.

Services never touch ``Model.objects`` directly; tests may swap a store
method out with ``unittest.mock.patch``.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from django.db import transaction, IntegrityError
from django.db.models import Max, Prefetch, QuerySet

from apps.pvz.models import (
    PickupPoint,
    Reception,
    ReceptionStatus,
    Product,
)


# Largest OFFSET the supported databases accept (signed 64-bit)
MAX_SQL_OFFSET = 2 ** 63 - 1


class StoreConflict(Exception):
    """A write was rejected by a uniqueness constraint."""
    pass


def _reception_window(
    queryset: QuerySet,
    start: Optional[datetime],
    end: Optional[datetime],
    prefix: str = ''
) -> QuerySet:
    """Restrict ``queryset`` to receptions opened within [start, end]."""
    if start is not None:
        queryset = queryset.filter(**{f'{prefix}date_time__gte': start})
    if end is not None:
        queryset = queryset.filter(**{f'{prefix}date_time__lte': end})
    return queryset


class PickupPointStore:
    """Pickup-point directory."""

    @staticmethod
    def create(*, city: str) -> PickupPoint:
        return PickupPoint.objects.create(city=city)

    @staticmethod
    def find_by_id(pickup_point_id: UUID) -> Optional[PickupPoint]:
        return PickupPoint.objects.filter(id=pickup_point_id).first()

    @staticmethod
    def lock(pickup_point_id: UUID) -> Optional[PickupPoint]:
        """
        Fetch the pickup point with a row lock held until the transaction ends.

        Serializes reception transitions on the same pickup point.
        """
        return (
            PickupPoint.objects
            .select_for_update()
            .filter(id=pickup_point_id)
            .first()
        )

    @staticmethod
    def list_with_filter(
        *,
        start: Optional[datetime],
        end: Optional[datetime],
        page: int,
        limit: int
    ) -> list[PickupPoint]:
        """
        One page of pickup points with their receptions and products prefetched.

        With a date bound set, only pickup points having a reception opened in
        the window are returned, and each carries only those receptions
        (as ``filtered_receptions``). Without bounds every pickup point is
        returned with its whole history. A page beyond the offset range the
        database accepts is empty.
        """
        queryset = PickupPoint.objects.order_by('registration_date', 'id')

        if start is not None or end is not None:
            matching = _reception_window(Reception.objects.all(), start, end)
            queryset = queryset.filter(
                id__in=matching.values('pickup_point_id')
            )

        receptions = _reception_window(
            Reception.objects.order_by('date_time', 'id'),
            start,
            end
        ).prefetch_related(
            Prefetch('products', queryset=Product.objects.order_by('sequence'))
        )

        offset = (page - 1) * limit
        if offset + limit > MAX_SQL_OFFSET:
            return []

        return list(
            queryset
            .prefetch_related(
                Prefetch('receptions', queryset=receptions, to_attr='filtered_receptions')
            )[offset:offset + limit]
        )


class ReceptionStore:
    """Reception store."""

    @staticmethod
    def create(*, pickup_point: PickupPoint) -> Reception:
        """
        Insert a new in-progress reception.

        Raises:
            StoreConflict: If the pickup point already has one in progress
        """
        try:
            # Savepoint keeps the caller's transaction usable after a conflict
            with transaction.atomic():
                return Reception.objects.create(
                    pickup_point=pickup_point,
                    status=ReceptionStatus.IN_PROGRESS
                )
        except IntegrityError as e:
            raise StoreConflict(str(e)) from e

    @staticmethod
    def get_last_for_pickup_point(
        pickup_point_id: UUID,
        status: Optional[str] = None,
        for_update: bool = False
    ) -> Optional[Reception]:
        """Most recently opened reception of a pickup point, optionally by status."""
        queryset = Reception.objects.filter(pickup_point_id=pickup_point_id)
        if status is not None:
            queryset = queryset.filter(status=status)
        if for_update:
            queryset = queryset.select_for_update()
        return queryset.order_by('-date_time', '-id').first()

    @staticmethod
    def close(reception: Reception) -> Reception:
        reception.status = ReceptionStatus.CLOSED
        reception.save(update_fields=['status'])
        return reception

    @staticmethod
    def list_for_pickup_point(pickup_point_id: UUID) -> list[Reception]:
        return list(
            Reception.objects
            .filter(pickup_point_id=pickup_point_id)
            .order_by('date_time', 'id')
        )


class ProductStore:
    """Product store; products of a reception are ordered by ``sequence``."""

    @staticmethod
    def add(*, reception: Reception, product_type: str) -> Product:
        """
        Append a product after the current tail of the reception.

        Raises:
            StoreConflict: If a concurrent append took the same position
        """
        tail = (
            Product.objects
            .filter(reception=reception)
            .aggregate(tail=Max('sequence'))['tail']
        )
        try:
            with transaction.atomic():
                return Product.objects.create(
                    reception=reception,
                    type=product_type,
                    sequence=(tail or 0) + 1
                )
        except IntegrityError as e:
            raise StoreConflict(str(e)) from e

    @staticmethod
    def get_last_for_reception(reception_id: UUID) -> Optional[Product]:
        return (
            Product.objects
            .filter(reception_id=reception_id)
            .order_by('-sequence')
            .first()
        )

    @staticmethod
    def delete_last_for_reception(reception_id: UUID) -> Optional[Product]:
        """Remove the tail product; returns it, or ``None`` if there was none."""
        product = ProductStore.get_last_for_reception(reception_id)
        if product is None:
            return None
        Product.objects.filter(id=product.id).delete()
        return product

    @staticmethod
    def list_for_reception(reception_id: UUID) -> list[Product]:
        return list(
            Product.objects
            .filter(reception_id=reception_id)
            .order_by('sequence')
        )
