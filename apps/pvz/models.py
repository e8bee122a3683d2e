from django.db import models
from django.utils import timezone
from django.db.models import Q
import uuid


class City(models.TextChoices):
    MOSCOW = 'Москва', 'Moscow'
    SAINT_PETERSBURG = 'Санкт-Петербург', 'Saint-Petersburg'
    KAZAN = 'Казань', 'Kazan'


class ReceptionStatus(models.TextChoices):
    IN_PROGRESS = 'in_progress', 'In progress'
    CLOSED = 'close', 'Closed'


class ProductType(models.TextChoices):
    ELECTRONICS = 'электроника', 'Electronics'
    CLOTHES = 'одежда', 'Clothes'
    SHOES = 'обувь', 'Shoes'


class PickupPoint(models.Model):
    """Order pickup point (PVZ). Never deleted; city fixed at creation."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    registration_date = models.DateTimeField(default=timezone.now, db_index=True)
    city = models.CharField(max_length=32, choices=City.choices)

    class Meta:
        db_table = 'pickup_points'
        ordering = ['registration_date', 'id']

    def __str__(self):
        return f"{self.city} ({self.id})"


class Reception(models.Model):
    """Goods reception session at a pickup point."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    pickup_point = models.ForeignKey(
        PickupPoint,
        on_delete=models.PROTECT,
        related_name='receptions'
    )
    date_time = models.DateTimeField(default=timezone.now)
    status = models.CharField(
        max_length=20,
        choices=ReceptionStatus.choices,
        default=ReceptionStatus.IN_PROGRESS
    )

    class Meta:
        db_table = 'receptions'
        ordering = ['date_time', 'id']
        indexes = [
            models.Index(fields=['pickup_point', 'status', 'date_time'], name='reception_point_status_idx'),
            models.Index(fields=['date_time'], name='reception_date_time_idx'),
        ]
        constraints = [
            models.UniqueConstraint(
                fields=['pickup_point'],
                condition=Q(status=ReceptionStatus.IN_PROGRESS),
                name='one_active_reception_per_pickup_point',
            ),
        ]

    def __str__(self):
        return f"Reception {self.id} at {self.pickup_point_id} ({self.status})"

    @property
    def is_in_progress(self):
        return self.status == ReceptionStatus.IN_PROGRESS


class Product(models.Model):
    """Item intake-logged during a reception, ordered by ``sequence``."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    reception = models.ForeignKey(
        Reception,
        on_delete=models.CASCADE,
        related_name='products'
    )
    date_time = models.DateTimeField(default=timezone.now)
    type = models.CharField(max_length=32, choices=ProductType.choices)
    sequence = models.PositiveIntegerField(editable=False)

    class Meta:
        db_table = 'products'
        ordering = ['sequence']
        constraints = [
            models.UniqueConstraint(
                fields=['reception', 'sequence'],
                name='unique_product_sequence_per_reception',
            ),
        ]

    def __str__(self):
        return f"{self.type} #{self.sequence} in {self.reception_id}"
