from django.conf import settings
from rest_framework import serializers

from .models import PickupPoint, Reception, Product, City, ProductType


# =============================================================================
# Output serializers
# =============================================================================

class PickupPointSerializer(serializers.ModelSerializer):
    """Pickup point as returned by the API."""

    registrationDate = serializers.DateTimeField(source='registration_date', read_only=True)

    class Meta:
        model = PickupPoint
        fields = ['id', 'registrationDate', 'city']
        read_only_fields = fields


class ReceptionSerializer(serializers.ModelSerializer):
    """Reception as returned by the API."""

    dateTime = serializers.DateTimeField(source='date_time', read_only=True)
    pvzId = serializers.UUIDField(source='pickup_point_id', read_only=True)

    class Meta:
        model = Reception
        fields = ['id', 'dateTime', 'pvzId', 'status']
        read_only_fields = fields


class ProductSerializer(serializers.ModelSerializer):
    """Product as returned by the API."""

    dateTime = serializers.DateTimeField(source='date_time', read_only=True)
    receptionId = serializers.UUIDField(source='reception_id', read_only=True)

    class Meta:
        model = Product
        fields = ['id', 'dateTime', 'type', 'receptionId']
        read_only_fields = fields


class ReceptionWithProductsSerializer(serializers.Serializer):
    """``ReceptionListing`` entry of a pickup point listing."""

    reception = ReceptionSerializer(read_only=True)
    products = ProductSerializer(many=True, read_only=True)


class PickupPointWithReceptionsSerializer(serializers.Serializer):
    """``PickupPointListing`` entry."""

    pvz = PickupPointSerializer(read_only=True)
    receptions = ReceptionWithProductsSerializer(many=True, read_only=True)


class ErrorResponseSerializer(serializers.Serializer):
    message = serializers.CharField()


# =============================================================================
# Input serializers
# =============================================================================

class PickupPointCreateSerializer(serializers.Serializer):
    """Body of POST /pvz/."""

    city = serializers.ChoiceField(choices=City.choices)


class ReceptionCreateSerializer(serializers.Serializer):
    """Body of POST /receptions/."""

    pvzId = serializers.UUIDField()


class ProductCreateSerializer(serializers.Serializer):
    """Body of POST /products/."""

    type = serializers.ChoiceField(choices=ProductType.choices)
    pvzId = serializers.UUIDField()


class PickupPointFilterSerializer(serializers.Serializer):
    """
    Query parameters of GET /pvz/.

    Page and limit are clamped rather than rejected: page < 1 becomes 1,
    a limit outside [1, PVZ_LIST_MAX_LIMIT] becomes the default.
    """

    startDate = serializers.DateTimeField(required=False)
    endDate = serializers.DateTimeField(required=False)
    page = serializers.IntegerField(required=False, default=1)
    limit = serializers.IntegerField(required=False, default=settings.PVZ_LIST_DEFAULT_LIMIT)

    def validate_page(self, value):
        return max(value, 1)

    def validate_limit(self, value):
        if value < 1 or value > settings.PVZ_LIST_MAX_LIMIT:
            return settings.PVZ_LIST_DEFAULT_LIMIT
        return value

    def validate(self, attrs):
        start = attrs.get('startDate')
        end = attrs.get('endDate')
        if start and end and start > end:
            raise serializers.ValidationError({
                'endDate': 'End date must not be before start date'
            })
        return attrs
