import pytest
from datetime import datetime, timezone as dt_timezone

from apps.pvz.serializers import (
    PickupPointFilterSerializer,
    PickupPointCreateSerializer,
    ProductCreateSerializer,
)


class TestPickupPointFilterSerializer:

    def test_defaults(self):
        serializer = PickupPointFilterSerializer(data={})

        assert serializer.is_valid()
        assert serializer.validated_data['page'] == 1
        assert serializer.validated_data['limit'] == 10
        assert 'startDate' not in serializer.validated_data
        assert 'endDate' not in serializer.validated_data

    @pytest.mark.parametrize('raw, expected', [('0', 1), ('-5', 1), ('1', 1), ('4', 4)])
    def test_page_clamped(self, raw, expected):
        serializer = PickupPointFilterSerializer(data={'page': raw})

        assert serializer.is_valid()
        assert serializer.validated_data['page'] == expected

    @pytest.mark.parametrize('raw, expected', [('0', 10), ('31', 10), ('1', 1), ('30', 30), ('12', 12)])
    def test_limit_clamped(self, raw, expected):
        serializer = PickupPointFilterSerializer(data={'limit': raw})

        assert serializer.is_valid()
        assert serializer.validated_data['limit'] == expected

    def test_non_integer_page_invalid(self):
        serializer = PickupPointFilterSerializer(data={'page': 'first'})

        assert not serializer.is_valid()
        assert 'page' in serializer.errors

    def test_dates_parsed(self):
        serializer = PickupPointFilterSerializer(data={
            'startDate': '2025-01-01T00:00:00Z',
            'endDate': '2025-01-31T23:59:59Z',
        })

        assert serializer.is_valid()
        assert serializer.validated_data['startDate'] == datetime(2025, 1, 1, tzinfo=dt_timezone.utc)

    def test_inverted_dates_invalid(self):
        serializer = PickupPointFilterSerializer(data={
            'startDate': '2025-02-01T00:00:00Z',
            'endDate': '2025-01-01T00:00:00Z',
        })

        assert not serializer.is_valid()
        assert 'endDate' in serializer.errors


class TestInputSerializers:

    def test_city_must_be_known(self):
        assert PickupPointCreateSerializer(data={'city': 'Москва'}).is_valid()
        assert not PickupPointCreateSerializer(data={'city': 'Moscow'}).is_valid()

    def test_product_requires_type_and_pickup_point(self):
        serializer = ProductCreateSerializer(data={'type': 'обувь'})

        assert not serializer.is_valid()
        assert 'pvzId' in serializer.errors
