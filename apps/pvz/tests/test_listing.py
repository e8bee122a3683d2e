"""
Tests for pickup point listing: date filter, pagination, nesting.
"""

import pytest
from datetime import datetime, timedelta, timezone as dt_timezone

from apps.accounts.models import UserRole
from apps.pvz.models import PickupPoint, Reception, ReceptionStatus, Product, City, ProductType
from apps.pvz.services import list_pickup_points, clamp_page, clamp_limit
from apps.pvz.services.exceptions import AccessDeniedError, InvalidDateRangeError


BASE = datetime(2025, 3, 1, 12, 0, tzinfo=dt_timezone.utc)


def make_pickup_point(minutes, city=City.MOSCOW):
    return PickupPoint.objects.create(city=city, registration_date=BASE + timedelta(minutes=minutes))


def make_reception(pickup_point, when, status=ReceptionStatus.CLOSED):
    return Reception.objects.create(pickup_point=pickup_point, date_time=when, status=status)


@pytest.fixture
def twenty_five_pickup_points(db):
    """25 pickup points registered a minute apart, each with one reception."""
    points = []
    for i in range(25):
        point = make_pickup_point(i)
        make_reception(point, BASE + timedelta(days=1, minutes=i))
        points.append(point)
    return points


class TestClamping:

    @pytest.mark.parametrize('page, expected', [(None, 1), (-3, 1), (0, 1), (1, 1), (7, 7)])
    def test_clamp_page(self, page, expected):
        assert clamp_page(page) == expected

    @pytest.mark.parametrize('limit, expected', [
        (None, 10), (0, 10), (-1, 10), (31, 10), (1000, 10), (1, 1), (30, 30), (15, 15),
    ])
    def test_clamp_limit(self, limit, expected):
        assert clamp_limit(limit) == expected


@pytest.mark.django_db
class TestPagination:

    def test_first_page(self, twenty_five_pickup_points):
        listing = list_pickup_points(actor_role=UserRole.EMPLOYEE, page=1, limit=10)

        assert [entry.pvz.id for entry in listing] == [p.id for p in twenty_five_pickup_points[:10]]

    def test_last_partial_page(self, twenty_five_pickup_points):
        listing = list_pickup_points(actor_role=UserRole.EMPLOYEE, page=3, limit=10)

        assert [entry.pvz.id for entry in listing] == [p.id for p in twenty_five_pickup_points[20:25]]

    def test_page_past_end_is_empty(self, twenty_five_pickup_points):
        assert list_pickup_points(actor_role=UserRole.EMPLOYEE, page=4, limit=10) == []

    @pytest.mark.parametrize('page', [2 ** 62, 2 ** 63, 10 ** 20])
    def test_page_beyond_offset_range_is_empty(self, twenty_five_pickup_points, page):
        assert list_pickup_points(actor_role=UserRole.EMPLOYEE, page=page, limit=30) == []

    def test_out_of_range_limit_uses_default(self, twenty_five_pickup_points):
        listing = list_pickup_points(actor_role=UserRole.MODERATOR, page=1, limit=500)

        assert len(listing) == 10

    def test_page_below_one_is_first_page(self, twenty_five_pickup_points):
        listing = list_pickup_points(actor_role=UserRole.MODERATOR, page=0, limit=5)

        assert [entry.pvz.id for entry in listing] == [p.id for p in twenty_five_pickup_points[:5]]

    def test_pagination_applies_after_filtering(self, twenty_five_pickup_points):
        # Only every fifth point gets a reception on day 5
        day5 = BASE + timedelta(days=5)
        matching = twenty_five_pickup_points[::5]
        for point in matching:
            make_reception(point, day5)

        listing = list_pickup_points(
            actor_role=UserRole.EMPLOYEE,
            date_start=day5,
            date_end=day5 + timedelta(hours=1),
            page=2,
            limit=3,
        )

        assert [entry.pvz.id for entry in listing] == [p.id for p in matching[3:5]]


@pytest.mark.django_db
class TestDateFilter:

    @pytest.fixture
    def history(self, db):
        """Point A has receptions on days 1 and 10, point B on day 20, point C none."""
        a = make_pickup_point(0, City.KAZAN)
        b = make_pickup_point(1, City.MOSCOW)
        c = make_pickup_point(2, City.SAINT_PETERSBURG)
        a1 = make_reception(a, BASE + timedelta(days=1))
        a10 = make_reception(a, BASE + timedelta(days=10))
        b20 = make_reception(b, BASE + timedelta(days=20), status=ReceptionStatus.IN_PROGRESS)
        return {'a': a, 'b': b, 'c': c, 'a1': a1, 'a10': a10, 'b20': b20}

    def test_no_bounds_lists_everything(self, history):
        listing = list_pickup_points(actor_role=UserRole.EMPLOYEE)

        assert [entry.pvz for entry in listing] == [history['a'], history['b'], history['c']]
        assert [r.reception for r in listing[0].receptions] == [history['a1'], history['a10']]
        assert listing[2].receptions == []

    def test_window_selects_points_and_receptions(self, history):
        listing = list_pickup_points(
            actor_role=UserRole.EMPLOYEE,
            date_start=BASE + timedelta(days=5),
            date_end=BASE + timedelta(days=15),
        )

        assert [entry.pvz for entry in listing] == [history['a']]
        # Only the reception inside the window, not the whole history
        assert [r.reception for r in listing[0].receptions] == [history['a10']]

    def test_bounds_are_inclusive(self, history):
        day10 = history['a10'].date_time
        listing = list_pickup_points(actor_role=UserRole.EMPLOYEE, date_start=day10, date_end=day10)

        assert [entry.pvz for entry in listing] == [history['a']]

    def test_start_only(self, history):
        listing = list_pickup_points(
            actor_role=UserRole.EMPLOYEE,
            date_start=BASE + timedelta(days=5),
        )

        assert [entry.pvz for entry in listing] == [history['a'], history['b']]

    def test_end_only(self, history):
        listing = list_pickup_points(
            actor_role=UserRole.EMPLOYEE,
            date_end=BASE + timedelta(days=5),
        )

        assert [entry.pvz for entry in listing] == [history['a']]
        assert [r.reception for r in listing[0].receptions] == [history['a1']]

    def test_empty_window_is_empty_list(self, history):
        listing = list_pickup_points(
            actor_role=UserRole.EMPLOYEE,
            date_start=BASE + timedelta(days=100),
            date_end=BASE + timedelta(days=200),
        )

        assert listing == []

    def test_inverted_window_rejected(self, history):
        with pytest.raises(InvalidDateRangeError):
            list_pickup_points(
                actor_role=UserRole.EMPLOYEE,
                date_start=BASE + timedelta(days=2),
                date_end=BASE,
            )


@pytest.mark.django_db
class TestNesting:

    def test_products_in_append_order(self, pickup_point):
        reception = make_reception(pickup_point, BASE, status=ReceptionStatus.IN_PROGRESS)
        for sequence, product_type in enumerate(
            [ProductType.SHOES, ProductType.ELECTRONICS, ProductType.CLOTHES], start=1
        ):
            Product.objects.create(reception=reception, type=product_type, sequence=sequence)

        listing = list_pickup_points(actor_role=UserRole.EMPLOYEE)

        products = listing[0].receptions[0].products
        assert [p.type for p in products] == [
            ProductType.SHOES,
            ProductType.ELECTRONICS,
            ProductType.CLOTHES,
        ]

    def test_unknown_role_denied(self, pickup_point):
        with pytest.raises(AccessDeniedError):
            list_pickup_points(actor_role='guest')
