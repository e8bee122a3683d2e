"""
Concurrent reception opening against a real database.

SQLite ignores row locks and serializes writers on its own, so these tests
only run against PostgreSQL.
"""

import threading

import pytest
from django.db import connection, connections

from apps.accounts.models import UserRole
from apps.pvz.models import PickupPoint, Reception, ReceptionStatus, City
from apps.pvz.services import open_reception
from apps.pvz.services.exceptions import ActiveReceptionExistsError


pytestmark = [
    pytest.mark.postgres,
    pytest.mark.django_db(transaction=True),
    pytest.mark.skipif(
        connection.vendor != 'postgresql',
        reason="needs PostgreSQL row locks",
    ),
]

WORKERS = 8


def test_concurrent_open_admits_exactly_one():
    pickup_point = PickupPoint.objects.create(city=City.MOSCOW)
    barrier = threading.Barrier(WORKERS)
    opened, conflicts = [], []

    def worker():
        try:
            barrier.wait()
            try:
                opened.append(open_reception(
                    actor_role=UserRole.EMPLOYEE,
                    pickup_point_id=pickup_point.id,
                ))
            except ActiveReceptionExistsError as e:
                conflicts.append(e)
        finally:
            connections.close_all()

    threads = [threading.Thread(target=worker) for _ in range(WORKERS)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert len(opened) == 1
    assert len(conflicts) == WORKERS - 1
    assert Reception.objects.filter(
        pickup_point=pickup_point,
        status=ReceptionStatus.IN_PROGRESS,
    ).count() == 1
