"""
User directory.

Thin store over the ``User`` table. Lookups return ``None`` when nothing
matches; a duplicate email surfaces as ``StoreConflict``.
"""

from typing import Optional
from uuid import UUID

from django.db import transaction, IntegrityError

from apps.accounts.models import User
from apps.pvz.repositories import StoreConflict


class UserStore:
    """Persistence boundary for users."""

    @staticmethod
    def create(*, email: str, password: str, role: str) -> User:
        try:
            with transaction.atomic():
                return User.objects.create_user(email=email, password=password, role=role)
        except IntegrityError as e:
            raise StoreConflict(str(e)) from e

    @staticmethod
    def find_by_email(email: str) -> Optional[User]:
        return User.objects.filter(email__iexact=email).first()

    @staticmethod
    def find_by_id(user_id: UUID) -> Optional[User]:
        return User.objects.filter(id=user_id).first()
