"""
Role-based authorization policy.

``permit`` is the single gate every workflow entry point passes before
touching state. The rule table is keyed by the closed ``UserRole`` enum;
any value that does not parse to a member is denied.
"""

from enum import Enum

from apps.accounts.models import UserRole

from .exceptions import AccessDeniedError, InvalidRoleError


class Action(str, Enum):
    CREATE_PICKUP_POINT = 'create_pickup_point'
    LIST_PICKUP_POINTS = 'list_pickup_points'
    OPEN_RECEPTION = 'open_reception'
    CLOSE_RECEPTION = 'close_reception'
    ADD_PRODUCT = 'add_product'
    DELETE_LAST_PRODUCT = 'delete_last_product'
    CREATE_PICKUP_POINT_AND_RECEPTION_COMBO = 'create_pickup_point_and_reception_combo'


RULES = {
    UserRole.MODERATOR: frozenset({
        Action.CREATE_PICKUP_POINT,
        Action.LIST_PICKUP_POINTS,
    }),
    UserRole.EMPLOYEE: frozenset({
        Action.LIST_PICKUP_POINTS,
        Action.OPEN_RECEPTION,
        Action.CLOSE_RECEPTION,
        Action.ADD_PRODUCT,
        Action.DELETE_LAST_PRODUCT,
    }),
}


def parse_role(value) -> UserRole:
    """
    Parse a role tag into ``UserRole``.

    Raises:
        InvalidRoleError: If value is not a known role
    """
    if isinstance(value, UserRole):
        return value
    try:
        return UserRole(value)
    except ValueError:
        raise InvalidRoleError(f"Unknown role: {value!r}")


def permit(role, action) -> bool:
    """Return True if ``role`` may perform ``action``. Unknown values are denied."""
    try:
        role = parse_role(role)
        action = Action(action)
    except (InvalidRoleError, ValueError):
        return False
    return action in RULES[role]


def require_permission(role, action) -> UserRole:
    """
    Gate an entry point on ``permit``.

    Returns:
        The parsed role

    Raises:
        AccessDeniedError: If the role may not perform the action
    """
    if not permit(role, action):
        raise AccessDeniedError()
    return UserRole(role)
