"""
Pvz app services layer.

The public functions here are the workflow entry points. Each one checks
the caller's role against the authorization policy before touching state
and runs in a single transaction; failures surface as ``PvzServiceError``
subclasses.
"""

from .exceptions import (
    PvzServiceError,
    AccessDeniedError,
    InvalidInputError,
    InvalidRoleError,
    InvalidCityError,
    InvalidProductTypeError,
    InvalidDateRangeError,
    ConflictError,
    ActiveReceptionExistsError,
    ConcurrentProductAppendError,
    NotFoundError,
    PickupPointNotFoundError,
    EmptyStateError,
    NoActiveReceptionError,
    NothingToDeleteError,
)
from .authorization import Action, permit, parse_role, require_permission
from .pickup_point_management import create_pickup_point, get_pickup_point
from .reception_management import (
    open_reception,
    close_last_reception,
    get_active_reception,
)
from .product_management import add_product, delete_last_product
from .pickup_point_listing import (
    list_pickup_points,
    clamp_page,
    clamp_limit,
    PickupPointListing,
    ReceptionListing,
)

__all__ = [
    # Exceptions
    'PvzServiceError',
    'AccessDeniedError',
    'InvalidInputError',
    'InvalidRoleError',
    'InvalidCityError',
    'InvalidProductTypeError',
    'InvalidDateRangeError',
    'ConflictError',
    'ActiveReceptionExistsError',
    'ConcurrentProductAppendError',
    'NotFoundError',
    'PickupPointNotFoundError',
    'EmptyStateError',
    'NoActiveReceptionError',
    'NothingToDeleteError',

    # Authorization
    'Action',
    'permit',
    'parse_role',
    'require_permission',

    # Pickup points
    'create_pickup_point',
    'get_pickup_point',
    'list_pickup_points',
    'clamp_page',
    'clamp_limit',
    'PickupPointListing',
    'ReceptionListing',

    # Receptions
    'open_reception',
    'close_last_reception',
    'get_active_reception',

    # Products
    'add_product',
    'delete_last_product',
]
