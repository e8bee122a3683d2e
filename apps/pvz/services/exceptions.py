"""
Domain exceptions for the pvz app.

Every service failure is one of five kinds. Views map the kind (the base
class) to an HTTP status; the concrete subclass only refines the message.

Exception Hierarchy:
    PvzServiceError (base)
    ├── AccessDeniedError               -> 403
    ├── InvalidInputError               -> 400
    │   ├── InvalidRoleError
    │   ├── InvalidCityError
    │   ├── InvalidProductTypeError
    │   └── InvalidDateRangeError
    ├── ConflictError                   -> 400
    │   ├── ActiveReceptionExistsError
    │   └── ConcurrentProductAppendError
    ├── NotFoundError                   -> 404
    │   └── PickupPointNotFoundError
    └── EmptyStateError                 -> 400
        ├── NoActiveReceptionError
        └── NothingToDeleteError
"""


class PvzServiceError(Exception):
    """Base exception for all pvz service errors."""
    pass


class AccessDeniedError(PvzServiceError):
    """Raised when the actor's role is not permitted to perform the action."""

    def __init__(self, message="access denied"):
        super().__init__(message)


class InvalidInputError(PvzServiceError):
    """Raised when input is malformed or outside a closed enumeration."""
    pass


class InvalidRoleError(InvalidInputError):
    """Raised when a role value cannot be parsed."""
    pass


class InvalidCityError(InvalidInputError):
    """Raised when a pickup point city is not one of the served cities."""
    pass


class InvalidProductTypeError(InvalidInputError):
    """Raised when a product type is not one of the known types."""
    pass


class InvalidDateRangeError(InvalidInputError):
    """Raised when the listing start date is after the end date."""
    pass


class ConflictError(PvzServiceError):
    """Raised when the requested transition collides with existing state."""
    pass


class ActiveReceptionExistsError(ConflictError):
    """Raised when opening a reception while one is already in progress."""
    pass


class ConcurrentProductAppendError(ConflictError):
    """Raised when two products race for the same tail position."""
    pass


class NotFoundError(PvzServiceError):
    """Raised when the target entity does not exist."""
    pass


class PickupPointNotFoundError(NotFoundError):
    """Raised when a pickup point does not exist."""
    pass


class EmptyStateError(PvzServiceError):
    """Raised when there is nothing to act on."""
    pass


class NoActiveReceptionError(EmptyStateError):
    """Raised when the pickup point has no reception in progress."""
    pass


class NothingToDeleteError(EmptyStateError):
    """Raised when deleting from a reception that has no products."""
    pass
