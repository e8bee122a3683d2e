import logging

from rest_framework import status
from rest_framework.decorators import api_view
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema, OpenApiParameter

from .serializers import (
    PickupPointSerializer,
    ReceptionSerializer,
    ProductSerializer,
    PickupPointWithReceptionsSerializer,
    PickupPointCreateSerializer,
    ReceptionCreateSerializer,
    ProductCreateSerializer,
    PickupPointFilterSerializer,
    ErrorResponseSerializer,
)
from .services import (
    create_pickup_point,
    list_pickup_points,
    open_reception,
    close_last_reception,
    add_product,
    delete_last_product,
    # Exceptions
    PvzServiceError,
    AccessDeniedError,
    InvalidInputError,
    ConflictError,
    NotFoundError,
    EmptyStateError,
)

logger = logging.getLogger(__name__)


# Error kind -> HTTP status. Matched on the exception class, never the message.
ERROR_STATUS = {
    AccessDeniedError: status.HTTP_403_FORBIDDEN,
    InvalidInputError: status.HTTP_400_BAD_REQUEST,
    ConflictError: status.HTTP_400_BAD_REQUEST,
    EmptyStateError: status.HTTP_400_BAD_REQUEST,
    NotFoundError: status.HTTP_404_NOT_FOUND,
}


def error_response(exc: PvzServiceError) -> Response:
    """Convert a service error into the ``{"message": ...}`` error body."""
    code = status.HTTP_400_BAD_REQUEST
    for kind in type(exc).__mro__:
        if kind in ERROR_STATUS:
            code = ERROR_STATUS[kind]
            break
    return Response({'message': str(exc)}, status=code)


def invalid_request(serializer) -> Response:
    field, messages = next(iter(serializer.errors.items()))
    return Response(
        {'message': f"{field}: {messages[0]}"},
        status=status.HTTP_400_BAD_REQUEST
    )


def _log_rejection(request, operation, exc):
    logger.warning(
        "%s rejected for user %s (%s): %s: %s",
        operation, request.user.id, request.user.role, type(exc).__name__, exc
    )


def _create_pickup_point(request):
    serializer = PickupPointCreateSerializer(data=request.data)
    if not serializer.is_valid():
        return invalid_request(serializer)

    try:
        pickup_point = create_pickup_point(
            actor_role=request.user.role,
            city=serializer.validated_data['city']
        )
    except PvzServiceError as e:
        _log_rejection(request, 'create_pickup_point', e)
        return error_response(e)

    logger.info("Pickup point %s registered in %s", pickup_point.id, pickup_point.city)
    return Response(PickupPointSerializer(pickup_point).data, status=status.HTTP_201_CREATED)


def _list_pickup_points(request):
    serializer = PickupPointFilterSerializer(data=request.query_params)
    if not serializer.is_valid():
        return invalid_request(serializer)
    params = serializer.validated_data

    try:
        listing = list_pickup_points(
            actor_role=request.user.role,
            date_start=params.get('startDate'),
            date_end=params.get('endDate'),
            page=params['page'],
            limit=params['limit'],
        )
    except PvzServiceError as e:
        _log_rejection(request, 'list_pickup_points', e)
        return error_response(e)

    return Response(PickupPointWithReceptionsSerializer(listing, many=True).data)


@extend_schema(
    methods=['POST'],
    request=PickupPointCreateSerializer,
    responses={
        201: PickupPointSerializer,
        400: ErrorResponseSerializer,
        403: ErrorResponseSerializer,
    },
    description="Register a pickup point (moderators only).",
    tags=['pvz'],
)
@extend_schema(
    methods=['GET'],
    parameters=[
        OpenApiParameter('startDate', str, description="Start of the reception date range"),
        OpenApiParameter('endDate', str, description="End of the reception date range"),
        OpenApiParameter('page', int, description="Page number, from 1"),
        OpenApiParameter('limit', int, description="Items per page, 1..30, default 10"),
    ],
    responses={
        200: PickupPointWithReceptionsSerializer(many=True),
        400: ErrorResponseSerializer,
        403: ErrorResponseSerializer,
    },
    description="List pickup points with receptions and products, filtered by reception date.",
    tags=['pvz'],
)
@api_view(['GET', 'POST'])
def pickup_points(request):
    """List or register pickup points."""
    if request.method == 'POST':
        return _create_pickup_point(request)
    return _list_pickup_points(request)


def _open_reception(request, pickup_point_id, success_status):
    try:
        reception = open_reception(
            actor_role=request.user.role,
            pickup_point_id=pickup_point_id
        )
    except PvzServiceError as e:
        _log_rejection(request, 'open_reception', e)
        return error_response(e)

    logger.info("Reception %s opened at pickup point %s", reception.id, pickup_point_id)
    return Response(ReceptionSerializer(reception).data, status=success_status)


@extend_schema(
    request=ReceptionCreateSerializer,
    responses={
        201: ReceptionSerializer,
        400: ErrorResponseSerializer,
        403: ErrorResponseSerializer,
        404: ErrorResponseSerializer,
    },
    description="Open a new goods reception for a pickup point (employees only).",
    tags=['receptions'],
)
@api_view(['POST'])
def create_reception(request):
    """Open a reception; the pickup point is given in the body."""
    serializer = ReceptionCreateSerializer(data=request.data)
    if not serializer.is_valid():
        return invalid_request(serializer)
    return _open_reception(request, serializer.validated_data['pvzId'], status.HTTP_201_CREATED)


@extend_schema(
    request=None,
    responses={
        200: ReceptionSerializer,
        400: ErrorResponseSerializer,
        403: ErrorResponseSerializer,
        404: ErrorResponseSerializer,
    },
    description="Open a new goods reception for the pickup point (employees only).",
    tags=['pvz'],
)
@api_view(['POST'])
def open_pickup_point_reception(request, pvz_id):
    """Open a reception at the pickup point in the URL."""
    return _open_reception(request, pvz_id, status.HTTP_200_OK)


@extend_schema(
    request=None,
    responses={
        200: ReceptionSerializer,
        400: ErrorResponseSerializer,
        403: ErrorResponseSerializer,
        404: ErrorResponseSerializer,
    },
    description="Close the reception in progress at the pickup point (employees only).",
    tags=['pvz'],
)
@api_view(['POST'])
def close_pickup_point_reception(request, pvz_id):
    """Close the last open reception."""
    try:
        reception = close_last_reception(
            actor_role=request.user.role,
            pickup_point_id=pvz_id
        )
    except PvzServiceError as e:
        _log_rejection(request, 'close_last_reception', e)
        return error_response(e)

    logger.info("Reception %s closed at pickup point %s", reception.id, pvz_id)
    return Response(ReceptionSerializer(reception).data)


@extend_schema(
    request=None,
    responses={
        200: ProductSerializer,
        400: ErrorResponseSerializer,
        403: ErrorResponseSerializer,
        404: ErrorResponseSerializer,
    },
    description="Delete the most recently added product of the current reception (LIFO).",
    tags=['pvz'],
)
@api_view(['POST'])
def delete_pickup_point_last_product(request, pvz_id):
    """Delete the last product of the reception in progress."""
    try:
        product = delete_last_product(
            actor_role=request.user.role,
            pickup_point_id=pvz_id
        )
    except PvzServiceError as e:
        _log_rejection(request, 'delete_last_product', e)
        return error_response(e)

    logger.info("Product %s removed from reception %s", product.id, product.reception_id)
    return Response(ProductSerializer(product).data)


@extend_schema(
    request=ProductCreateSerializer,
    responses={
        201: ProductSerializer,
        400: ErrorResponseSerializer,
        403: ErrorResponseSerializer,
        404: ErrorResponseSerializer,
    },
    description="Add a product to the reception in progress at a pickup point (employees only).",
    tags=['products'],
)
@api_view(['POST'])
def create_product(request):
    """Add a product to the current reception."""
    serializer = ProductCreateSerializer(data=request.data)
    if not serializer.is_valid():
        return invalid_request(serializer)

    try:
        product = add_product(
            actor_role=request.user.role,
            pickup_point_id=serializer.validated_data['pvzId'],
            product_type=serializer.validated_data['type']
        )
    except PvzServiceError as e:
        _log_rejection(request, 'add_product', e)
        return error_response(e)

    logger.info("Product %s (%s) added to reception %s", product.id, product.type, product.reception_id)
    return Response(ProductSerializer(product).data, status=status.HTTP_201_CREATED)
