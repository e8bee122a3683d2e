import logging

from rest_framework import status
from rest_framework.decorators import api_view, permission_classes, authentication_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema

from .serializers import (
    DummyLoginSerializer,
    UserRegistrationSerializer,
    UserLoginSerializer,
    UserSerializer,
    TokenResponseSerializer,
    ErrorResponseSerializer,
)
from .services import (
    register_user,
    authenticate_user,
    get_dummy_user,
    issue_access_token,
    EmailAlreadyRegisteredError,
    InvalidRoleError,
    InvalidCredentialsError,
    InactiveAccountError,
    ReservedEmailError,
)

logger = logging.getLogger(__name__)


def _validation_message(errors):
    """Flatten serializer errors into the single-message error body."""
    field, messages = next(iter(errors.items()))
    return f"{field}: {messages[0]}"


@extend_schema(
    request=DummyLoginSerializer,
    responses={
        200: TokenResponseSerializer,
        400: ErrorResponseSerializer,
    },
    description="Get a test token for the given role.",
    tags=['auth'],
)
@api_view(['POST'])
@authentication_classes([])
@permission_classes([AllowAny])
def dummy_login(request):
    """Issue a token for the shared account of a role."""
    serializer = DummyLoginSerializer(data=request.data)
    if not serializer.is_valid():
        return Response(
            {'message': _validation_message(serializer.errors)},
            status=status.HTTP_400_BAD_REQUEST
        )

    try:
        user = get_dummy_user(role=serializer.validated_data['role'])
    except InvalidRoleError as e:
        return Response({'message': str(e)}, status=status.HTTP_400_BAD_REQUEST)

    return Response({'token': issue_access_token(user)})


@extend_schema(
    request=UserRegistrationSerializer,
    responses={
        201: UserSerializer,
        400: ErrorResponseSerializer,
    },
    description="Register a new employee or moderator.",
    tags=['auth'],
)
@api_view(['POST'])
@authentication_classes([])
@permission_classes([AllowAny])
def register(request):
    """Register a new user account."""
    serializer = UserRegistrationSerializer(data=request.data)
    if not serializer.is_valid():
        return Response(
            {'message': _validation_message(serializer.errors)},
            status=status.HTTP_400_BAD_REQUEST
        )

    try:
        user = register_user(**serializer.validated_data)
    except (EmailAlreadyRegisteredError, InvalidRoleError, ReservedEmailError) as e:
        logger.warning("Registration rejected for %s: %s", serializer.validated_data['email'], e)
        return Response({'message': str(e)}, status=status.HTTP_400_BAD_REQUEST)

    logger.info("Registered %s user %s", user.role, user.id)
    return Response(UserSerializer(user).data, status=status.HTTP_201_CREATED)


@extend_schema(
    request=UserLoginSerializer,
    responses={
        200: TokenResponseSerializer,
        400: ErrorResponseSerializer,
        401: ErrorResponseSerializer,
    },
    description="Authenticate with email and password to receive a JWT.",
    tags=['auth'],
)
@api_view(['POST'])
@authentication_classes([])
@permission_classes([AllowAny])
def login(request):
    """Login with email and password."""
    serializer = UserLoginSerializer(data=request.data)
    if not serializer.is_valid():
        return Response(
            {'message': _validation_message(serializer.errors)},
            status=status.HTTP_400_BAD_REQUEST
        )

    try:
        user = authenticate_user(**serializer.validated_data)
    except (InvalidCredentialsError, InactiveAccountError) as e:
        return Response({'message': str(e)}, status=status.HTTP_401_UNAUTHORIZED)

    return Response({'token': issue_access_token(user)})
