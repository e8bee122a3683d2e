from rest_framework import serializers
from django.contrib.auth.password_validation import validate_password
from .models import User, UserRole


class UserSerializer(serializers.ModelSerializer):
    """User representation returned after registration."""

    class Meta:
        model = User
        fields = ['id', 'email', 'role']
        read_only_fields = fields


class DummyLoginSerializer(serializers.Serializer):
    """Serializer for test token requests."""

    role = serializers.ChoiceField(choices=UserRole.choices)


class UserRegistrationSerializer(serializers.Serializer):
    """Serializer for user registration."""

    email = serializers.EmailField(required=True)
    password = serializers.CharField(
        write_only=True,
        required=True,
        validators=[validate_password],
        style={'input_type': 'password'}
    )
    role = serializers.ChoiceField(choices=UserRole.choices)


class UserLoginSerializer(serializers.Serializer):
    """Serializer for user login."""

    email = serializers.EmailField(required=True)
    password = serializers.CharField(
        required=True,
        write_only=True,
        style={'input_type': 'password'}
    )


class TokenResponseSerializer(serializers.Serializer):
    token = serializers.CharField()


class ErrorResponseSerializer(serializers.Serializer):
    message = serializers.CharField()
