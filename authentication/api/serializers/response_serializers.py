"""
Request and response shapes for the auth endpoints, used for the OpenAPI schema.
"""

from rest_framework import serializers

from marketplace.api.serializers import ErrorResponseSerializer

from .user_serializers import UserSerializer


__all__ = ["ErrorResponseSerializer", "LoginRequestSerializer", "LoginResponseSerializer", "RegisterResponseSerializer"]


class LoginRequestSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True, style={"input_type": "password"})


class TokenPairSerializer(serializers.Serializer):
    access = serializers.CharField(help_text="JWT access token with role, is_admin and name claims")
    refresh = serializers.CharField(help_text="JWT refresh token")


class LoginResponseSerializer(TokenPairSerializer):
    message = serializers.CharField()
    user = UserSerializer()


class RegisterResponseSerializer(serializers.Serializer):
    message = serializers.CharField()
    user = UserSerializer()
