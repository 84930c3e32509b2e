from .jwt_serializers import CustomRefreshToken
from .user_serializers import UserCreateSerializer, UserRegistrationSerializer, UserSerializer, UserUpdateSerializer


__all__ = [
    "CustomRefreshToken",
    "UserSerializer",
    "UserCreateSerializer",
    "UserRegistrationSerializer",
    "UserUpdateSerializer",
]
