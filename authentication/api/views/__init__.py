from .auth_views import LoginAPIView, MeView, RegisterAPIView
from .user_views import UserViewSet


__all__ = [
    "LoginAPIView",
    "MeView",
    "RegisterAPIView",
    "UserViewSet",
]
