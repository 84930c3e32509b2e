from authentication.domain.models.user import CustomUser, CustomUserManager


__all__ = [
    "CustomUser",
    "CustomUserManager",
]
