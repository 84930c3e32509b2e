from authentication.domain.models import CustomUser


__all__ = ["CustomUser"]
