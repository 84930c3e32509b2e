import logging

from django.contrib.auth import get_user_model


# Canonical admin role name
ROLE_ADMIN = "admin"

logger = logging.getLogger(__name__)


def _fetch_user_from_db(user):
    """Fetch a fresh copy of the user with only the fields needed for role checks.

    Returns None for anonymous users.
    """
    if not getattr(user, "is_authenticated", False):
        return None
    User = get_user_model()
    return User.objects.only("id", "role", "is_superuser").filter(pk=getattr(user, "pk", None)).first()


def is_admin(user) -> bool:
    """Admin check verified against the database rather than token claims."""
    db_user = _fetch_user_from_db(user)
    if not db_user:
        return False
    return bool(db_user.is_superuser or db_user.role == ROLE_ADMIN)


def log_denial(user, required_role: str):
    logger.warning(
        "RBAC denial: user_id=%s required=%s",
        getattr(user, "id", None),
        required_role,
    )
