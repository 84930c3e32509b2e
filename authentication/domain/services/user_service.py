"""
UserService - user accounts.

Creates, updates and deletes customer/admin accounts and checks credentials.
Email addresses are stored lower-cased and compared case-insensitively.
"""

from typing import Optional

from django.contrib.auth import get_user_model
from django.db import transaction
from django.db.models import ProtectedError

from marketplace.services.base import BaseService, ErrorCodes, ServiceResult, service_err, service_ok


User = get_user_model()

UPDATABLE_FIELDS = ("name", "email", "role", "address", "phone")


class UserService(BaseService):
    """Account management for the storefront."""

    def _email_taken(self, email: str, exclude_id=None) -> bool:
        queryset = User.objects.filter(email__iexact=email)
        if exclude_id is not None:
            queryset = queryset.exclude(pk=exclude_id)
        return queryset.exists()

    @BaseService.log_performance
    def create_user(
        self,
        name: str,
        email: str,
        password: str,
        role: str = User.ROLE_CUSTOMER,
        address: Optional[str] = None,
        phone: Optional[str] = None,
    ) -> ServiceResult:
        """
        Create a user account with a hashed password.

        Returns:
            ServiceResult with the created user, or ``email_taken``
        """
        try:
            if self._email_taken(email):
                return service_err(ErrorCodes.EMAIL_TAKEN, "Email already exists")

            user = User.objects.create_user(
                email=email,
                password=password,
                name=name,
                role=role,
                address=address,
                phone=phone,
            )
            self.logger.info(f"User created: id={user.id}, role={user.role}")
            return service_ok(user)

        except Exception as e:
            self.logger.error(f"Error creating user {email}: {e}", exc_info=True)
            return service_err(ErrorCodes.INTERNAL_ERROR, "Failed to create user")

    @BaseService.log_performance
    def list_users(self) -> ServiceResult:
        try:
            return service_ok(list(User.objects.order_by("-created_at")))
        except Exception as e:
            self.logger.error(f"Error listing users: {e}", exc_info=True)
            return service_err(ErrorCodes.INTERNAL_ERROR, "Failed to fetch users")

    @BaseService.log_performance
    def get_user(self, user_id) -> ServiceResult:
        try:
            return service_ok(User.objects.get(pk=user_id))
        except User.DoesNotExist:
            return service_err(ErrorCodes.USER_NOT_FOUND, "User not found")

    @BaseService.log_performance
    def update_user(self, user_id, **fields) -> ServiceResult:
        """
        Partially update a user.

        Only keys in ``UPDATABLE_FIELDS`` plus ``password`` are applied. A new
        email must not belong to another account and a new password is re-hashed.
        """
        try:
            user = User.objects.get(pk=user_id)
        except User.DoesNotExist:
            return service_err(ErrorCodes.USER_NOT_FOUND, "User not found")

        try:
            email = fields.get("email")
            if email and self._email_taken(email, exclude_id=user.pk):
                return service_err(ErrorCodes.EMAIL_TAKEN, "Email already exists")

            for field in UPDATABLE_FIELDS:
                if field in fields and fields[field] is not None:
                    value = fields[field].lower() if field == "email" else fields[field]
                    setattr(user, field, value)

            if fields.get("password"):
                user.set_password(fields["password"])

            user.save()
            self.logger.info(f"User updated: id={user.id}")
            return service_ok(user)

        except Exception as e:
            self.logger.error(f"Error updating user {user_id}: {e}", exc_info=True)
            return service_err(ErrorCodes.INTERNAL_ERROR, "Failed to update user")

    @BaseService.log_performance
    def delete_user(self, user_id) -> ServiceResult[bool]:
        """
        Delete a user and their cart items.

        Returns:
            ServiceResult with True when deleted, False when the user did not exist.
            Users with orders cannot be deleted (``user_has_orders``).
        """
        from marketplace.cart.domain.models import CartItem

        user = User.objects.filter(pk=user_id).first()
        if user is None:
            return service_ok(False)

        try:
            with transaction.atomic():
                removed, _ = CartItem.objects.filter(user=user).delete()
                user.delete()
        except ProtectedError:
            return service_err(ErrorCodes.USER_HAS_ORDERS, "Cannot delete user with existing orders")

        self.logger.info(f"User deleted: id={user_id}, cart_items_removed={removed}")
        return service_ok(True)

    @BaseService.log_performance
    def login_user(self, email: str, password: str):
        """
        Check credentials.

        Returns:
            The user when the email exists and the password matches, otherwise None
        """
        user = User.objects.filter(email__iexact=email).first()
        if user is None or not user.is_active or not user.check_password(password):
            self.logger.info(f"Login failed for {email}")
            return None
        return user
