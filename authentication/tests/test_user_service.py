from django.test import TestCase

from authentication.domain.services import UserService
from marketplace.models import CartItem
from marketplace.services.base import ErrorCodes
from marketplace.tests.factories import CartItemFactory, OrderFactory, UserFactory


class UserServiceTest(TestCase):
    def setUp(self):
        self.service = UserService()

    def test_create_user_hashes_password(self):
        result = self.service.create_user(name="Dewi", email="Dewi@Example.com", password="secret123")

        self.assertTrue(result.ok)
        self.assertEqual(result.value.email, "dewi@example.com")
        self.assertNotEqual(result.value.password, "secret123")
        self.assertTrue(result.value.check_password("secret123"))
        self.assertEqual(result.value.role, "customer")

    def test_create_user_duplicate_email(self):
        UserFactory(email="dewi@example.com")

        result = self.service.create_user(name="Dewi", email="DEWI@example.com", password="secret123")

        self.assertFalse(result.ok)
        self.assertEqual(result.error, ErrorCodes.EMAIL_TAKEN)

    def test_login_user(self):
        self.service.create_user(name="Dewi", email="dewi@example.com", password="secret123")

        self.assertIsNotNone(self.service.login_user("dewi@example.com", "secret123"))
        self.assertIsNone(self.service.login_user("dewi@example.com", "wrong"))
        self.assertIsNone(self.service.login_user("nobody@example.com", "secret123"))

    def test_inactive_user_cannot_login(self):
        user = self.service.create_user(name="Dewi", email="dewi@example.com", password="secret123").value
        user.is_active = False
        user.save()

        self.assertIsNone(self.service.login_user("dewi@example.com", "secret123"))

    def test_update_ignores_unknown_fields(self):
        user = UserFactory(name="Old")

        result = self.service.update_user(user.id, name="New", is_superuser=True)

        self.assertTrue(result.ok)
        self.assertEqual(result.value.name, "New")
        self.assertFalse(result.value.is_superuser)

    def test_update_missing_user(self):
        result = self.service.update_user(99999, name="New")
        self.assertEqual(result.error, ErrorCodes.USER_NOT_FOUND)

    def test_delete_user_removes_cart(self):
        item = CartItemFactory()

        result = self.service.delete_user(item.user_id)

        self.assertTrue(result.ok)
        self.assertTrue(result.value)
        self.assertFalse(CartItem.objects.filter(pk=item.pk).exists())

    def test_delete_missing_user_returns_false(self):
        result = self.service.delete_user(99999)

        self.assertTrue(result.ok)
        self.assertFalse(result.value)

    def test_delete_user_with_orders_keeps_cart(self):
        item = CartItemFactory()
        OrderFactory(user=item.user)

        result = self.service.delete_user(item.user_id)

        self.assertEqual(result.error, ErrorCodes.USER_HAS_ORDERS)
        self.assertTrue(CartItem.objects.filter(pk=item.pk).exists())
