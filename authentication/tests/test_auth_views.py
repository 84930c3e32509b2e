from django.contrib.auth import get_user_model
from django.test import TestCase
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import AccessToken

from infrastructure.container import container
from marketplace.tests.factories import AdminFactory, OrderFactory, UserFactory

User = get_user_model()


class AuthViewIntegrationTest(TestCase):
    def setUp(self):
        container.reset()
        self.client = APIClient()
        self.user = User.objects.create_user(email="siti@example.com", password="secret123", name="Siti")

    def test_register_creates_customer(self):
        response = self.client.post(
            reverse("register"),
            {"name": "Andi", "email": "Andi@Example.com", "password": "secret123", "role": "admin"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data["message"], "Registration successful")
        self.assertEqual(response.data["user"]["email"], "andi@example.com")
        self.assertEqual(response.data["user"]["role"], "customer")
        self.assertNotIn("password", response.data["user"])
        self.assertTrue(User.objects.get(email="andi@example.com").check_password("secret123"))

    def test_register_duplicate_email(self):
        response = self.client.post(
            reverse("register"),
            {"name": "Siti", "email": "SITI@example.com", "password": "secret123"},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)

    def test_register_short_password(self):
        response = self.client.post(
            reverse("register"), {"name": "Andi", "email": "andi@example.com", "password": "123"}, format="json"
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("password", response.data)

    def test_login_returns_tokens_with_role_claims(self):
        response = self.client.post(
            reverse("login"), {"email": "siti@example.com", "password": "secret123"}, format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["message"], "Login successful")
        self.assertEqual(response.data["user"]["id"], self.user.id)

        access = AccessToken(response.data["access"])
        self.assertEqual(access["role"], "customer")
        self.assertFalse(access["is_admin"])
        self.assertEqual(access["name"], "Siti")

    def test_login_email_is_case_insensitive(self):
        response = self.client.post(
            reverse("login"), {"email": "Siti@Example.com", "password": "secret123"}, format="json"
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)

    def test_login_wrong_password(self):
        response = self.client.post(reverse("login"), {"email": "siti@example.com", "password": "nope"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertEqual(response.data["detail"], "Invalid email or password")

    def test_login_unknown_email(self):
        response = self.client.post(
            reverse("login"), {"email": "ghost@example.com", "password": "secret123"}, format="json"
        )
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_access_token_authenticates_requests(self):
        login = self.client.post(reverse("login"), {"email": "siti@example.com", "password": "secret123"}, format="json")

        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {login.data['access']}")
        response = self.client.get(reverse("me"))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["email"], "siti@example.com")

    def test_me_requires_authentication(self):
        response = self.client.get(reverse("me"))
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_refresh_token(self):
        login = self.client.post(reverse("login"), {"email": "siti@example.com", "password": "secret123"}, format="json")

        response = self.client.post(reverse("token_refresh"), {"refresh": login.data["refresh"]}, format="json")

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertIn("access", response.data)


class UserViewIntegrationTest(TestCase):
    def setUp(self):
        container.reset()
        self.client = APIClient()
        self.admin = AdminFactory()
        self.customer = UserFactory(email="budi@example.com")
        self.client.force_authenticate(user=self.admin)

    def test_customer_cannot_manage_users(self):
        self.client.force_authenticate(user=self.customer)
        response = self.client.get(reverse("user-list"))
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_list_users(self):
        response = self.client.get(reverse("user-list"))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual({u["id"] for u in response.data}, {self.admin.id, self.customer.id})

    def test_retrieve_user(self):
        response = self.client.get(reverse("user-detail", args=[self.customer.id]))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["email"], "budi@example.com")

    def test_retrieve_missing_user(self):
        response = self.client.get(reverse("user-detail", args=[99999]))
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_admin_creates_admin(self):
        response = self.client.post(
            reverse("user-list"),
            {"name": "Rina", "email": "rina@example.com", "password": "secret123", "role": "admin"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data["role"], "admin")

    def test_update_user(self):
        response = self.client.patch(
            reverse("user-detail", args=[self.customer.id]),
            {"name": "Budi S.", "password": "newsecret"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["name"], "Budi S.")
        self.customer.refresh_from_db()
        self.assertTrue(self.customer.check_password("newsecret"))

    def test_update_email_taken(self):
        response = self.client.patch(
            reverse("user-detail", args=[self.customer.id]), {"email": self.admin.email}, format="json"
        )
        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)

    def test_delete_user(self):
        response = self.client.delete(reverse("user-detail", args=[self.customer.id]))

        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(User.objects.filter(pk=self.customer.id).exists())

    def test_non_numeric_user_id_is_not_routed(self):
        response = self.client.get("/api/auth/users/abc/")
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_delete_missing_user(self):
        response = self.client.delete(reverse("user-detail", args=[99999]))
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_delete_user_with_orders(self):
        OrderFactory(user=self.customer)

        response = self.client.delete(reverse("user-detail", args=[self.customer.id]))

        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.assertTrue(User.objects.filter(pk=self.customer.id).exists())
