from decimal import Decimal
from unittest.mock import patch

from django.test import TestCase
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient

from infrastructure.container import container
from marketplace.models import CartItem, Order, OrderItem, Product
from marketplace.services.base import ErrorCodes
from marketplace.tests.factories import CartItemFactory, ProductFactory, UserFactory


class CheckoutServiceTest(TestCase):
    def setUp(self):
        container.reset()
        self.service = container.order_service()
        self.user = UserFactory()
        self.mug = ProductFactory(name="Mug", price=Decimal("29.99"), stock=10)
        self.lamp = ProductFactory(name="Lamp", price=Decimal("49.99"), stock=3)

    def test_checkout_creates_order_and_clears_cart(self):
        CartItemFactory(user=self.user, product=self.mug, quantity=2)
        CartItemFactory(user=self.user, product=self.lamp, quantity=1)

        result = self.service.checkout(self.user, "Jl. Sudirman 1, Jakarta", "standard", "credit_card")

        self.assertTrue(result.ok)
        order = result.value
        self.assertEqual(order.total_amount, Decimal("109.97"))
        self.assertEqual(order.shipping_cost, Decimal("0.00"))
        self.assertEqual(order.status, Order.STATUS_PENDING)
        self.assertEqual(order.payment_status, Order.PAYMENT_PENDING)
        self.assertEqual(order.items.count(), 2)

        self.mug.refresh_from_db()
        self.lamp.refresh_from_db()
        self.assertEqual(self.mug.stock, 8)
        self.assertEqual(self.lamp.stock, 2)
        self.assertFalse(CartItem.objects.filter(user=self.user).exists())

    def test_checkout_snapshots_price(self):
        CartItemFactory(user=self.user, product=self.mug, quantity=1)
        order = self.service.checkout(self.user, "Bandung", "express", "e_wallet").value

        Product.objects.filter(pk=self.mug.pk).update(price=Decimal("99.00"))

        item = OrderItem.objects.get(order=order)
        self.assertEqual(item.price, Decimal("29.99"))
        self.assertEqual(order.shipping_cost, Decimal("19.99"))
        self.assertEqual(order.total_amount, Decimal("49.98"))

    def test_checkout_standard_below_threshold_pays_shipping(self):
        CartItemFactory(user=self.user, product=self.mug, quantity=1)
        order = self.service.checkout(self.user, "Depok", "standard", "credit_card").value
        self.assertEqual(order.shipping_cost, Decimal("9.99"))
        self.assertEqual(order.total_amount, Decimal("39.98"))

    def test_checkout_empty_cart(self):
        result = self.service.checkout(self.user, "Bogor", "standard", "credit_card")
        self.assertFalse(result.ok)
        self.assertEqual(result.error, ErrorCodes.CART_EMPTY)
        self.assertEqual(result.error_detail, "Cart is empty")
        self.assertEqual(Order.objects.count(), 0)

    def test_checkout_insufficient_stock_changes_nothing(self):
        CartItemFactory(user=self.user, product=self.mug, quantity=2)
        CartItemFactory(user=self.user, product=self.lamp, quantity=3)
        Product.objects.filter(pk=self.lamp.pk).update(stock=1)

        result = self.service.checkout(self.user, "Bogor", "standard", "credit_card")

        self.assertFalse(result.ok)
        self.assertEqual(result.error, ErrorCodes.INSUFFICIENT_STOCK)
        self.assertEqual(result.error_detail, "Insufficient stock for Lamp. Available: 1, Requested: 3")
        self.assertEqual(Order.objects.count(), 0)
        self.assertEqual(CartItem.objects.filter(user=self.user).count(), 2)
        self.mug.refresh_from_db()
        self.assertEqual(self.mug.stock, 10)

    def test_checkout_rolls_back_on_write_failure(self):
        CartItemFactory(user=self.user, product=self.mug, quantity=2)

        with patch.object(self.service.inventory_service, "decrement_stock", side_effect=RuntimeError("db down")):
            result = self.service.checkout(self.user, "Bogor", "standard", "credit_card")

        self.assertFalse(result.ok)
        self.assertEqual(result.error, ErrorCodes.INTERNAL_ERROR)
        self.assertEqual(Order.objects.count(), 0)
        self.assertEqual(OrderItem.objects.count(), 0)
        self.assertEqual(CartItem.objects.filter(user=self.user).count(), 1)


class CheckoutViewTest(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.user = UserFactory()
        self.mug = ProductFactory(price=Decimal("29.99"), stock=10)
        self.lamp = ProductFactory(price=Decimal("49.99"), stock=5)
        self.url = reverse("marketplace:order-list")

    def test_checkout_endpoint(self):
        CartItemFactory(user=self.user, product=self.mug, quantity=2)
        CartItemFactory(user=self.user, product=self.lamp, quantity=1)
        self.client.force_authenticate(user=self.user)

        response = self.client.post(
            self.url,
            {"shipping_address": "Jl. Thamrin 10", "shipping_method": "standard", "payment_method": "credit_card"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data["total_amount"], "109.97")
        self.assertEqual(response.data["shipping_cost"], "0.00")
        self.assertEqual(len(response.data["items"]), 2)
        self.assertEqual(response.data["customer"]["id"], self.user.id)

    def test_checkout_empty_cart_endpoint(self):
        self.client.force_authenticate(user=self.user)
        response = self.client.post(
            self.url, {"shipping_address": "Jl. Thamrin 10", "payment_method": "credit_card"}, format="json"
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["detail"], "Cart is empty")

    def test_checkout_requires_address(self):
        CartItemFactory(user=self.user, product=self.mug, quantity=1)
        self.client.force_authenticate(user=self.user)
        response = self.client.post(self.url, {"payment_method": "credit_card"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("shipping_address", response.data)
