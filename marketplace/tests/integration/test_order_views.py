from datetime import timedelta
from decimal import Decimal

from django.test import TestCase
from django.urls import reverse
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APIClient

from marketplace.models import Order
from marketplace.tests.factories import AdminFactory, OrderFactory, OrderItemFactory, UserFactory


class OrderViewIntegrationTest(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.customer = UserFactory()
        self.other = UserFactory()
        self.admin = AdminFactory()

        self.order1 = OrderFactory(user=self.customer)
        OrderItemFactory(order=self.order1, quantity=2)
        self.order2 = OrderFactory(user=self.customer, status=Order.STATUS_PAID)
        self.other_order = OrderFactory(user=self.other)

        self.list_url = reverse("marketplace:order-list")

    def detail_url(self, order_id):
        return reverse("marketplace:order-detail", kwargs={"pk": order_id})

    def test_customer_sees_only_own_orders(self):
        self.client.force_authenticate(user=self.customer)
        response = self.client.get(self.list_url)

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["total"], 2)
        ids = {order["id"] for order in response.data["orders"]}
        self.assertEqual(ids, {self.order1.id, self.order2.id})

    def test_customer_cannot_filter_by_other_user(self):
        self.client.force_authenticate(user=self.customer)
        response = self.client.get(self.list_url, {"user_id": self.other.id})
        self.assertEqual(response.data["total"], 2)

    def test_admin_sees_all_and_filters_by_user(self):
        self.client.force_authenticate(user=self.admin)
        response = self.client.get(self.list_url)
        self.assertEqual(response.data["total"], 3)

        response = self.client.get(self.list_url, {"user_id": self.other.id})
        self.assertEqual(response.data["total"], 1)
        self.assertEqual(response.data["orders"][0]["id"], self.other_order.id)

    def test_filter_by_status(self):
        self.client.force_authenticate(user=self.customer)
        response = self.client.get(self.list_url, {"status": "paid"})
        self.assertEqual(response.data["total"], 1)
        self.assertEqual(response.data["orders"][0]["id"], self.order2.id)

    def test_filter_by_date_range(self):
        Order.objects.filter(pk=self.order1.pk).update(created_at=timezone.now() - timedelta(days=10))
        self.client.force_authenticate(user=self.customer)

        today = timezone.now().date()
        response = self.client.get(self.list_url, {"start_date": (today - timedelta(days=1)).isoformat()})
        self.assertEqual(response.data["total"], 1)
        self.assertEqual(response.data["orders"][0]["id"], self.order2.id)

    def test_invalid_date_rejected(self):
        self.client.force_authenticate(user=self.customer)
        response = self.client.get(self.list_url, {"start_date": "yesterday"})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_pagination(self):
        for _ in range(3):
            OrderFactory(user=self.customer)
        self.client.force_authenticate(user=self.customer)

        response = self.client.get(self.list_url, {"page": 2, "limit": 2})
        self.assertEqual(response.data["total"], 5)
        self.assertEqual(response.data["page"], 2)
        self.assertEqual(response.data["limit"], 2)
        self.assertEqual(response.data["num_pages"], 3)
        self.assertEqual(len(response.data["orders"]), 2)

    def test_limit_capped(self):
        self.client.force_authenticate(user=self.customer)
        response = self.client.get(self.list_url, {"limit": 500})
        self.assertEqual(response.data["limit"], 100)

    def test_retrieve_own_order(self):
        self.client.force_authenticate(user=self.customer)
        response = self.client.get(self.detail_url(self.order1.id))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data["items"]), 1)
        self.assertEqual(response.data["items"][0]["quantity"], 2)

    def test_retrieve_other_users_order_not_found(self):
        self.client.force_authenticate(user=self.customer)
        response = self.client.get(self.detail_url(self.other_order.id))
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data["detail"], "Order not found")

    def test_non_numeric_order_id_is_not_routed(self):
        self.client.force_authenticate(user=self.customer)
        response = self.client.get("/api/marketplace/orders/abc/")
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_customer_cannot_update_order(self):
        self.client.force_authenticate(user=self.customer)
        response = self.client.patch(self.detail_url(self.order1.id), {"status": "cancelled"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_admin_updates_order(self):
        self.client.force_authenticate(user=self.admin)
        response = self.client.patch(
            self.detail_url(self.order1.id), {"status": "cancelled", "payment_status": "failed"}, format="json"
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.order1.refresh_from_db()
        self.assertEqual(self.order1.status, Order.STATUS_CANCELLED)
        self.assertEqual(self.order1.payment_status, Order.PAYMENT_FAILED)

    def test_admin_update_invalid_status(self):
        self.client.force_authenticate(user=self.admin)
        response = self.client.patch(self.detail_url(self.order1.id), {"status": "lost"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_admin_update_missing_order(self):
        self.client.force_authenticate(user=self.admin)
        response = self.client.patch(self.detail_url(999999), {"status": "paid"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)


class PaymentIntegrationTest(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.customer = UserFactory()
        self.order = OrderFactory(user=self.customer, total_amount=Decimal("109.97"))

    def pay_url(self, order_id):
        return reverse("marketplace:order-pay", kwargs={"pk": order_id})

    def test_card_payment_marks_order_paid(self):
        self.client.force_authenticate(user=self.customer)
        response = self.client.post(
            self.pay_url(self.order.id), {"payment_method": "credit_card", "amount": "109.97"}, format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertTrue(response.data["success"])
        self.assertRegex(response.data["transaction_id"], r"^TXN\d{13}[A-Z0-9]{5}$")
        self.assertEqual(
            response.data["payment_url"], f"https://payment-gateway.com/pay/{response.data['transaction_id']}"
        )
        self.order.refresh_from_db()
        self.assertEqual(self.order.status, Order.STATUS_PAID)
        self.assertEqual(self.order.payment_status, Order.PAYMENT_PAID)
        self.assertEqual(self.order.transaction_id, response.data["transaction_id"])

    def test_bank_transfer_stays_pending(self):
        self.client.force_authenticate(user=self.customer)
        response = self.client.post(
            self.pay_url(self.order.id), {"payment_method": "bank_transfer", "amount": "109.97"}, format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["status"], "pending")
        self.assertEqual(response.data["payment_status"], "pending")
        self.order.refresh_from_db()
        self.assertEqual(self.order.payment_method, "bank_transfer")

    def test_one_cent_difference_rejected(self):
        self.client.force_authenticate(user=self.customer)
        response = self.client.post(
            self.pay_url(self.order.id), {"payment_method": "e_wallet", "amount": "109.98"}, format="json"
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

        response = self.client.post(
            self.pay_url(self.order.id), {"payment_method": "e_wallet", "amount": "109.97"}, format="json"
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)

    def test_amount_mismatch(self):
        self.client.force_authenticate(user=self.customer)
        response = self.client.post(
            self.pay_url(self.order.id), {"payment_method": "credit_card", "amount": "10.00"}, format="json"
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["detail"], "Payment amount does not match order total")

    def test_invalid_method(self):
        self.client.force_authenticate(user=self.customer)
        response = self.client.post(
            self.pay_url(self.order.id), {"payment_method": "cash", "amount": "109.97"}, format="json"
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["detail"], "Invalid payment method")

    def test_already_paid(self):
        Order.objects.filter(pk=self.order.pk).update(payment_status=Order.PAYMENT_PAID)
        self.client.force_authenticate(user=self.customer)
        response = self.client.post(
            self.pay_url(self.order.id), {"payment_method": "credit_card", "amount": "109.97"}, format="json"
        )
        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(response.data["detail"], "Order has already been paid")

    def test_missing_order(self):
        self.client.force_authenticate(user=self.customer)
        response = self.client.post(
            self.pay_url(999999), {"payment_method": "credit_card", "amount": "1.00"}, format="json"
        )
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_cannot_pay_other_users_order(self):
        self.client.force_authenticate(user=UserFactory())
        response = self.client.post(
            self.pay_url(self.order.id), {"payment_method": "credit_card", "amount": "109.97"}, format="json"
        )
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
