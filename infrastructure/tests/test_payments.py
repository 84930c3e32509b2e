"""
Payment Infrastructure Tests
==============================

Unit tests for the payment provider abstraction layer.
"""

from decimal import Decimal
from unittest.mock import patch

from django.test import TestCase, override_settings

from infrastructure.payments import (
    PaymentCharge,
    PaymentFactory,
    PaymentProviderInterface,
    PaymentStatus,
    SimulatedGatewayProvider,
)


class PaymentInterfaceTest(TestCase):
    """Test PaymentProviderInterface contract."""

    def test_interface_is_abstract(self):
        """PaymentProviderInterface should not be instantiable."""
        with self.assertRaises(TypeError):
            PaymentProviderInterface()


class SimulatedGatewayProviderTest(TestCase):
    """Test SimulatedGatewayProvider implementation."""

    def setUp(self):
        self.provider = SimulatedGatewayProvider(base_url="https://payment-gateway.com/pay/")

    def test_transaction_id_format(self):
        transaction_id = SimulatedGatewayProvider.generate_transaction_id()
        self.assertRegex(transaction_id, r"^TXN\d{13}[A-Z0-9]{5}$")

    @patch("infrastructure.payments.simulated_provider.time.time", return_value=1700000000.123)
    def test_transaction_id_uses_epoch_millis(self, _mock_time):
        transaction_id = SimulatedGatewayProvider.generate_transaction_id()
        self.assertTrue(transaction_id.startswith("TXN1700000000123"))

    def test_charge_card_succeeds_immediately(self):
        charge = self.provider.charge(
            amount=Decimal("109.97"), payment_method="credit_card", reference="42", metadata={"order_id": 42}
        )

        self.assertIsInstance(charge, PaymentCharge)
        self.assertEqual(charge.status, PaymentStatus.SUCCEEDED)
        self.assertEqual(charge.amount, Decimal("109.97"))
        self.assertEqual(charge.payment_method, "credit_card")
        self.assertEqual(charge.metadata, {"order_id": 42})
        self.assertEqual(charge.payment_url, f"https://payment-gateway.com/pay/{charge.transaction_id}")

    def test_bank_transfer_stays_pending(self):
        charge = self.provider.charge(amount=Decimal("10.00"), payment_method="bank_transfer", reference="7")

        self.assertEqual(charge.status, PaymentStatus.PENDING)
        self.assertEqual(charge.metadata, {})

    def test_transaction_ids_differ(self):
        first = self.provider.charge(Decimal("1.00"), "credit_card", "1")
        second = self.provider.charge(Decimal("1.00"), "credit_card", "1")
        self.assertNotEqual(first.transaction_id, second.transaction_id)

    @override_settings(PAYMENT_GATEWAY_URL="https://pay.example.com/checkout")
    def test_base_url_from_settings(self):
        provider = SimulatedGatewayProvider()
        self.assertEqual(provider.get_payment_url("TXN1"), "https://pay.example.com/checkout/TXN1")


class PaymentFactoryTest(TestCase):
    """Test PaymentFactory."""

    @override_settings(PAYMENT_PROVIDER="simulated")
    def test_create_from_settings(self):
        self.assertIsInstance(PaymentFactory.create(), SimulatedGatewayProvider)

    def test_create_explicit_backend(self):
        self.assertIsInstance(PaymentFactory.create("simulated"), SimulatedGatewayProvider)

    def test_create_invalid_backend(self):
        with self.assertRaises(ValueError) as context:
            PaymentFactory.create("paypal")

        self.assertIn("Invalid payment provider", str(context.exception))
