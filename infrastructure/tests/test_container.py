"""
Service Container Tests
========================

Unit tests for the dependency injection container.
"""

from django.test import TestCase, override_settings

from infrastructure.container import ServiceContainer, container, get_payment, get_storage
from infrastructure.payments import PaymentProviderInterface, SimulatedGatewayProvider
from infrastructure.storage import LocalStorageAdapter, StorageInterface


class ServiceContainerTest(TestCase):
    """Test ServiceContainer implementation."""

    def setUp(self):
        container.reset()

    def tearDown(self):
        container.reset()

    def test_container_is_singleton(self):
        self.assertIs(ServiceContainer(), ServiceContainer())
        self.assertIs(ServiceContainer(), container)

    @override_settings(STORAGE_BACKEND="local")
    def test_get_storage_service(self):
        storage = container.storage()

        self.assertIsInstance(storage, StorageInterface)
        self.assertIsInstance(storage, LocalStorageAdapter)
        self.assertIs(storage, container.storage())

    @override_settings(PAYMENT_PROVIDER="simulated")
    def test_get_payment_service(self):
        payment = container.payment()

        self.assertIsInstance(payment, PaymentProviderInterface)
        self.assertIsInstance(payment, SimulatedGatewayProvider)
        self.assertIs(payment, container.payment())

    def test_explicit_payment_backend_replaces_cached_provider(self):
        first = container.payment()
        second = container.payment("simulated")
        self.assertIsNot(first, second)

    def test_domain_services_are_cached(self):
        self.assertIs(container.cart_service(), container.cart_service())
        self.assertIs(container.order_service(), container.order_service())
        self.assertIs(container.export_service(), container.export_service())

    def test_services_share_collaborators(self):
        inventory = container.inventory_service()

        self.assertIs(container.cart_service().inventory_service, inventory)
        self.assertIs(container.order_service().inventory_service, inventory)
        self.assertIs(container.dashboard_service().inventory_service, inventory)
        self.assertIs(container.payment_service().payment_provider, container.payment())
        self.assertIs(container.export_service().storage, container.storage())

    def test_reset_clears_cached_instances(self):
        storage = container.storage()
        cart = container.cart_service()

        container.reset()

        self.assertIsNot(storage, container.storage())
        self.assertIsNot(cart, container.cart_service())

    def test_helper_functions(self):
        self.assertIs(get_storage(), container.storage())
        self.assertIs(get_payment(), container.payment())
