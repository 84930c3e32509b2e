"""
Dependency Injection Container
================================

Service locator giving views a single place to obtain domain services and
infrastructure adapters. Instances are created lazily and cached.

Usage:
    from infrastructure.container import container

    cart_service = container.cart_service()
    payment = container.payment()
"""

import logging
from typing import Optional

from .payments import PaymentFactory, PaymentProviderInterface
from .storage import StorageFactory, StorageInterface

logger = logging.getLogger(__name__)


class ServiceContainer:
    """
    Service container for infrastructure dependencies and domain services.

    Singleton: every ``ServiceContainer()`` call returns the same instance.
    """

    _instance: Optional["ServiceContainer"] = None
    _initialized: bool = False

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self):
        if not self._initialized:
            self._clear()
            self._initialized = True
            logger.info("Service container initialized")

    def _clear(self):
        self._storage: Optional[StorageInterface] = None
        self._payment: Optional[PaymentProviderInterface] = None

        # Domain Services
        self._user_service = None
        self._category_service = None
        self._product_service = None
        self._inventory_service = None
        self._pricing_service = None
        self._cart_service = None
        self._order_service = None
        self._payment_service = None
        self._shipment_service = None
        self._shipping_rate_service = None
        self._dashboard_service = None
        self._export_service = None

    def storage(self) -> StorageInterface:
        """Get the file storage adapter (cached)."""
        if self._storage is None:
            self._storage = StorageFactory.create()
            logger.debug(f"Created storage service: {type(self._storage).__name__}")
        return self._storage

    def payment(self, backend: Optional[str] = None) -> PaymentProviderInterface:
        """
        Get payment provider instance.

        Args:
            backend: Payment backend type. If None, uses settings.PAYMENT_PROVIDER
        """
        if self._payment is None or backend is not None:
            self._payment = PaymentFactory.create(backend)
            logger.debug(f"Created payment service: {type(self._payment).__name__}")
        return self._payment

    def user_service(self):
        if self._user_service is None:
            from authentication.domain.services import UserService

            self._user_service = UserService()
        return self._user_service

    def category_service(self):
        if self._category_service is None:
            from marketplace.catalog.domain.services import CategoryService

            self._category_service = CategoryService()
        return self._category_service

    def product_service(self):
        if self._product_service is None:
            from marketplace.catalog.domain.services import ProductService

            self._product_service = ProductService()
        return self._product_service

    def inventory_service(self):
        """Get InventoryService instance."""
        if self._inventory_service is None:
            from marketplace.cart.domain.services import InventoryService

            self._inventory_service = InventoryService()
            logger.debug("Created InventoryService")
        return self._inventory_service

    def pricing_service(self):
        """Get PricingService instance."""
        if self._pricing_service is None:
            from marketplace.cart.domain.services import PricingService

            self._pricing_service = PricingService()
            logger.debug("Created PricingService")
        return self._pricing_service

    def cart_service(self):
        """Get CartService instance."""
        if self._cart_service is None:
            from marketplace.cart.domain.services import CartService

            self._cart_service = CartService(
                inventory_service=self.inventory_service(), pricing_service=self.pricing_service()
            )
            logger.debug("Created CartService")
        return self._cart_service

    def order_service(self):
        """Get OrderService instance (checkout and order management)."""
        if self._order_service is None:
            from marketplace.ordering.domain.services import OrderService

            self._order_service = OrderService(
                inventory_service=self.inventory_service(),
                pricing_service=self.pricing_service(),
            )
            logger.debug("Created OrderService")
        return self._order_service

    def payment_service(self):
        if self._payment_service is None:
            from marketplace.ordering.domain.services import PaymentService

            self._payment_service = PaymentService(payment_provider=self.payment())
            logger.debug("Created PaymentService")
        return self._payment_service

    def shipment_service(self):
        if self._shipment_service is None:
            from marketplace.shipping.domain.services import ShipmentService

            self._shipment_service = ShipmentService()
        return self._shipment_service

    def shipping_rate_service(self):
        if self._shipping_rate_service is None:
            from marketplace.shipping.domain.services import ShippingRateService

            self._shipping_rate_service = ShippingRateService()
        return self._shipping_rate_service

    def dashboard_service(self):
        if self._dashboard_service is None:
            from marketplace.reporting.domain.services import DashboardService

            self._dashboard_service = DashboardService(inventory_service=self.inventory_service())
        return self._dashboard_service

    def export_service(self):
        if self._export_service is None:
            from marketplace.reporting.domain.services import ExportService

            self._export_service = ExportService(storage=self.storage())
            logger.debug("Created ExportService")
        return self._export_service

    def reset(self):
        """
        Reset all cached service instances.

        Useful for testing or when switching between environments.
        """
        self._clear()
        logger.info("Service container reset")


# Global singleton instance
container = ServiceContainer()


def get_storage() -> StorageInterface:
    """Get storage service from global container."""
    return container.storage()


def get_payment() -> PaymentProviderInterface:
    """Get payment provider from global container."""
    return container.payment()
