"""
InventoryService - Stock Management

Availability checks and stock decrements for cart and checkout.
"""

from typing import Iterable, List, Optional

from django.conf import settings
from django.db.models import F

from marketplace.catalog.domain.models.catalog import Product
from marketplace.infra.observability.metrics import stock_low_alert
from marketplace.services.base import BaseService, ErrorCodes, ServiceResult, service_err, service_ok


class InventoryService(BaseService):
    """Service for reading and adjusting product stock."""

    def __init__(self):
        super().__init__()
        self.low_stock_threshold = getattr(settings, "LOW_STOCK_THRESHOLD", 10)

    def find_shortage(self, items: Iterable) -> ServiceResult:
        """
        Validate cart lines against current stock.

        Returns:
            ServiceResult with None when every line fits, otherwise
            ``insufficient_stock`` naming the first product that falls short
        """
        for item in items:
            if item.quantity > item.product.stock:
                return service_err(
                    ErrorCodes.INSUFFICIENT_STOCK,
                    f"Insufficient stock for {item.product.name}. "
                    f"Available: {item.product.stock}, Requested: {item.quantity}",
                )
        return service_ok(None)

    def decrement_stock(self, product_id, quantity: int) -> None:
        """Subtract ``quantity`` from the product's stock. Callers run inside a transaction."""
        Product.objects.filter(pk=product_id).update(stock=F("stock") - quantity)
        self.logger.info(f"Stock decremented: product={product_id}, quantity={quantity}")

    @BaseService.log_performance
    def get_low_stock_products(self, threshold: Optional[int] = None) -> ServiceResult[List[Product]]:
        """Products whose stock is at or below the threshold, lowest stock first."""
        threshold = self.low_stock_threshold if threshold is None else threshold
        products = list(Product.objects.select_related("category").filter(stock__lte=threshold).order_by("stock", "id"))
        stock_low_alert.set(len(products))
        return service_ok(products)
