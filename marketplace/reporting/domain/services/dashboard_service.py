"""
DashboardService - Admin overview figures.
"""

from decimal import Decimal
from typing import Any, Dict

from django.contrib.auth import get_user_model
from django.db.models import DecimalField, ExpressionWrapper, F, Sum

from marketplace.cart.domain.services.inventory_service import InventoryService
from marketplace.catalog.domain.models.catalog import Product
from marketplace.ordering.domain.models.order import Order, OrderItem
from marketplace.services.base import BaseService, ErrorCodes, ServiceResult, service_err, service_ok

RECENT_ORDERS_LIMIT = 10
TOP_PRODUCTS_LIMIT = 5


class DashboardService(BaseService):
    def __init__(self, inventory_service: InventoryService):
        super().__init__()
        self.inventory_service = inventory_service

    def _top_selling_products(self):
        line_revenue = ExpressionWrapper(
            F("price") * F("quantity"), output_field=DecimalField(max_digits=12, decimal_places=2)
        )
        rows = (
            OrderItem.objects.values("product_id", "product__name", "product__code")
            .annotate(quantity_sold=Sum("quantity"), revenue=Sum(line_revenue))
            .order_by("-quantity_sold", "product_id")[:TOP_PRODUCTS_LIMIT]
        )
        return [
            {
                "product_id": row["product_id"],
                "name": row["product__name"],
                "code": row["product__code"],
                "quantity_sold": row["quantity_sold"],
                "revenue": row["revenue"] or Decimal("0.00"),
            }
            for row in rows
        ]

    @BaseService.log_performance
    def get_dashboard_stats(self) -> ServiceResult[Dict[str, Any]]:
        """
        Store-wide counters for the admin dashboard.

        Returns:
            ServiceResult with user/product/order counts, ``total_revenue``,
            ``pending_orders``, ``low_stock_products``, ``recent_orders`` and
            ``top_selling_products`` (revenue is price x quantity per order line)
        """
        try:
            low_stock = self.inventory_service.get_low_stock_products()
            if not low_stock.ok:
                return low_stock

            revenue = Order.objects.aggregate(total=Sum("total_amount"))["total"] or Decimal("0.00")

            stats = {
                "total_users": get_user_model().objects.count(),
                "total_products": Product.objects.count(),
                "total_orders": Order.objects.count(),
                "total_revenue": revenue,
                "pending_orders": Order.objects.filter(status=Order.STATUS_PENDING).count(),
                "low_stock_products": low_stock.value,
                "recent_orders": list(
                    Order.objects.select_related("user").order_by("-created_at", "-id")[:RECENT_ORDERS_LIMIT]
                ),
                "top_selling_products": self._top_selling_products(),
            }

            self.logger.info(
                f"Dashboard stats: {stats['total_orders']} orders, revenue={revenue}, "
                f"{len(stats['low_stock_products'])} low-stock products"
            )
            return service_ok(stats)

        except Exception as e:
            self.logger.error(f"Error building dashboard stats: {e}", exc_info=True)
            return service_err(ErrorCodes.INTERNAL_ERROR, "Failed to fetch dashboard stats")
