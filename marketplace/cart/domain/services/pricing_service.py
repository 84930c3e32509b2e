"""
PricingService - Price Calculations

Cart subtotals, checkout shipping cost and order totals. All calculations use
Decimal quantized to cents with ROUND_HALF_UP.
"""

from decimal import ROUND_HALF_UP, Decimal
from typing import Dict, Iterable

from django.conf import settings

from marketplace.services.base import BaseService, ErrorCodes, ServiceResult, service_err, service_ok


CENTS = Decimal("0.01")

DEFAULT_METHOD_RATES = {
    "standard": Decimal("9.99"),
    "express": Decimal("19.99"),
    "overnight": Decimal("39.99"),
    "default": Decimal("9.99"),
}


def to_money(value) -> Decimal:
    return Decimal(str(value)).quantize(CENTS, rounding=ROUND_HALF_UP)


class PricingService(BaseService):
    """
    Stateless price calculations.

    ``items`` arguments are iterables of objects or dicts exposing ``product``
    (with a ``price``) and ``quantity``; both ``CartItem`` rows and plain dicts work.
    """

    def __init__(self):
        super().__init__()
        self.method_rates = getattr(settings, "SHIPPING_METHOD_RATES", DEFAULT_METHOD_RATES)
        self.free_shipping_threshold = Decimal(str(getattr(settings, "FREE_SHIPPING_THRESHOLD", "100.00")))

    @staticmethod
    def _line(item):
        if isinstance(item, dict):
            return item["product"], item["quantity"]
        return item.product, item.quantity

    def line_subtotal(self, price, quantity: int) -> Decimal:
        return to_money(Decimal(str(price)) * quantity)

    @BaseService.log_performance
    def calculate_cart_total(self, items: Iterable) -> ServiceResult[Dict]:
        """
        Sum ``price x quantity`` over the items.

        Returns:
            ServiceResult with ``subtotal``, ``items_count`` (lines) and
            ``total_quantity`` (units)
        """
        try:
            subtotal = Decimal("0")
            items_count = 0
            total_quantity = 0
            for item in items:
                product, quantity = self._line(item)
                subtotal += Decimal(str(product.price)) * quantity
                items_count += 1
                total_quantity += quantity

            return service_ok(
                {"subtotal": to_money(subtotal), "items_count": items_count, "total_quantity": total_quantity}
            )

        except Exception as e:
            self.logger.error(f"Error calculating cart total: {e}", exc_info=True)
            return service_err(ErrorCodes.INTERNAL_ERROR, str(e))

    def calculate_shipping_cost(self, shipping_method: str, subtotal: Decimal) -> ServiceResult[Decimal]:
        """
        Flat shipping rate for a checkout method.

        ``standard`` is free when the subtotal is strictly above the free-shipping
        threshold. Unknown methods are charged the ``default`` rate.

        Example:
            >>> pricing_service.calculate_shipping_cost("express", Decimal("20.00")).value
            Decimal('19.99')
        """
        method = (shipping_method or "").strip().lower()

        if method == "standard" and subtotal > self.free_shipping_threshold:
            cost = Decimal("0")
        else:
            cost = self.method_rates.get(method, self.method_rates["default"])

        self.logger.debug(f"Shipping cost for method={method}, subtotal={subtotal}: {cost}")
        return service_ok(to_money(cost))

    @BaseService.log_performance
    def calculate_order_total(self, items: Iterable, shipping_method: str) -> ServiceResult[Dict]:
        """
        Returns:
            ServiceResult with ``subtotal``, ``shipping`` and ``total``

        Example:
            >>> result = pricing_service.calculate_order_total(cart_items, "standard")
            >>> result.value["total"]
            Decimal('109.97')
        """
        cart_total = self.calculate_cart_total(items)
        if not cart_total.ok:
            return cart_total

        subtotal = cart_total.value["subtotal"]
        shipping = self.calculate_shipping_cost(shipping_method, subtotal).value

        return service_ok({"subtotal": subtotal, "shipping": shipping, "total": to_money(subtotal + shipping)})
