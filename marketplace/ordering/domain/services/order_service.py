"""
OrderService - Checkout and Order Management

Turns a customer's cart into an order and lets admins manage order state.

Checkout is one linear sequence:
1. read the cart lines with product price and stock
2. reject an empty cart or any line exceeding stock
3. price the lines and add the shipping cost for the chosen method
4. write the order and its items, decrement stock and clear the cart
Step 4 runs in a single database transaction.
"""

from datetime import date
from typing import Any, Dict, Optional

from django.core.paginator import Paginator
from django.db import transaction

from marketplace.cart.domain.models.cart import CartItem
from marketplace.cart.domain.services.inventory_service import InventoryService
from marketplace.cart.domain.services.pricing_service import PricingService
from marketplace.infra.observability.metrics import (
    checkout_duration,
    checkout_failures_total,
    order_value,
    orders_placed_total,
)
from marketplace.ordering.domain.models.order import Order, OrderItem
from marketplace.services.base import BaseService, ErrorCodes, ServiceResult, service_err, service_ok


DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100


class OrderService(BaseService):
    """
    Service for checkout and order lifecycle.
    """

    def __init__(self, inventory_service: InventoryService, pricing_service: PricingService):
        super().__init__()
        self.inventory_service = inventory_service
        self.pricing_service = pricing_service

    @BaseService.log_performance
    def checkout(
        self, user, shipping_address: str, shipping_method: str, payment_method: str
    ) -> ServiceResult[Order]:
        """
        Create an order from the user's cart.

        Args:
            user: Customer checking out
            shipping_address: Free-form delivery address
            shipping_method: standard, express, overnight (others use the default rate)
            payment_method: Method the customer intends to pay with

        Returns:
            ServiceResult with the created Order, ``cart_empty`` or ``insufficient_stock``

        Example:
            >>> result = order_service.checkout(user, "Jl. Sudirman 1", "standard", "credit_card")
            >>> if result.ok:
            ...     print(result.value.total_amount)
        """
        with checkout_duration.time():
            cart_items = list(CartItem.objects.filter(user=user).select_related("product").order_by("created_at"))

            if not cart_items:
                checkout_failures_total.labels(reason=ErrorCodes.CART_EMPTY).inc()
                return service_err(ErrorCodes.CART_EMPTY, "Cart is empty")

            shortage = self.inventory_service.find_shortage(cart_items)
            if not shortage.ok:
                checkout_failures_total.labels(reason=shortage.error).inc()
                return shortage

            totals_result = self.pricing_service.calculate_order_total(cart_items, shipping_method)
            if not totals_result.ok:
                return totals_result
            totals = totals_result.value

            try:
                with transaction.atomic():
                    order = Order.objects.create(
                        user=user,
                        total_amount=totals["total"],
                        status=Order.STATUS_PENDING,
                        shipping_address=shipping_address,
                        shipping_method=shipping_method,
                        shipping_cost=totals["shipping"],
                        payment_method=payment_method,
                        payment_status=Order.PAYMENT_PENDING,
                    )

                    OrderItem.objects.bulk_create(
                        [
                            OrderItem(
                                order=order, product=item.product, quantity=item.quantity, price=item.product.price
                            )
                            for item in cart_items
                        ]
                    )

                    for item in cart_items:
                        self.inventory_service.decrement_stock(item.product_id, item.quantity)

                    CartItem.objects.filter(user=user).delete()

            except Exception as e:
                self.logger.error(f"Checkout failed for user {user.id}: {e}", exc_info=True)
                checkout_failures_total.labels(reason=ErrorCodes.INTERNAL_ERROR).inc()
                return service_err(ErrorCodes.INTERNAL_ERROR, "Failed to create order")

        orders_placed_total.labels(shipping_method=(shipping_method or "").lower()).inc()
        order_value.observe(float(order.total_amount))

        self.logger.info(
            f"Order {order.id} placed by user {user.id}: {len(cart_items)} lines, "
            f"subtotal={totals['subtotal']}, shipping={totals['shipping']}, total={totals['total']}"
        )

        return service_ok(Order.objects.prefetch_related("items__product").get(pk=order.pk))

    @BaseService.log_performance
    def list_orders(
        self,
        user,
        status: Optional[str] = None,
        user_id: Optional[int] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        page: int = 1,
        limit: int = DEFAULT_PAGE_SIZE,
    ) -> ServiceResult[Dict[str, Any]]:
        """
        List orders newest first.

        Customers only ever see their own orders; ``user_id`` is honoured for admins.
        Dates are inclusive calendar days on ``created_at``.

        Returns:
            ServiceResult with ``orders``, ``total``, ``page``, ``limit`` and ``num_pages``
        """
        try:
            limit = max(1, min(int(limit), MAX_PAGE_SIZE))
            queryset = Order.objects.select_related("user").prefetch_related("items__product")

            if not user.is_admin():
                queryset = queryset.filter(user=user)
            elif user_id is not None:
                queryset = queryset.filter(user_id=user_id)

            if status:
                queryset = queryset.filter(status=status)
            if start_date:
                queryset = queryset.filter(created_at__date__gte=start_date)
            if end_date:
                queryset = queryset.filter(created_at__date__lte=end_date)

            paginator = Paginator(queryset.order_by("-created_at", "-id"), limit)
            page_obj = paginator.get_page(page)

            self.logger.info(f"Listed orders for user {user.id}: {paginator.count} total, page {page_obj.number}")

            return service_ok(
                {
                    "orders": list(page_obj.object_list),
                    "total": paginator.count,
                    "page": page_obj.number,
                    "limit": limit,
                    "num_pages": paginator.num_pages,
                }
            )

        except Exception as e:
            self.logger.error(f"Error listing orders for user {user.id}: {e}", exc_info=True)
            return service_err(ErrorCodes.INTERNAL_ERROR, "Failed to fetch orders")

    @BaseService.log_performance
    def get_order(self, order_id, user=None) -> ServiceResult[Order]:
        """
        Get an order with its items.

        When ``user`` is a customer the order must belong to them; other people's
        orders are reported as not found.
        """
        queryset = Order.objects.select_related("user").prefetch_related("items__product", "shipments")
        if user is not None and not user.is_admin():
            queryset = queryset.filter(user=user)

        order = queryset.filter(pk=order_id).first()
        if order is None:
            return service_err(ErrorCodes.ORDER_NOT_FOUND, "Order not found")
        return service_ok(order)

    @BaseService.log_performance
    def update_order(
        self, order_id, status: Optional[str] = None, payment_status: Optional[str] = None
    ) -> ServiceResult[Order]:
        """Admin update of the order and/or payment status."""
        try:
            order = Order.objects.get(pk=order_id)
        except Order.DoesNotExist:
            return service_err(ErrorCodes.ORDER_NOT_FOUND, "Order not found")

        if status is not None and status not in dict(Order.STATUS_CHOICES):
            return service_err(ErrorCodes.INVALID_ORDER_STATE, f"Invalid order status: {status}")
        if payment_status is not None and payment_status not in dict(Order.PAYMENT_STATUS_CHOICES):
            return service_err(ErrorCodes.INVALID_ORDER_STATE, f"Invalid payment status: {payment_status}")

        old_status = order.status
        if status is not None:
            order.status = status
        if payment_status is not None:
            order.payment_status = payment_status
        order.save(update_fields=["status", "payment_status", "updated_at"])

        self.logger.info(
            f"Order {order.id} updated: status {old_status} -> {order.status}, payment={order.payment_status}"
        )
        return service_ok(order)
