"""
CartService - Shopping cart operations.

A cart is the set of ``CartItem`` rows owned by a customer. Quantities never
exceed the product's current stock at the time of the change.
"""

from typing import Any, Dict

from django.db import transaction

from marketplace.cart.domain.models.cart import CartItem
from marketplace.catalog.domain.models.catalog import Product
from marketplace.services.base import BaseService, ErrorCodes, ServiceResult, service_err, service_ok

from .inventory_service import InventoryService
from .pricing_service import PricingService


class CartService(BaseService):
    """
    Service for managing customer carts.

    Responsibilities:
    - Read the cart with per-line and overall subtotals
    - Add, update and remove lines with stock checks
    - Clear the cart after checkout or account deletion
    """

    def __init__(self, inventory_service: InventoryService, pricing_service: PricingService):
        super().__init__()
        self.inventory_service = inventory_service
        self.pricing_service = pricing_service

    def _items(self, user):
        return CartItem.objects.filter(user=user).select_related("product", "product__category").order_by("created_at")

    @BaseService.log_performance
    def get_cart(self, user) -> ServiceResult[Dict[str, Any]]:
        """
        Get the user's cart.

        Returns:
            ServiceResult with ``items`` (CartItem rows with product and category),
            ``items_count``, ``total_quantity`` and ``subtotal``
        """
        try:
            items = list(self._items(user))
            totals = self.pricing_service.calculate_cart_total(items)
            if not totals.ok:
                return totals

            return service_ok({"items": items, **totals.value})

        except Exception as e:
            self.logger.error(f"Error getting cart for user {user.id}: {e}", exc_info=True)
            return service_err(ErrorCodes.INTERNAL_ERROR, "Failed to fetch cart")

    @BaseService.log_performance
    @transaction.atomic
    def add_to_cart(self, user, product_id, quantity: int = 1) -> ServiceResult[CartItem]:
        """
        Add a product to the cart, merging with an existing line for the same product.

        Args:
            user: Customer adding the item
            product_id: Product to add
            quantity: Units to add (default: 1)

        Returns:
            ServiceResult with the created or updated CartItem
        """
        if not user.is_customer():
            return service_err(ErrorCodes.NOT_A_CUSTOMER, "Only customers can add items to cart")

        if quantity <= 0:
            return service_err(ErrorCodes.INVALID_QUANTITY, "Quantity must be positive")

        try:
            product = Product.objects.get(pk=product_id)
        except Product.DoesNotExist:
            return service_err(ErrorCodes.PRODUCT_NOT_FOUND, "Product not found")

        try:
            if product.stock < quantity:
                return service_err(ErrorCodes.INSUFFICIENT_STOCK, "Insufficient stock available")

            item = CartItem.objects.filter(user=user, product=product).first()
            if item is not None:
                new_quantity = item.quantity + quantity
                if new_quantity > product.stock:
                    return service_err(ErrorCodes.INSUFFICIENT_STOCK, "Total quantity would exceed available stock")
                item.quantity = new_quantity
                item.save(update_fields=["quantity", "updated_at"])
                self.logger.info(f"Cart line merged: user={user.id}, product={product.id}, quantity={new_quantity}")
            else:
                item = CartItem.objects.create(user=user, product=product, quantity=quantity)
                self.logger.info(f"Cart line added: user={user.id}, product={product.id}, quantity={quantity}")

            return service_ok(item)

        except Exception as e:
            self.logger.error(f"Error adding product {product_id} to cart of user {user.id}: {e}", exc_info=True)
            return service_err(ErrorCodes.INTERNAL_ERROR, "Failed to add item to cart")

    @BaseService.log_performance
    def update_cart_item(self, user, item_id, quantity: int) -> ServiceResult[CartItem]:
        """Set the quantity of one of the user's cart lines."""
        if quantity <= 0:
            return service_err(ErrorCodes.INVALID_QUANTITY, "Quantity must be positive")

        try:
            item = CartItem.objects.select_related("product").get(pk=item_id, user=user)
        except CartItem.DoesNotExist:
            return service_err(ErrorCodes.ITEM_NOT_IN_CART, "Cart item not found")

        if item.product.stock < quantity:
            return service_err(ErrorCodes.INSUFFICIENT_STOCK, "Insufficient stock available")

        item.quantity = quantity
        item.save(update_fields=["quantity", "updated_at"])
        self.logger.info(f"Cart line updated: item={item.id}, quantity={quantity}")
        return service_ok(item)

    @BaseService.log_performance
    def remove_from_cart(self, user, item_id) -> ServiceResult[bool]:
        """
        Returns:
            ServiceResult with True when a line was removed, False otherwise
        """
        deleted, _ = CartItem.objects.filter(pk=item_id, user=user).delete()
        return service_ok(deleted > 0)

    @BaseService.log_performance
    def clear_cart(self, user) -> ServiceResult[int]:
        deleted, _ = CartItem.objects.filter(user=user).delete()
        self.logger.info(f"Cart cleared: user={user.id}, lines_removed={deleted}")
        return service_ok(deleted)
