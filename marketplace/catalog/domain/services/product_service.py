"""
ProductService - catalog products.

Handles product CRUD and the filtered, paginated catalog listing. Product codes
are unique; a product that appears on any order cannot be deleted.
"""

from decimal import Decimal
from typing import Any, Dict, Optional

from django.core.paginator import Paginator
from django.db import transaction

from marketplace.cart.domain.models.cart import CartItem
from marketplace.catalog.domain.models.catalog import Category, Product
from marketplace.ordering.domain.models.order import OrderItem
from marketplace.services.base import BaseService, ErrorCodes, ServiceResult, service_err, service_ok


DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100

EDITABLE_FIELDS = ("name", "code", "description", "price", "stock", "image")


class ProductService(BaseService):
    """
    Service for catalog browsing and product management.

    Responsibilities:
    - Filtered listing (category, name search, price range) with pagination
    - Create/update with code uniqueness and category existence checks
    - Delete guarded by order history
    """

    @BaseService.log_performance
    def list_products(
        self,
        category_id: Optional[int] = None,
        search: Optional[str] = None,
        min_price: Optional[Decimal] = None,
        max_price: Optional[Decimal] = None,
        page: int = 1,
        limit: int = DEFAULT_PAGE_SIZE,
    ) -> ServiceResult[Dict[str, Any]]:
        """
        List products, newest first.

        Args:
            category_id: Only products in this category
            search: Case-insensitive substring of the product name
            min_price: Inclusive lower price bound
            max_price: Inclusive upper price bound
            page: Page number (1-indexed)
            limit: Items per page, capped at 100

        Returns:
            ServiceResult with ``products``, ``total``, ``page``, ``limit`` and ``num_pages``

        Example:
            >>> result = product_service.list_products(search="mug", max_price=Decimal("20"))
            >>> if result.ok:
            ...     products = result.value["products"]
        """
        try:
            limit = max(1, min(int(limit), MAX_PAGE_SIZE))
            queryset = Product.objects.select_related("category")

            if category_id is not None:
                queryset = queryset.filter(category_id=category_id)
            if search:
                queryset = queryset.filter(name__icontains=search)
            if min_price is not None:
                queryset = queryset.filter(price__gte=min_price)
            if max_price is not None:
                queryset = queryset.filter(price__lte=max_price)

            paginator = Paginator(queryset.order_by("-id"), limit)
            page_obj = paginator.get_page(page)

            self.logger.info(f"Listed products: count={paginator.count}, page={page_obj.number}/{paginator.num_pages}")

            return service_ok(
                {
                    "products": list(page_obj.object_list),
                    "total": paginator.count,
                    "page": page_obj.number,
                    "limit": limit,
                    "num_pages": paginator.num_pages,
                }
            )

        except Exception as e:
            self.logger.error(f"Error listing products: {e}", exc_info=True)
            return service_err(ErrorCodes.INTERNAL_ERROR, "Failed to fetch products")

    @BaseService.log_performance
    def get_product(self, product_id) -> ServiceResult[Product]:
        try:
            return service_ok(Product.objects.select_related("category").get(pk=product_id))
        except Product.DoesNotExist:
            return service_err(ErrorCodes.PRODUCT_NOT_FOUND, f"Product {product_id} not found")

    @BaseService.log_performance
    def create_product(self, data: Dict[str, Any]) -> ServiceResult[Product]:
        """
        Create a product.

        Args:
            data: Validated fields: name, code, price, category_id and optionally
                description, stock and image
        """
        try:
            if not Category.objects.filter(pk=data["category_id"]).exists():
                return service_err(ErrorCodes.CATEGORY_NOT_FOUND, "Category not found")

            if Product.objects.filter(code=data["code"]).exists():
                return service_err(ErrorCodes.PRODUCT_CODE_TAKEN, "Product code already exists")

            product = Product.objects.create(
                name=data["name"],
                code=data["code"],
                description=data.get("description"),
                price=data["price"],
                stock=data.get("stock", 0),
                image=data.get("image"),
                category_id=data["category_id"],
            )

            self.logger.info(f"Product created: id={product.id}, code={product.code}")
            return service_ok(product)

        except Exception as e:
            self.logger.error(f"Error creating product: {e}", exc_info=True)
            return service_err(ErrorCodes.INTERNAL_ERROR, "Failed to create product")

    @BaseService.log_performance
    def update_product(self, product_id, data: Dict[str, Any]) -> ServiceResult[Product]:
        """Partially update a product; absent keys keep their current value."""
        try:
            product = Product.objects.get(pk=product_id)
        except Product.DoesNotExist:
            return service_err(ErrorCodes.PRODUCT_NOT_FOUND, f"Product {product_id} not found")

        try:
            code = data.get("code")
            if code and Product.objects.filter(code=code).exclude(pk=product.pk).exists():
                return service_err(ErrorCodes.PRODUCT_CODE_TAKEN, "Product code already exists")

            category_id = data.get("category_id")
            if category_id is not None:
                if not Category.objects.filter(pk=category_id).exists():
                    return service_err(ErrorCodes.CATEGORY_NOT_FOUND, "Category not found")
                product.category_id = category_id

            for field in EDITABLE_FIELDS:
                if field in data:
                    setattr(product, field, data[field])

            product.save()
            self.logger.info(f"Product updated: id={product.id}, fields={sorted(data.keys())}")
            return service_ok(product)

        except Exception as e:
            self.logger.error(f"Error updating product {product_id}: {e}", exc_info=True)
            return service_err(ErrorCodes.INTERNAL_ERROR, "Failed to update product")

    @BaseService.log_performance
    @transaction.atomic
    def delete_product(self, product_id) -> ServiceResult[bool]:
        """
        Delete a product and the cart rows that reference it.

        Returns:
            ServiceResult with True when deleted, False when the product did not
            exist, or ``product_in_use`` when order items reference it
        """
        product = Product.objects.filter(pk=product_id).first()
        if product is None:
            return service_ok(False)

        if OrderItem.objects.filter(product=product).exists():
            return service_err(ErrorCodes.PRODUCT_IN_USE, "Cannot delete product that has been ordered")

        removed, _ = CartItem.objects.filter(product=product).delete()
        product.delete()

        self.logger.info(f"Product deleted: id={product_id}, cart_items_removed={removed}")
        return service_ok(True)
