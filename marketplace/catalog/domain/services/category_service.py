"""
CategoryService - product categories.

Category names are unique. A category still referenced by products cannot be
deleted.
"""

from typing import List, Optional

from marketplace.catalog.domain.models.catalog import Category, Product
from marketplace.services.base import BaseService, ErrorCodes, ServiceResult, service_err, service_ok


class CategoryService(BaseService):
    @BaseService.log_performance
    def list_categories(self) -> ServiceResult[List[Category]]:
        """Return every category, newest first."""
        try:
            return service_ok(list(Category.objects.order_by("-created_at")))
        except Exception as e:
            self.logger.error(f"Error listing categories: {e}", exc_info=True)
            return service_err(ErrorCodes.INTERNAL_ERROR, "Failed to fetch categories")

    @BaseService.log_performance
    def get_category(self, category_id) -> ServiceResult[Category]:
        try:
            return service_ok(Category.objects.get(pk=category_id))
        except Category.DoesNotExist:
            return service_err(ErrorCodes.CATEGORY_NOT_FOUND, "Category not found")

    @BaseService.log_performance
    def create_category(self, name: str, description: Optional[str] = None) -> ServiceResult[Category]:
        try:
            if Category.objects.filter(name=name).exists():
                return service_err(ErrorCodes.CATEGORY_NAME_TAKEN, "Category name already exists")

            category = Category.objects.create(name=name, description=description)
            self.logger.info(f"Category created: id={category.id}, name={category.name}")
            return service_ok(category)

        except Exception as e:
            self.logger.error(f"Error creating category {name}: {e}", exc_info=True)
            return service_err(ErrorCodes.INTERNAL_ERROR, "Failed to create category")

    @BaseService.log_performance
    def update_category(
        self, category_id, name: Optional[str] = None, description: Optional[str] = None
    ) -> ServiceResult[Category]:
        try:
            category = Category.objects.get(pk=category_id)
        except Category.DoesNotExist:
            return service_err(ErrorCodes.CATEGORY_NOT_FOUND, "Category not found")

        try:
            if name is not None:
                if Category.objects.filter(name=name).exclude(pk=category.pk).exists():
                    return service_err(ErrorCodes.CATEGORY_NAME_TAKEN, "Category name already exists")
                category.name = name
            if description is not None:
                category.description = description

            category.save()
            return service_ok(category)

        except Exception as e:
            self.logger.error(f"Error updating category {category_id}: {e}", exc_info=True)
            return service_err(ErrorCodes.INTERNAL_ERROR, "Failed to update category")

    @BaseService.log_performance
    def delete_category(self, category_id) -> ServiceResult[bool]:
        """
        Delete a category that no product references.

        Returns:
            ServiceResult with True, ``category_not_found`` or ``category_in_use``
        """
        try:
            category = Category.objects.get(pk=category_id)
        except Category.DoesNotExist:
            return service_err(ErrorCodes.CATEGORY_NOT_FOUND, "Category not found")

        product_count = Product.objects.filter(category=category).count()
        if product_count > 0:
            return service_err(
                ErrorCodes.CATEGORY_IN_USE,
                f"Cannot delete category. It has {product_count} associated products.",
            )

        category.delete()
        self.logger.info(f"Category deleted: id={category_id}")
        return service_ok(True)
