from decimal import Decimal

from django.core.validators import MinValueValidator
from django.db import models


class Category(models.Model):
    name = models.CharField(max_length=100, unique=True)
    description = models.TextField(blank=True, null=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name_plural = "Categories"
        ordering = ["-created_at"]
        app_label = "marketplace"

    def __str__(self):
        return self.name


class Product(models.Model):
    name = models.CharField(max_length=255)
    code = models.CharField(max_length=50, unique=True, help_text="Merchant SKU")
    description = models.TextField(blank=True, null=True)

    category = models.ForeignKey(Category, on_delete=models.PROTECT, related_name="products")

    # Pricing and Inventory
    price = models.DecimalField(max_digits=10, decimal_places=2, validators=[MinValueValidator(Decimal("0.01"))])
    stock = models.PositiveIntegerField(default=0)

    image = models.URLField(max_length=2000, blank=True, null=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-id"]
        app_label = "marketplace"
        indexes = [
            models.Index(fields=["category", "-id"], name="product_category_idx"),
            models.Index(fields=["price"], name="product_price_idx"),
            models.Index(fields=["stock"], name="product_stock_idx"),
        ]

    def __str__(self):
        return f"{self.name} ({self.code})"
