from decimal import Decimal

from rest_framework import serializers

from marketplace.catalog.api.serializers.category_serializers import MinimalCategorySerializer
from marketplace.catalog.domain.models.catalog import Product


class ProductSerializer(serializers.ModelSerializer):
    category = MinimalCategorySerializer(read_only=True)

    class Meta:
        model = Product
        fields = [
            "id",
            "name",
            "code",
            "description",
            "price",
            "stock",
            "image",
            "category",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class ProductWriteSerializer(serializers.Serializer):
    """
    Input for product create/update.

    Code uniqueness and category existence are checked by ProductService.
    Use ``partial=True`` for updates.
    """

    name = serializers.CharField(max_length=255)
    code = serializers.CharField(max_length=50)
    description = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    price = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=Decimal("0.01"))
    stock = serializers.IntegerField(min_value=0, required=False, default=0)
    category_id = serializers.IntegerField()
    image = serializers.URLField(required=False, allow_blank=True, allow_null=True)
