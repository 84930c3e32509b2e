from .category_serializers import CategorySerializer, CategoryWriteSerializer, MinimalCategorySerializer
from .product_serializers import ProductSerializer, ProductWriteSerializer


__all__ = [
    "CategorySerializer",
    "CategoryWriteSerializer",
    "MinimalCategorySerializer",
    "ProductSerializer",
    "ProductWriteSerializer",
]
