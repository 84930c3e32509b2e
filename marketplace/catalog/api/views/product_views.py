import logging

from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework import status, viewsets
from rest_framework.response import Response

from authentication.permissions import IsAdminOrReadOnly
from infrastructure.container import container
from marketplace.api.errors import error_response
from marketplace.api.params import query_decimal, query_int
from marketplace.api.serializers import ErrorResponseSerializer, ProductListResponseSerializer
from marketplace.catalog.api.serializers import ProductSerializer, ProductWriteSerializer
from marketplace.catalog.domain.services import ProductService


logger = logging.getLogger(__name__)


class ProductViewSet(viewsets.ViewSet):
    """
    Products - public browsing, admin-only management.
    """

    permission_classes = [IsAdminOrReadOnly]
    lookup_value_regex = r"\d+"

    def get_service(self) -> ProductService:
        return container.product_service()

    @extend_schema(
        operation_id="products_list",
        summary="List products with filters",
        description="""
        **What it receives:**
        - Optional filters (query params): category_id, search, min_price, max_price
        - Pagination parameters (page, limit)

        **What it returns:**
        - Paginated list of products, newest first
        - Total count and page information
        """,
        parameters=[
            OpenApiParameter(name="category_id", type=int, description="Filter by category"),
            OpenApiParameter(name="search", type=str, description="Case-insensitive match on product name"),
            OpenApiParameter(name="min_price", type=float, description="Minimum price"),
            OpenApiParameter(name="max_price", type=float, description="Maximum price"),
            OpenApiParameter(name="page", type=int, description="Page number (default: 1)"),
            OpenApiParameter(name="limit", type=int, description="Items per page (default: 20, max: 100)"),
        ],
        responses={
            200: OpenApiResponse(response=ProductListResponseSerializer, description="Products retrieved"),
            400: OpenApiResponse(response=ErrorResponseSerializer, description="Invalid filter value"),
        },
        tags=["Marketplace - Products"],
    )
    def list(self, request):
        result = self.get_service().list_products(
            category_id=query_int(request, "category_id"),
            search=request.query_params.get("search") or None,
            min_price=query_decimal(request, "min_price"),
            max_price=query_decimal(request, "max_price"),
            page=query_int(request, "page", 1),
            limit=query_int(request, "limit", 20),
        )
        if not result.ok:
            return error_response(result)

        data = dict(result.value)
        data["products"] = ProductSerializer(data["products"], many=True).data
        return Response(data)

    @extend_schema(
        operation_id="products_retrieve",
        summary="Get product details",
        responses={
            200: ProductSerializer,
            404: OpenApiResponse(response=ErrorResponseSerializer, description="Product not found"),
        },
        tags=["Marketplace - Products"],
    )
    def retrieve(self, request, pk=None):
        result = self.get_service().get_product(pk)
        if not result.ok:
            return error_response(result)
        return Response(ProductSerializer(result.value).data)

    @extend_schema(
        operation_id="products_create",
        summary="Create product (admin)",
        description="""
        **What it receives:**
        - `name`, `code` (unique), `price` (> 0), `category_id`
        - `description`, `stock` (>= 0, default 0), `image` (URL), all optional

        **What it returns:**
        - The created product (201)
        """,
        request=ProductWriteSerializer,
        responses={
            201: ProductSerializer,
            400: OpenApiResponse(response=ErrorResponseSerializer, description="Invalid data"),
            404: OpenApiResponse(response=ErrorResponseSerializer, description="Category not found"),
            409: OpenApiResponse(response=ErrorResponseSerializer, description="Product code already exists"),
        },
        tags=["Marketplace - Products"],
    )
    def create(self, request):
        serializer = ProductWriteSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        result = self.get_service().create_product(serializer.validated_data)
        if not result.ok:
            return error_response(result)

        logger.info(f"Product {result.value.id} created by admin {request.user.id}")
        return Response(ProductSerializer(result.value).data, status=status.HTTP_201_CREATED)

    @extend_schema(
        operation_id="products_update",
        summary="Update product (admin)",
        request=ProductWriteSerializer,
        responses={
            200: ProductSerializer,
            400: OpenApiResponse(response=ErrorResponseSerializer, description="Invalid data"),
            404: OpenApiResponse(response=ErrorResponseSerializer, description="Product or category not found"),
            409: OpenApiResponse(response=ErrorResponseSerializer, description="Product code already exists"),
        },
        tags=["Marketplace - Products"],
    )
    def partial_update(self, request, pk=None):
        serializer = ProductWriteSerializer(data=request.data, partial=True)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        result = self.get_service().update_product(pk, serializer.validated_data)
        if not result.ok:
            return error_response(result)
        return Response(ProductSerializer(result.value).data)

    def update(self, request, pk=None):
        return self.partial_update(request, pk)

    @extend_schema(
        operation_id="products_delete",
        summary="Delete product (admin)",
        description="""
        **What it receives:**
        - Product ID (path)

        **What it returns:**
        - 204 on success, 404 when missing
        - 409 when the product has been ordered
        """,
        responses={
            204: OpenApiResponse(description="Product deleted"),
            404: OpenApiResponse(response=ErrorResponseSerializer, description="Product not found"),
            409: OpenApiResponse(response=ErrorResponseSerializer, description="Product has been ordered"),
        },
        tags=["Marketplace - Products"],
    )
    def destroy(self, request, pk=None):
        result = self.get_service().delete_product(pk)
        if not result.ok:
            return error_response(result)
        if not result.value:
            return Response({"detail": "Product not found"}, status=status.HTTP_404_NOT_FOUND)
        return Response(status=status.HTTP_204_NO_CONTENT)
