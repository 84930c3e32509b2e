from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status, viewsets
from rest_framework.response import Response

from authentication.permissions import IsAdminOrReadOnly
from infrastructure.container import container
from marketplace.api.errors import error_response
from marketplace.api.serializers import ErrorResponseSerializer
from marketplace.catalog.api.serializers import CategorySerializer, CategoryWriteSerializer
from marketplace.catalog.domain.services import CategoryService


class CategoryViewSet(viewsets.ViewSet):
    """
    Categories - public reads, admin-only writes.
    """

    permission_classes = [IsAdminOrReadOnly]
    lookup_value_regex = r"\d+"

    def get_service(self) -> CategoryService:
        return container.category_service()

    @extend_schema(
        operation_id="categories_list",
        summary="List categories",
        description="""
        **What it receives:**
        - Nothing (public endpoint)

        **What it returns:**
        - All categories, newest first, with their product count
        """,
        responses={200: CategorySerializer(many=True)},
        tags=["Marketplace - Categories"],
    )
    def list(self, request):
        result = self.get_service().list_categories()
        if not result.ok:
            return error_response(result)
        return Response(CategorySerializer(result.value, many=True).data)

    @extend_schema(
        operation_id="categories_retrieve",
        summary="Get category details",
        responses={
            200: CategorySerializer,
            404: OpenApiResponse(response=ErrorResponseSerializer, description="Category not found"),
        },
        tags=["Marketplace - Categories"],
    )
    def retrieve(self, request, pk=None):
        result = self.get_service().get_category(pk)
        if not result.ok:
            return error_response(result)
        return Response(CategorySerializer(result.value).data)

    @extend_schema(
        operation_id="categories_create",
        summary="Create category (admin)",
        description="""
        **What it receives:**
        - `name` (string): Unique category name
        - `description` (string, optional)

        **What it returns:**
        - The created category (201)
        """,
        request=CategoryWriteSerializer,
        responses={
            201: CategorySerializer,
            400: OpenApiResponse(response=ErrorResponseSerializer, description="Invalid data"),
            409: OpenApiResponse(response=ErrorResponseSerializer, description="Category name already exists"),
        },
        tags=["Marketplace - Categories"],
    )
    def create(self, request):
        serializer = CategoryWriteSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        result = self.get_service().create_category(**serializer.validated_data)
        if not result.ok:
            return error_response(result)
        return Response(CategorySerializer(result.value).data, status=status.HTTP_201_CREATED)

    @extend_schema(
        operation_id="categories_update",
        summary="Update category (admin)",
        request=CategoryWriteSerializer,
        responses={
            200: CategorySerializer,
            404: OpenApiResponse(response=ErrorResponseSerializer, description="Category not found"),
            409: OpenApiResponse(response=ErrorResponseSerializer, description="Category name already exists"),
        },
        tags=["Marketplace - Categories"],
    )
    def partial_update(self, request, pk=None):
        serializer = CategoryWriteSerializer(data=request.data, partial=True)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        result = self.get_service().update_category(pk, **serializer.validated_data)
        if not result.ok:
            return error_response(result)
        return Response(CategorySerializer(result.value).data)

    def update(self, request, pk=None):
        return self.partial_update(request, pk)

    @extend_schema(
        operation_id="categories_delete",
        summary="Delete category (admin)",
        description="""
        **What it receives:**
        - Category ID (path)

        **What it returns:**
        - 204 on success
        - 409 when products still reference the category
        """,
        responses={
            204: OpenApiResponse(description="Category deleted"),
            404: OpenApiResponse(response=ErrorResponseSerializer, description="Category not found"),
            409: OpenApiResponse(response=ErrorResponseSerializer, description="Category has products"),
        },
        tags=["Marketplace - Categories"],
    )
    def destroy(self, request, pk=None):
        result = self.get_service().delete_category(pk)
        if not result.ok:
            return error_response(result)
        return Response(status=status.HTTP_204_NO_CONTENT)
