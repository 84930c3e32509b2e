from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from infrastructure.container import container
from marketplace.api.errors import error_response
from marketplace.api.serializers import (
    AddToCartRequestSerializer,
    CartResponseSerializer,
    ErrorResponseSerializer,
    UpdateCartRequestSerializer,
)
from marketplace.cart.api.serializers import CartServiceOutputSerializer
from marketplace.cart.domain.services import CartService


class CartViewSet(viewsets.ViewSet):
    permission_classes = [IsAuthenticated]
    lookup_value_regex = r"\d+"

    def get_service(self) -> CartService:
        return container.cart_service()

    def cart_response(self, request, status_code=status.HTTP_200_OK):
        result = self.get_service().get_cart(request.user)
        if not result.ok:
            return error_response(result)
        return Response(CartServiceOutputSerializer(result.value).data, status=status_code)

    @extend_schema(
        operation_id="cart_get",
        summary="Get user's shopping cart",
        description="""
        **What it receives:**
        - Authentication token (header)

        **What it returns:**
        - Cart items with product and category details
        - Per-line subtotal, overall subtotal and item count
        """,
        responses={
            200: OpenApiResponse(response=CartResponseSerializer, description="Cart retrieved successfully"),
            500: OpenApiResponse(response=ErrorResponseSerializer, description="Internal server error"),
        },
        tags=["Marketplace - Cart"],
    )
    def list(self, request):
        return self.cart_response(request)

    @extend_schema(
        operation_id="cart_add_item",
        summary="Add item to cart",
        description="""
        **What it receives:**
        - `product_id` (integer): Product to add
        - `quantity` (integer, optional): Quantity to add (default: 1)

        **What it returns:**
        - Updated cart with all items
        - Adding a product already in the cart merges the quantities
        """,
        request=AddToCartRequestSerializer,
        responses={
            201: OpenApiResponse(response=CartResponseSerializer, description="Item added successfully"),
            400: OpenApiResponse(response=ErrorResponseSerializer, description="Invalid data or insufficient stock"),
            403: OpenApiResponse(response=ErrorResponseSerializer, description="Only customers can add items"),
            404: OpenApiResponse(response=ErrorResponseSerializer, description="Product not found"),
        },
        tags=["Marketplace - Cart"],
    )
    @action(detail=False, methods=["post"])
    def add_item(self, request):
        serializer = AddToCartRequestSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        result = self.get_service().add_to_cart(
            request.user, serializer.validated_data["product_id"], serializer.validated_data["quantity"]
        )
        if not result.ok:
            return error_response(result)

        return self.cart_response(request, status.HTTP_201_CREATED)

    @extend_schema(
        operation_id="cart_update_item",
        summary="Update item quantity in cart",
        description="""
        **What it receives:**
        - Cart item ID (path)
        - `quantity` (integer): New quantity, at least 1

        **What it returns:**
        - Updated cart with modified quantities
        """,
        request=UpdateCartRequestSerializer,
        responses={
            200: OpenApiResponse(response=CartResponseSerializer, description="Item updated successfully"),
            400: OpenApiResponse(response=ErrorResponseSerializer, description="Invalid data or insufficient stock"),
            404: OpenApiResponse(response=ErrorResponseSerializer, description="Item not in cart"),
        },
        tags=["Marketplace - Cart"],
    )
    def partial_update(self, request, pk=None):
        serializer = UpdateCartRequestSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        result = self.get_service().update_cart_item(request.user, pk, serializer.validated_data["quantity"])
        if not result.ok:
            return error_response(result)

        return self.cart_response(request)

    @extend_schema(
        operation_id="cart_remove_item",
        summary="Remove item from cart",
        description="""
        **What it receives:**
        - Cart item ID (path)

        **What it returns:**
        - Updated cart without the removed item
        """,
        responses={
            200: OpenApiResponse(response=CartResponseSerializer, description="Item removed successfully"),
            404: OpenApiResponse(response=ErrorResponseSerializer, description="Item not in cart"),
        },
        tags=["Marketplace - Cart"],
    )
    def destroy(self, request, pk=None):
        result = self.get_service().remove_from_cart(request.user, pk)
        if not result.ok:
            return error_response(result)
        if not result.value:
            return Response({"detail": "Cart item not found"}, status=status.HTTP_404_NOT_FOUND)

        return self.cart_response(request)

    @extend_schema(
        operation_id="cart_clear",
        summary="Clear all items from cart",
        description="""
        **What it receives:**
        - Authentication token (header)

        **What it returns:**
        - 204 No Content
        """,
        responses={
            204: OpenApiResponse(description="Cart cleared successfully"),
            500: OpenApiResponse(response=ErrorResponseSerializer, description="Internal server error"),
        },
        tags=["Marketplace - Cart"],
    )
    @action(detail=False, methods=["delete"])
    def clear(self, request):
        result = self.get_service().clear_cart(request.user)
        if not result.ok:
            return error_response(result)
        return Response(status=status.HTTP_204_NO_CONTENT)
