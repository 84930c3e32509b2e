import logging

from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from authentication.permissions import IsAdminRole
from infrastructure.container import container
from marketplace.api.errors import error_response
from marketplace.api.params import query_date, query_int
from marketplace.api.serializers import (
    CheckoutRequestSerializer,
    ErrorResponseSerializer,
    OrderListResponseSerializer,
    PaymentRequestSerializer,
    PaymentResponseSerializer,
    UpdateOrderRequestSerializer,
)
from marketplace.ordering.api.serializers import OrderSerializer
from marketplace.ordering.domain.services import OrderService, PaymentService


logger = logging.getLogger(__name__)


class OrderViewSet(viewsets.ViewSet):
    permission_classes = [IsAuthenticated]
    lookup_value_regex = r"\d+"

    def get_permissions(self):
        if self.action in ["update", "partial_update"]:
            return [IsAuthenticated(), IsAdminRole()]
        return super().get_permissions()

    def get_service(self) -> OrderService:
        return container.order_service()

    def get_payment_service(self) -> PaymentService:
        return container.payment_service()

    @extend_schema(
        operation_id="orders_list",
        summary="List orders",
        description="""
        **What it receives:**
        - Authentication token
        - Optional filters (query params): status, user_id (admin only), start_date, end_date
        - Pagination parameters (page, limit)

        **What it returns:**
        - Paginated list of orders, newest first
        - Customers only see their own orders
        """,
        parameters=[
            OpenApiParameter(name="status", type=str, description="Filter by order status"),
            OpenApiParameter(name="user_id", type=int, description="Filter by customer (admin only)"),
            OpenApiParameter(name="start_date", type=str, description="Created on or after (YYYY-MM-DD)"),
            OpenApiParameter(name="end_date", type=str, description="Created on or before (YYYY-MM-DD)"),
            OpenApiParameter(name="page", type=int, description="Page number (default: 1)"),
            OpenApiParameter(name="limit", type=int, description="Items per page (default: 20, max: 100)"),
        ],
        responses={
            200: OpenApiResponse(response=OrderListResponseSerializer, description="Orders retrieved successfully"),
            500: OpenApiResponse(response=ErrorResponseSerializer, description="Internal server error"),
        },
        tags=["Marketplace - Orders"],
    )
    def list(self, request):
        result = self.get_service().list_orders(
            request.user,
            status=request.query_params.get("status") or None,
            user_id=query_int(request, "user_id"),
            start_date=query_date(request, "start_date"),
            end_date=query_date(request, "end_date"),
            page=query_int(request, "page", 1),
            limit=query_int(request, "limit", 20),
        )
        if not result.ok:
            return error_response(result)

        data = dict(result.value)
        data["orders"] = OrderSerializer(data["orders"], many=True).data
        return Response(data)

    @extend_schema(
        operation_id="orders_retrieve",
        summary="Get order details",
        description="""
        **What it receives:**
        - Order ID (path)

        **What it returns:**
        - Order with its items; other customers' orders are reported as not found
        """,
        responses={
            200: OrderSerializer,
            404: OpenApiResponse(response=ErrorResponseSerializer, description="Order not found"),
        },
        tags=["Marketplace - Orders"],
    )
    def retrieve(self, request, pk=None):
        result = self.get_service().get_order(pk, user=request.user)
        if not result.ok:
            return error_response(result)
        return Response(OrderSerializer(result.value).data)

    @extend_schema(
        operation_id="orders_checkout",
        summary="Checkout the cart",
        description="""
        **What it receives:**
        - `shipping_address` (string)
        - `shipping_method` (string): standard, express or overnight
        - `payment_method` (string)

        **What it returns:**
        - The created order with items (201)
        - Stock is decremented and the cart is emptied in the same transaction
        - Standard shipping is free when the subtotal exceeds 100.00
        """,
        request=CheckoutRequestSerializer,
        responses={
            201: OrderSerializer,
            400: OpenApiResponse(response=ErrorResponseSerializer, description="Cart empty or insufficient stock"),
            500: OpenApiResponse(response=ErrorResponseSerializer, description="Internal server error"),
        },
        tags=["Marketplace - Orders"],
    )
    def create(self, request):
        serializer = CheckoutRequestSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        result = self.get_service().checkout(request.user, **serializer.validated_data)
        if not result.ok:
            return error_response(result)

        return Response(OrderSerializer(result.value).data, status=status.HTTP_201_CREATED)

    @extend_schema(
        operation_id="orders_update",
        summary="Update order status (admin)",
        request=UpdateOrderRequestSerializer,
        responses={
            200: OrderSerializer,
            400: OpenApiResponse(response=ErrorResponseSerializer, description="Invalid status"),
            404: OpenApiResponse(response=ErrorResponseSerializer, description="Order not found"),
        },
        tags=["Marketplace - Orders"],
    )
    def partial_update(self, request, pk=None):
        serializer = UpdateOrderRequestSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        result = self.get_service().update_order(pk, **serializer.validated_data)
        if not result.ok:
            return error_response(result)

        logger.info(f"Order {pk} updated by admin {request.user.id}: {serializer.validated_data}")
        return Response(OrderSerializer(result.value).data)

    def update(self, request, pk=None):
        return self.partial_update(request, pk)

    @extend_schema(
        operation_id="orders_pay",
        summary="Pay for an order",
        description="""
        **What it receives:**
        - Order ID (path)
        - `payment_method` (string): credit_card, bank_transfer or e_wallet
        - `amount` (decimal): Must match the order total

        **What it returns:**
        - Transaction ID and payment URL
        - Resulting order and payment status (bank transfers stay pending)
        """,
        request=PaymentRequestSerializer,
        responses={
            200: OpenApiResponse(response=PaymentResponseSerializer, description="Payment processed"),
            400: OpenApiResponse(response=ErrorResponseSerializer, description="Amount mismatch or invalid method"),
            404: OpenApiResponse(response=ErrorResponseSerializer, description="Order not found"),
            409: OpenApiResponse(response=ErrorResponseSerializer, description="Order already paid"),
            500: OpenApiResponse(response=ErrorResponseSerializer, description="Payment processing error"),
        },
        tags=["Marketplace - Payments"],
    )
    @action(detail=True, methods=["post"])
    def pay(self, request, pk=None):
        serializer = PaymentRequestSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        result = self.get_payment_service().process_payment(
            pk,
            serializer.validated_data["payment_method"],
            serializer.validated_data["amount"],
            user=request.user,
        )
        if not result.ok:
            return error_response(result)

        payment = result.value
        return Response(
            {
                "success": True,
                "order_id": payment.order_id,
                "transaction_id": payment.transaction_id,
                "payment_url": payment.payment_url,
                "status": payment.status,
                "payment_status": payment.payment_status,
            }
        )
