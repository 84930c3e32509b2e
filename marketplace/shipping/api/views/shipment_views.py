from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from authentication.permissions import IsAdminRole
from infrastructure.container import container
from marketplace.api.errors import error_response
from marketplace.api.serializers import (
    CreateShipmentRequestSerializer,
    ErrorResponseSerializer,
    ShippingOptionSerializer,
    ShippingRateRequestSerializer,
    UpdateShipmentRequestSerializer,
)
from marketplace.shipping.api.serializers import ShipmentSerializer
from marketplace.shipping.domain.services import ShipmentService, ShippingRateService


class ShipmentViewSet(viewsets.ViewSet):
    """
    Shipments - managed by admins, tracked by customers.
    """

    permission_classes = [IsAuthenticated, IsAdminRole]
    lookup_value_regex = r"\d+"

    def get_permissions(self):
        if self.action in ["track", "calculate"]:
            return [IsAuthenticated()]
        return super().get_permissions()

    def get_service(self) -> ShipmentService:
        return container.shipment_service()

    def get_rate_service(self) -> ShippingRateService:
        return container.shipping_rate_service()

    @extend_schema(
        operation_id="shipments_list",
        summary="List shipments (admin)",
        description="""
        **What it receives:**
        - Admin authentication token

        **What it returns:**
        - All shipments, newest first, with order and customer data
        """,
        responses={200: ShipmentSerializer(many=True)},
        tags=["Marketplace - Shipping"],
    )
    def list(self, request):
        result = self.get_service().list_shipments()
        if not result.ok:
            return error_response(result)
        return Response(ShipmentSerializer(result.value, many=True).data)

    @extend_schema(
        operation_id="shipments_create",
        summary="Create shipment (admin)",
        description="""
        **What it receives:**
        - `order_id`, `courier`, `cost` (> 0)
        - `tracking_number`, `estimated_delivery`, both optional

        **What it returns:**
        - The created shipment (201); the order becomes `shipped`
        """,
        request=CreateShipmentRequestSerializer,
        responses={
            201: ShipmentSerializer,
            400: OpenApiResponse(response=ErrorResponseSerializer, description="Invalid data"),
            404: OpenApiResponse(response=ErrorResponseSerializer, description="Order not found"),
        },
        tags=["Marketplace - Shipping"],
    )
    def create(self, request):
        serializer = CreateShipmentRequestSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        result = self.get_service().create_shipment(**serializer.validated_data)
        if not result.ok:
            return error_response(result)
        return Response(ShipmentSerializer(result.value).data, status=status.HTTP_201_CREATED)

    @extend_schema(
        operation_id="shipments_update",
        summary="Update shipment (admin)",
        description="""
        **What it receives:**
        - `tracking_number`, `status`, `delivered_at`, all optional

        **What it returns:**
        - The updated shipment; `delivered` completes the order
        """,
        request=UpdateShipmentRequestSerializer,
        responses={
            200: ShipmentSerializer,
            400: OpenApiResponse(response=ErrorResponseSerializer, description="Invalid data"),
            404: OpenApiResponse(response=ErrorResponseSerializer, description="Shipment not found"),
        },
        tags=["Marketplace - Shipping"],
    )
    def partial_update(self, request, pk=None):
        serializer = UpdateShipmentRequestSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        result = self.get_service().update_shipment(pk, **serializer.validated_data)
        if not result.ok:
            return error_response(result)
        return Response(ShipmentSerializer(result.value).data)

    def update(self, request, pk=None):
        return self.partial_update(request, pk)

    @extend_schema(
        operation_id="shipments_track",
        summary="Track an order's shipment",
        description="""
        **What it receives:**
        - Order ID (path)

        **What it returns:**
        - The order's first shipment, or `null` when nothing has shipped yet
        """,
        responses={
            200: ShipmentSerializer,
            404: OpenApiResponse(response=ErrorResponseSerializer, description="Order not found"),
        },
        tags=["Marketplace - Shipping"],
    )
    @action(detail=False, methods=["get"], url_path=r"track/(?P<order_id>\d+)")
    def track(self, request, order_id=None):
        result = self.get_service().track_shipment(order_id, user=request.user)
        if not result.ok:
            return error_response(result)
        if result.value is None:
            return Response(None)
        return Response(ShipmentSerializer(result.value).data)

    @extend_schema(
        operation_id="shipping_calculate",
        summary="Calculate shipping options",
        description="""
        **What it receives:**
        - `destination` (string): City name, case-insensitive
        - `weight` (decimal): Parcel weight in kg, 50 max

        **What it returns:**
        - Courier options sorted by cost, with estimated delivery days
        """,
        request=ShippingRateRequestSerializer,
        responses={
            200: ShippingOptionSerializer(many=True),
            400: OpenApiResponse(response=ErrorResponseSerializer, description="Invalid destination or weight"),
        },
        tags=["Marketplace - Shipping"],
    )
    @action(detail=False, methods=["post"])
    def calculate(self, request):
        serializer = ShippingRateRequestSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        result = self.get_rate_service().calculate_shipping(
            serializer.validated_data["destination"], serializer.validated_data["weight"]
        )
        if not result.ok:
            return error_response(result)
        return Response(ShippingOptionSerializer([option.to_dict() for option in result.value], many=True).data)
