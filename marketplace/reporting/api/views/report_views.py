import logging

from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from authentication.permissions import IsAdminRole
from infrastructure.container import container
from marketplace.api.errors import error_response
from marketplace.api.serializers import ErrorResponseSerializer, ExportRequestSerializer, ExportResponseSerializer
from marketplace.reporting.api.serializers import DashboardStatsSerializer


logger = logging.getLogger(__name__)


class ReportViewSet(viewsets.ViewSet):
    """Admin dashboard figures and data exports."""

    permission_classes = [IsAuthenticated, IsAdminRole]

    @extend_schema(
        operation_id="reports_dashboard",
        summary="Dashboard statistics (admin)",
        description="""
        **What it receives:**
        - Admin authentication token

        **What it returns:**
        - User, product and order counts, total revenue, pending orders
        - Low-stock products, 10 most recent orders, top 5 products by units sold
        """,
        responses={
            200: DashboardStatsSerializer,
            500: OpenApiResponse(response=ErrorResponseSerializer, description="Internal server error"),
        },
        tags=["Marketplace - Reports"],
    )
    @action(detail=False, methods=["get"])
    def dashboard(self, request):
        result = container.dashboard_service().get_dashboard_stats()
        if not result.ok:
            return error_response(result)
        return Response(DashboardStatsSerializer(result.value).data)

    @extend_schema(
        operation_id="reports_export",
        summary="Export data (admin)",
        description="""
        **What it receives:**
        - `type`: users, categories, products, orders or shipments
        - `format`: csv or pdf (plain-text report)
        - `filters` (object, optional), validated per type:
          users: role, search; categories: search;
          products: category_id, search, min_price, max_price;
          orders: status, user_id, min_amount, max_amount;
          shipments: status, courier, order_id;
          every type: start_date, end_date (YYYY-MM-DD)

        **What it returns:**
        - URL and filename of the stored export with its record count
        """,
        request=ExportRequestSerializer,
        responses={
            200: ExportResponseSerializer,
            400: OpenApiResponse(response=ErrorResponseSerializer, description="Invalid export type, format or filters"),
            500: OpenApiResponse(response=ErrorResponseSerializer, description="Export failed"),
        },
        tags=["Marketplace - Reports"],
    )
    @action(detail=False, methods=["post"])
    def export(self, request):
        serializer = ExportRequestSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        data = serializer.validated_data
        result = container.export_service().export_data(data["type"], data["format"], data["filters"])
        if not result.ok:
            return error_response(result)

        logger.info(f"Admin {request.user.id} exported {result.value['record_count']} {data['type']} records")
        return Response(ExportResponseSerializer(result.value).data)
