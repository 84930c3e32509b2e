"""
ExportService - Tabular data exports.

Each export is rendered either as CSV or as a plain-text report (the ``pdf``
format) and written through the configured storage adapter under
``EXPORTS_DIR``.
"""

import csv
import io
import os
from typing import Any, Dict, List, Optional

from django.conf import settings
from django.contrib.auth import get_user_model
from django.core.files.base import ContentFile
from django.db.models import Count
from django.utils import timezone

from infrastructure.storage import StorageException, StorageInterface
from marketplace.catalog.domain.models.catalog import Category, Product
from marketplace.ordering.domain.models.order import Order
from marketplace.services.base import BaseService, ErrorCodes, ServiceResult, service_err, service_ok
from marketplace.shipping.domain.models.shipment import Shipment

EXPORT_FORMATS = {
    "csv": ("csv", "text/csv"),
    "pdf": ("txt", "text/plain"),
}

EXPORT_COLUMNS = {
    "users": ["id", "name", "email", "role", "phone", "created_at"],
    "categories": ["id", "name", "description", "product_count", "created_at"],
    "products": ["id", "code", "name", "category", "price", "stock", "created_at"],
    "orders": ["id", "customer", "email", "status", "payment_status", "payment_method", "total_amount", "created_at"],
    "shipments": ["id", "order_id", "courier", "tracking_number", "status", "cost", "delivered_at", "created_at"],
}


class ExportService(BaseService):
    def __init__(self, storage: StorageInterface):
        super().__init__()
        self.storage = storage
        self.exports_dir = getattr(settings, "EXPORTS_DIR", "exports")

    # Row builders, one per data type

    @staticmethod
    def _created_between(queryset, filters):
        if filters.get("start_date"):
            queryset = queryset.filter(created_at__date__gte=filters["start_date"])
        if filters.get("end_date"):
            queryset = queryset.filter(created_at__date__lte=filters["end_date"])
        return queryset

    def _users(self, filters):
        queryset = self._created_between(get_user_model().objects.order_by("-created_at"), filters)
        if filters.get("role"):
            queryset = queryset.filter(role=filters["role"])
        if filters.get("search"):
            queryset = queryset.filter(name__icontains=filters["search"])
        return [
            {
                "id": u.id,
                "name": u.name,
                "email": u.email,
                "role": u.role,
                "phone": u.phone or "",
                "created_at": u.created_at,
            }
            for u in queryset
        ]

    def _categories(self, filters):
        queryset = self._created_between(
            Category.objects.annotate(product_count=Count("products")).order_by("-created_at"), filters
        )
        if filters.get("search"):
            queryset = queryset.filter(name__icontains=filters["search"])
        return [
            {
                "id": c.id,
                "name": c.name,
                "description": c.description or "",
                "product_count": c.product_count,
                "created_at": c.created_at,
            }
            for c in queryset
        ]

    def _products(self, filters):
        queryset = self._created_between(Product.objects.select_related("category").order_by("-id"), filters)
        if filters.get("category_id") is not None:
            queryset = queryset.filter(category_id=filters["category_id"])
        if filters.get("search"):
            queryset = queryset.filter(name__icontains=filters["search"])
        if filters.get("min_price") is not None:
            queryset = queryset.filter(price__gte=filters["min_price"])
        if filters.get("max_price") is not None:
            queryset = queryset.filter(price__lte=filters["max_price"])
        return [
            {
                "id": p.id,
                "code": p.code,
                "name": p.name,
                "category": p.category.name,
                "price": p.price,
                "stock": p.stock,
                "created_at": p.created_at,
            }
            for p in queryset
        ]

    def _orders(self, filters):
        queryset = self._created_between(Order.objects.select_related("user").order_by("-created_at", "-id"), filters)
        if filters.get("status"):
            queryset = queryset.filter(status=filters["status"])
        if filters.get("user_id") is not None:
            queryset = queryset.filter(user_id=filters["user_id"])
        if filters.get("min_amount") is not None:
            queryset = queryset.filter(total_amount__gte=filters["min_amount"])
        if filters.get("max_amount") is not None:
            queryset = queryset.filter(total_amount__lte=filters["max_amount"])
        return [
            {
                "id": o.id,
                "customer": o.user.name,
                "email": o.user.email,
                "status": o.status,
                "payment_status": o.payment_status,
                "payment_method": o.payment_method,
                "total_amount": o.total_amount,
                "created_at": o.created_at,
            }
            for o in queryset
        ]

    def _shipments(self, filters):
        queryset = self._created_between(Shipment.objects.order_by("-created_at", "-id"), filters)
        if filters.get("status"):
            queryset = queryset.filter(status=filters["status"])
        if filters.get("courier"):
            queryset = queryset.filter(courier__icontains=filters["courier"])
        if filters.get("order_id") is not None:
            queryset = queryset.filter(order_id=filters["order_id"])
        return [
            {
                "id": s.id,
                "order_id": s.order_id,
                "courier": s.courier,
                "tracking_number": s.tracking_number or "",
                "status": s.status,
                "cost": s.cost,
                "delivered_at": s.delivered_at or "",
                "created_at": s.created_at,
            }
            for s in queryset
        ]

    # Renderers

    @staticmethod
    def render_csv(columns: List[str], rows: List[Dict[str, Any]]) -> str:
        buffer = io.StringIO()
        writer = csv.DictWriter(buffer, fieldnames=columns)
        writer.writeheader()
        writer.writerows(rows)
        return buffer.getvalue()

    @staticmethod
    def render_report(title: str, columns: List[str], rows: List[Dict[str, Any]]) -> str:
        """Fixed-width text table with a title and generation timestamp."""
        cells = [[str(row[col]) for col in columns] for row in rows]
        widths = [max([len(col)] + [len(line[i]) for line in cells]) for i, col in enumerate(columns)]

        def fmt(values):
            return "  ".join(value.ljust(width) for value, width in zip(values, widths)).rstrip()

        lines = [
            title,
            f"Generated: {timezone.now().isoformat()}",
            f"Records: {len(rows)}",
            "",
            fmt(columns),
            fmt(["-" * width for width in widths]),
        ]
        lines.extend(fmt(line) for line in cells)
        return "\n".join(lines) + "\n"

    @BaseService.log_performance
    def export_data(
        self, data_type: str, format: str = "csv", filters: Optional[Dict[str, Any]] = None
    ) -> ServiceResult[Dict[str, Any]]:
        """
        Export one data type and store the file.

        Args:
            data_type: users, categories, products, orders or shipments
            format: ``csv`` or ``pdf`` (plain-text report)
            filters: already validated values. users: role, search;
                categories: search; products: category_id, search, min_price,
                max_price; orders: status, user_id, min_amount, max_amount;
                shipments: status, courier, order_id. Every type accepts
                start_date and end_date (inclusive days on created_at)

        Returns:
            ServiceResult with ``url``, ``filename`` and ``record_count``
        """
        if data_type not in EXPORT_COLUMNS:
            return service_err(ErrorCodes.VALIDATION_ERROR, f"Unsupported export type: {data_type}")
        if format not in EXPORT_FORMATS:
            return service_err(ErrorCodes.VALIDATION_ERROR, f"Unsupported export format: {format}")

        filters = filters or {}
        columns = EXPORT_COLUMNS[data_type]
        extension, content_type = EXPORT_FORMATS[format]

        try:
            rows = getattr(self, f"_{data_type}")(filters)

            if format == "csv":
                content = self.render_csv(columns, rows)
            else:
                content = self.render_report(f"{data_type.capitalize()} export", columns, rows)

            timestamp = timezone.now().strftime("%Y%m%d%H%M%S")
            filename = f"{data_type}-export-{timestamp}.{extension}"
            stored = self.storage.upload(
                ContentFile(content.encode("utf-8")), f"{self.exports_dir}/{filename}", content_type
            )

        except StorageException as e:
            self.logger.error(f"Failed to store {data_type} export: {e}", exc_info=True)
            return service_err(ErrorCodes.INTERNAL_ERROR, "Failed to store export file")
        except Exception as e:
            self.logger.error(f"Error exporting {data_type}: {e}", exc_info=True)
            return service_err(ErrorCodes.INTERNAL_ERROR, "Failed to export data")

        self.logger.info(f"Exported {len(rows)} {data_type} records to {stored.key}")
        return service_ok({"url": stored.url, "filename": os.path.basename(stored.key), "record_count": len(rows)})
