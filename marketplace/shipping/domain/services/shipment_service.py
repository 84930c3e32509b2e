"""
ShipmentService - courier shipments attached to orders.

Creating a shipment moves the order to ``shipped``; delivering it moves the
order to ``completed``.
"""

from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from django.db import transaction
from django.utils import timezone

from marketplace.infra.observability.metrics import shipments_created_total
from marketplace.ordering.domain.models.order import Order
from marketplace.services.base import BaseService, ErrorCodes, ServiceResult, service_err, service_ok
from marketplace.shipping.domain.models.shipment import Shipment


class ShipmentService(BaseService):
    @BaseService.log_performance
    @transaction.atomic
    def create_shipment(
        self,
        order_id,
        courier: str,
        cost: Decimal,
        tracking_number: Optional[str] = None,
        estimated_delivery: Optional[datetime] = None,
    ) -> ServiceResult[Shipment]:
        try:
            order = Order.objects.get(pk=order_id)
        except Order.DoesNotExist:
            return service_err(ErrorCodes.ORDER_NOT_FOUND, "Order not found")

        shipment = Shipment.objects.create(
            order=order,
            courier=courier,
            tracking_number=tracking_number,
            cost=cost,
            estimated_delivery=estimated_delivery,
        )

        order.status = Order.STATUS_SHIPPED
        order.save(update_fields=["status", "updated_at"])

        shipments_created_total.labels(courier=courier).inc()
        self.logger.info(f"Shipment {shipment.id} created for order {order.id} via {courier}")
        return service_ok(shipment)

    @BaseService.log_performance
    def list_shipments(self) -> ServiceResult[List[Shipment]]:
        """All shipments newest first, with their order and customer loaded."""
        return service_ok(list(Shipment.objects.select_related("order", "order__user").order_by("-created_at", "-id")))

    @BaseService.log_performance
    @transaction.atomic
    def update_shipment(
        self,
        shipment_id,
        tracking_number: Optional[str] = None,
        status: Optional[str] = None,
        delivered_at: Optional[datetime] = None,
    ) -> ServiceResult[Shipment]:
        """
        Update tracking data or status.

        Passing ``status="delivered"`` stamps ``delivered_at`` when it was not
        supplied and completes the order. Updates that leave the status alone do
        not touch the order.
        """
        try:
            shipment = Shipment.objects.select_related("order").get(pk=shipment_id)
        except Shipment.DoesNotExist:
            return service_err(ErrorCodes.SHIPMENT_NOT_FOUND, "Shipment not found")

        if status is not None and status not in dict(Shipment.STATUS_CHOICES):
            return service_err(ErrorCodes.VALIDATION_ERROR, f"Invalid shipment status: {status}")

        if tracking_number is not None:
            shipment.tracking_number = tracking_number
        if delivered_at is not None:
            shipment.delivered_at = delivered_at
        if status is not None:
            shipment.status = status

        # Only an incoming delivered status completes the order
        if status == Shipment.STATUS_DELIVERED:
            if shipment.delivered_at is None:
                shipment.delivered_at = timezone.now()
            order = shipment.order
            order.status = Order.STATUS_COMPLETED
            order.save(update_fields=["status", "updated_at"])

        shipment.save()
        self.logger.info(f"Shipment {shipment.id} updated: status={shipment.status}")
        return service_ok(shipment)

    @BaseService.log_performance
    def track_shipment(self, order_id, user=None) -> ServiceResult[Optional[Shipment]]:
        """
        First shipment of an order, or None when nothing has shipped yet.

        Customers may only track their own orders.
        """
        orders = Order.objects.all()
        if user is not None and not user.is_admin():
            orders = orders.filter(user=user)
        if not orders.filter(pk=order_id).exists():
            return service_err(ErrorCodes.ORDER_NOT_FOUND, "Order not found")

        return service_ok(Shipment.objects.filter(order_id=order_id).order_by("created_at", "id").first())
