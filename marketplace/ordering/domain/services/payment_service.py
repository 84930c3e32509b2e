"""
PaymentService - order payments.

Validates a payment request against the order, charges it through the
configured ``PaymentProviderInterface`` and records the outcome on the order.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import List

from django.conf import settings
from django.db import transaction

from infrastructure.payments import PaymentProviderInterface, PaymentStatus
from marketplace.infra.observability.metrics import payments_processed_total
from marketplace.ordering.domain.models.order import Order
from marketplace.services.base import BaseService, ErrorCodes, ServiceResult, service_err, service_ok


AMOUNT_TOLERANCE = Decimal("0.009")
DEFAULT_PAYMENT_METHODS = ["credit_card", "bank_transfer", "e_wallet"]


@dataclass
class PaymentResult:
    """Outcome of an accepted payment request."""

    order_id: int
    transaction_id: str
    payment_url: str
    status: str
    payment_status: str


class PaymentService(BaseService):
    def __init__(self, payment_provider: PaymentProviderInterface):
        super().__init__()
        self.payment_provider = payment_provider

    @property
    def payment_methods(self) -> List[str]:
        return getattr(settings, "PAYMENT_METHODS", DEFAULT_PAYMENT_METHODS)

    @BaseService.log_performance
    def process_payment(
        self, order_id, payment_method: str, amount: Decimal, user=None
    ) -> ServiceResult[PaymentResult]:
        """
        Pay for an order.

        Checks, in order: the order exists (and belongs to ``user`` when a
        customer is paying), it is not already paid, ``amount`` matches the order
        total within 0.009, and the method is supported. Deferred methods such as
        bank transfers leave the order pending; the others mark it paid.

        Returns:
            ServiceResult with a PaymentResult, or an error code from ``ErrorCodes``
        """
        queryset = Order.objects.all()
        if user is not None and not user.is_admin():
            queryset = queryset.filter(user=user)

        order = queryset.filter(pk=order_id).first()
        if order is None:
            return service_err(ErrorCodes.ORDER_NOT_FOUND, "Order not found")

        if order.payment_status == Order.PAYMENT_PAID:
            return service_err(ErrorCodes.ORDER_ALREADY_PAID, "Order has already been paid")

        if abs(Decimal(str(amount)) - order.total_amount) > AMOUNT_TOLERANCE:
            return service_err(ErrorCodes.AMOUNT_MISMATCH, "Payment amount does not match order total")

        if payment_method not in self.payment_methods:
            return service_err(ErrorCodes.INVALID_PAYMENT_METHOD, "Invalid payment method")

        try:
            with transaction.atomic():
                charge = self.payment_provider.charge(
                    amount=order.total_amount,
                    payment_method=payment_method,
                    reference=str(order.id),
                    metadata={"user_id": order.user_id},
                )

                if charge.status == PaymentStatus.SUCCEEDED:
                    order.status = Order.STATUS_PAID
                    order.payment_status = Order.PAYMENT_PAID
                order.payment_method = payment_method
                order.transaction_id = charge.transaction_id
                order.save(update_fields=["status", "payment_status", "payment_method", "transaction_id", "updated_at"])

        except Exception as e:
            self.logger.error(f"Payment processing failed for order {order.id}: {e}", exc_info=True)
            Order.objects.filter(pk=order.pk).update(payment_status=Order.PAYMENT_FAILED)
            payments_processed_total.labels(payment_method=payment_method, outcome="error").inc()
            return service_err(ErrorCodes.PAYMENT_PROVIDER_ERROR, "Internal payment processing error")

        payments_processed_total.labels(payment_method=payment_method, outcome=charge.status.value).inc()
        self.logger.info(
            f"Payment {charge.transaction_id} for order {order.id}: method={payment_method}, "
            f"status={order.status}, payment_status={order.payment_status}"
        )

        return service_ok(
            PaymentResult(
                order_id=order.id,
                transaction_id=charge.transaction_id,
                payment_url=charge.payment_url,
                status=order.status,
                payment_status=order.payment_status,
            )
        )
