from .order_service import OrderService
from .payment_service import PaymentResult, PaymentService


__all__ = [
    "OrderService",
    "PaymentService",
    "PaymentResult",
]
