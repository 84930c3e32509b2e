# Marketplace API Serializers

# Import response serializers for API documentation
from .response_serializers import (
    AddToCartRequestSerializer,
    CartResponseSerializer,
    CheckoutRequestSerializer,
    CreateShipmentRequestSerializer,
    ErrorResponseSerializer,
    ExportRequestSerializer,
    ExportResponseSerializer,
    HealthResponseSerializer,
    OrderListResponseSerializer,
    PaginatedResponseSerializer,
    PaymentRequestSerializer,
    PaymentResponseSerializer,
    ProductListResponseSerializer,
    ShippingOptionSerializer,
    ShippingRateRequestSerializer,
    SuccessResponseSerializer,
    UpdateCartRequestSerializer,
    UpdateOrderRequestSerializer,
    UpdateShipmentRequestSerializer,
)


__all__ = [
    "AddToCartRequestSerializer",
    "CartResponseSerializer",
    "CheckoutRequestSerializer",
    "CreateShipmentRequestSerializer",
    "ErrorResponseSerializer",
    "ExportRequestSerializer",
    "ExportResponseSerializer",
    "HealthResponseSerializer",
    "OrderListResponseSerializer",
    "PaginatedResponseSerializer",
    "PaymentRequestSerializer",
    "PaymentResponseSerializer",
    "ProductListResponseSerializer",
    "ShippingOptionSerializer",
    "ShippingRateRequestSerializer",
    "SuccessResponseSerializer",
    "UpdateCartRequestSerializer",
    "UpdateOrderRequestSerializer",
    "UpdateShipmentRequestSerializer",
]
