"""
Response Serializers for Marketplace API Documentation

These serializers describe request bodies and response shapes for OpenAPI
schema generation. Request serializers are also used for input validation.
"""

from decimal import Decimal

from rest_framework import serializers

from authentication.domain.models import CustomUser
from marketplace.ordering.domain.models.order import Order
from marketplace.shipping.domain.models.shipment import Shipment

# ===== Common Response Serializers =====


class ErrorResponseSerializer(serializers.Serializer):
    """Standard error response"""

    detail = serializers.CharField(help_text="Human-readable error message")


class SuccessResponseSerializer(serializers.Serializer):
    """Generic success response"""

    message = serializers.CharField(help_text="Success message")


class PaginatedResponseSerializer(serializers.Serializer):
    total = serializers.IntegerField(help_text="Total number of matching records")
    page = serializers.IntegerField(help_text="Current page number")
    limit = serializers.IntegerField(help_text="Items per page (max 100)")
    num_pages = serializers.IntegerField(help_text="Total number of pages")


# ===== Product Response Serializers =====


class ProductListResponseSerializer(PaginatedResponseSerializer):
    """Paginated product list response"""

    products = serializers.ListField(
        child=serializers.DictField(), help_text="List of products (see ProductSerializer schema)"
    )


# ===== Cart Request/Response Serializers =====


class AddToCartRequestSerializer(serializers.Serializer):
    """Request body for adding an item to cart"""

    product_id = serializers.IntegerField(help_text="Product ID to add")
    quantity = serializers.IntegerField(min_value=1, default=1, help_text="Quantity to add (default: 1)")


class UpdateCartRequestSerializer(serializers.Serializer):
    """Request body for updating a cart line"""

    quantity = serializers.IntegerField(min_value=1, help_text="New quantity")


class CartResponseSerializer(serializers.Serializer):
    """Shopping cart response"""

    items = serializers.ListField(child=serializers.DictField(), help_text="Cart lines with product details")
    subtotal = serializers.DecimalField(max_digits=12, decimal_places=2, help_text="Sum of price x quantity")
    items_count = serializers.IntegerField(help_text="Number of cart lines")
    total_quantity = serializers.IntegerField(help_text="Total units across all lines")


# ===== Order Request/Response Serializers =====


class CheckoutRequestSerializer(serializers.Serializer):
    """Request body for checking out the cart"""

    shipping_address = serializers.CharField(help_text="Delivery address")
    shipping_method = serializers.CharField(
        max_length=50, default="standard", help_text="standard, express or overnight"
    )
    payment_method = serializers.CharField(max_length=50, help_text="credit_card, bank_transfer or e_wallet")


class UpdateOrderRequestSerializer(serializers.Serializer):
    """Request body for an admin order update"""

    status = serializers.ChoiceField(choices=Order.STATUS_CHOICES, required=False)
    payment_status = serializers.ChoiceField(choices=Order.PAYMENT_STATUS_CHOICES, required=False)

    def validate(self, attrs):
        if not attrs:
            raise serializers.ValidationError("Provide status or payment_status")
        return attrs


class OrderListResponseSerializer(PaginatedResponseSerializer):
    """Paginated order list response"""

    orders = serializers.ListField(child=serializers.DictField(), help_text="List of orders")


class PaymentRequestSerializer(serializers.Serializer):
    payment_method = serializers.CharField(max_length=50, help_text="credit_card, bank_transfer or e_wallet")
    amount = serializers.DecimalField(max_digits=12, decimal_places=2, help_text="Amount to pay, must match order total")


class PaymentResponseSerializer(serializers.Serializer):
    success = serializers.BooleanField()
    order_id = serializers.IntegerField()
    transaction_id = serializers.CharField()
    payment_url = serializers.URLField()
    status = serializers.CharField(help_text="Order status after the charge")
    payment_status = serializers.CharField(help_text="Order payment status after the charge")


# ===== Shipping Request/Response Serializers =====


class CreateShipmentRequestSerializer(serializers.Serializer):
    order_id = serializers.IntegerField()
    courier = serializers.CharField(max_length=100)
    tracking_number = serializers.CharField(max_length=100, required=False, allow_null=True, allow_blank=True)
    cost = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=Decimal("0.01"))
    estimated_delivery = serializers.DateTimeField(required=False, allow_null=True)


class UpdateShipmentRequestSerializer(serializers.Serializer):
    tracking_number = serializers.CharField(max_length=100, required=False)
    status = serializers.ChoiceField(choices=Shipment.STATUS_CHOICES, required=False)
    delivered_at = serializers.DateTimeField(required=False)


class ShippingRateRequestSerializer(serializers.Serializer):
    destination = serializers.CharField(help_text="Destination city, e.g. Jakarta")
    weight = serializers.DecimalField(max_digits=6, decimal_places=2, help_text="Parcel weight in kg")


class ShippingOptionSerializer(serializers.Serializer):
    courier = serializers.CharField()
    service = serializers.CharField()
    cost = serializers.DecimalField(max_digits=12, decimal_places=0)
    estimated_days = serializers.IntegerField()


# ===== Reporting Request/Response Serializers =====


class ExportFilterSerializer(serializers.Serializer):
    """Creation date range shared by every export type, inclusive calendar days."""

    start_date = serializers.DateField(required=False)
    end_date = serializers.DateField(required=False)


class UserExportFilterSerializer(ExportFilterSerializer):
    role = serializers.ChoiceField(choices=CustomUser.ROLE_CHOICES, required=False)
    search = serializers.CharField(required=False, help_text="Case-insensitive match on name")


class CategoryExportFilterSerializer(ExportFilterSerializer):
    search = serializers.CharField(required=False, help_text="Case-insensitive match on name")


class ProductExportFilterSerializer(ExportFilterSerializer):
    category_id = serializers.IntegerField(required=False)
    search = serializers.CharField(required=False, help_text="Case-insensitive match on name")
    min_price = serializers.DecimalField(max_digits=10, decimal_places=2, required=False)
    max_price = serializers.DecimalField(max_digits=10, decimal_places=2, required=False)


class OrderExportFilterSerializer(ExportFilterSerializer):
    status = serializers.ChoiceField(choices=Order.STATUS_CHOICES, required=False)
    user_id = serializers.IntegerField(required=False)
    min_amount = serializers.DecimalField(max_digits=12, decimal_places=2, required=False)
    max_amount = serializers.DecimalField(max_digits=12, decimal_places=2, required=False)


class ShipmentExportFilterSerializer(ExportFilterSerializer):
    status = serializers.ChoiceField(choices=Shipment.STATUS_CHOICES, required=False)
    courier = serializers.CharField(required=False, help_text="Case-insensitive match on courier")
    order_id = serializers.IntegerField(required=False)


EXPORT_FILTER_SERIALIZERS = {
    "users": UserExportFilterSerializer,
    "categories": CategoryExportFilterSerializer,
    "products": ProductExportFilterSerializer,
    "orders": OrderExportFilterSerializer,
    "shipments": ShipmentExportFilterSerializer,
}


class ExportRequestSerializer(serializers.Serializer):
    type = serializers.ChoiceField(choices=list(EXPORT_FILTER_SERIALIZERS))
    format = serializers.ChoiceField(choices=["csv", "pdf"], default="csv")
    filters = serializers.DictField(
        required=False,
        default=dict,
        help_text=(
            "users: role, search; categories: search; products: category_id, search, "
            "min_price, max_price; orders: status, user_id, min_amount, max_amount; "
            "shipments: status, courier, order_id. Every type: start_date, end_date"
        ),
    )

    def validate(self, attrs):
        """Validate ``filters`` against the fields supported by the chosen type."""
        filter_serializer = EXPORT_FILTER_SERIALIZERS[attrs["type"]](data=attrs.get("filters") or {})
        if not filter_serializer.is_valid():
            raise serializers.ValidationError({"filters": filter_serializer.errors})
        attrs["filters"] = dict(filter_serializer.validated_data)
        return attrs


class ExportResponseSerializer(serializers.Serializer):
    url = serializers.CharField(help_text="Where the export file can be downloaded")
    filename = serializers.CharField()
    record_count = serializers.IntegerField()


class HealthResponseSerializer(serializers.Serializer):
    status = serializers.CharField()
    timestamp = serializers.DateTimeField()
