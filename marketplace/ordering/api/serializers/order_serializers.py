from rest_framework import serializers

from marketplace.ordering.domain.models.order import Order, OrderItem


class OrderCustomerSerializer(serializers.Serializer):
    id = serializers.IntegerField(read_only=True)
    name = serializers.CharField(read_only=True)
    email = serializers.EmailField(read_only=True)


class OrderItemSerializer(serializers.ModelSerializer):
    product_id = serializers.IntegerField(read_only=True)
    product_name = serializers.CharField(source="product.name", read_only=True)
    product_code = serializers.CharField(source="product.code", read_only=True)
    subtotal = serializers.DecimalField(max_digits=12, decimal_places=2, read_only=True)

    class Meta:
        model = OrderItem
        fields = ["id", "product_id", "product_name", "product_code", "quantity", "price", "subtotal"]
        read_only_fields = fields


class OrderSerializer(serializers.ModelSerializer):
    customer = OrderCustomerSerializer(source="user", read_only=True)
    items = OrderItemSerializer(many=True, read_only=True)

    class Meta:
        model = Order
        fields = [
            "id",
            "customer",
            "status",
            "total_amount",
            "shipping_address",
            "shipping_method",
            "shipping_cost",
            "payment_method",
            "payment_status",
            "transaction_id",
            "items",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class OrderSummarySerializer(serializers.ModelSerializer):
    """Order row without items, used by dashboards and shipment listings."""

    customer_name = serializers.CharField(source="user.name", read_only=True)

    class Meta:
        model = Order
        fields = ["id", "customer_name", "status", "payment_status", "total_amount", "created_at"]
        read_only_fields = fields
