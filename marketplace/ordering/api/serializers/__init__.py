from .order_serializers import OrderItemSerializer, OrderSerializer, OrderSummarySerializer


__all__ = ["OrderItemSerializer", "OrderSerializer", "OrderSummarySerializer"]
