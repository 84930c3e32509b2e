from rest_framework import serializers

from marketplace.catalog.api.serializers import ProductSerializer
from marketplace.ordering.api.serializers import OrderSummarySerializer


class TopSellingProductSerializer(serializers.Serializer):
    product_id = serializers.IntegerField()
    name = serializers.CharField()
    code = serializers.CharField()
    quantity_sold = serializers.IntegerField()
    revenue = serializers.DecimalField(max_digits=14, decimal_places=2)


class DashboardStatsSerializer(serializers.Serializer):
    total_users = serializers.IntegerField()
    total_products = serializers.IntegerField()
    total_orders = serializers.IntegerField()
    total_revenue = serializers.DecimalField(max_digits=14, decimal_places=2)
    pending_orders = serializers.IntegerField()
    low_stock_products = ProductSerializer(many=True)
    recent_orders = OrderSummarySerializer(many=True)
    top_selling_products = TopSellingProductSerializer(many=True)
