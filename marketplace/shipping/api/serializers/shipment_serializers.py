from rest_framework import serializers

from marketplace.ordering.api.serializers import OrderSummarySerializer
from marketplace.shipping.domain.models.shipment import Shipment


class ShipmentSerializer(serializers.ModelSerializer):
    order = OrderSummarySerializer(read_only=True)

    class Meta:
        model = Shipment
        fields = [
            "id",
            "order",
            "courier",
            "tracking_number",
            "cost",
            "status",
            "estimated_delivery",
            "delivered_at",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields
