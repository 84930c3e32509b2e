from .shipment_serializers import ShipmentSerializer


__all__ = ["ShipmentSerializer"]
