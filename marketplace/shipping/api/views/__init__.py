from .shipment_views import ShipmentViewSet


__all__ = ["ShipmentViewSet"]
