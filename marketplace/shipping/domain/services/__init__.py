from .rate_service import ShippingOption, ShippingRateService
from .shipment_service import ShipmentService


__all__ = [
    "ShipmentService",
    "ShippingRateService",
    "ShippingOption",
]
