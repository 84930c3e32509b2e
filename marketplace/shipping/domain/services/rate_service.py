"""
ShippingRateService - courier rate quotes.

Quotes come from a static courier table scaled by a destination multiplier.
Amounts are in rupiah.
"""

from dataclasses import asdict, dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Dict, List

from django.conf import settings

from marketplace.services.base import BaseService, ErrorCodes, ServiceResult, service_err, service_ok


# courier -> service -> (base cost, cost per kg, estimated days)
SHIPPING_RATES: Dict[str, Dict[str, tuple]] = {
    "JNE": {
        "Regular": (Decimal("8000"), Decimal("2000"), 3),
        "Express": (Decimal("12000"), Decimal("3000"), 1),
        "Cargo": (Decimal("6000"), Decimal("1500"), 5),
    },
    "TIKI": {
        "Regular": (Decimal("7500"), Decimal("2200"), 3),
        "Express": (Decimal("11000"), Decimal("3200"), 1),
        "Economy": (Decimal("5500"), Decimal("1800"), 4),
    },
    "Pos Indonesia": {
        "Regular": (Decimal("6000"), Decimal("1800"), 4),
        "Express": (Decimal("9000"), Decimal("2500"), 2),
    },
}

DESTINATION_MULTIPLIERS: Dict[str, Decimal] = {
    "jakarta": Decimal("1.0"),
    "bekasi": Decimal("1.1"),
    "tangerang": Decimal("1.1"),
    "depok": Decimal("1.1"),
    "bogor": Decimal("1.2"),
    "bandung": Decimal("1.3"),
    "semarang": Decimal("1.5"),
    "yogyakarta": Decimal("1.6"),
    "surabaya": Decimal("1.8"),
    "malang": Decimal("1.9"),
    "palembang": Decimal("2.0"),
    "medan": Decimal("2.2"),
    "denpasar": Decimal("2.3"),
    "makassar": Decimal("2.5"),
    "balikpapan": Decimal("2.8"),
    "manado": Decimal("3.0"),
    "jayapura": Decimal("4.0"),
}
DEFAULT_MULTIPLIER = Decimal("2.0")

# Parcels above this weight pay a surcharge per extra kg
HEAVY_PARCEL_KG = Decimal("10")
HEAVY_PARCEL_SURCHARGE_PER_KG = Decimal("1000")


@dataclass
class ShippingOption:
    courier: str
    service: str
    cost: Decimal
    estimated_days: int

    def to_dict(self) -> dict:
        return asdict(self)


class ShippingRateService(BaseService):
    def __init__(self):
        super().__init__()
        self.max_weight = Decimal(str(getattr(settings, "SHIPPING_MAX_WEIGHT_KG", "50")))

    @staticmethod
    def destination_multiplier(destination: str) -> Decimal:
        return DESTINATION_MULTIPLIERS.get(destination.strip().lower(), DEFAULT_MULTIPLIER)

    @staticmethod
    def extra_days(multiplier: Decimal) -> int:
        if multiplier > Decimal("2.5"):
            return 2
        if multiplier > Decimal("2.0"):
            return 1
        return 0

    @BaseService.log_performance
    def calculate_shipping(self, destination: str, weight_kg) -> ServiceResult[List[ShippingOption]]:
        """
        Quote every courier service for a parcel, cheapest first.

        cost = round((base + weight * per_kg) * multiplier), plus 1000 per kg
        above 10 kg.

        Example:
            >>> options = rate_service.calculate_shipping("Jakarta", Decimal("1")).value
            >>> options[0].courier, options[0].cost
            ('TIKI', Decimal('7300'))
        """
        if not destination or not destination.strip():
            return service_err(ErrorCodes.VALIDATION_ERROR, "Destination is required")

        weight = Decimal(str(weight_kg))
        if weight <= 0:
            return service_err(ErrorCodes.VALIDATION_ERROR, "Weight must be greater than 0")
        if weight > self.max_weight:
            return service_err(
                ErrorCodes.WEIGHT_LIMIT_EXCEEDED,
                f"Weight exceeds maximum limit of {self.max_weight}kg for regular shipping",
            )

        multiplier = self.destination_multiplier(destination)
        extra_days = self.extra_days(multiplier)

        surcharge = Decimal("0")
        if weight > HEAVY_PARCEL_KG:
            surcharge = (weight - HEAVY_PARCEL_KG) * HEAVY_PARCEL_SURCHARGE_PER_KG

        options = []
        for courier, services in SHIPPING_RATES.items():
            for service_name, (base, per_kg, days) in services.items():
                cost = ((base + weight * per_kg) * multiplier).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
                options.append(
                    ShippingOption(
                        courier=courier,
                        service=service_name,
                        cost=cost + surcharge,
                        estimated_days=days + extra_days,
                    )
                )

        options.sort(key=lambda option: option.cost)
        self.logger.info(
            f"Shipping quote for {destination} ({weight}kg): multiplier={multiplier}, {len(options)} options"
        )
        return service_ok(options)
