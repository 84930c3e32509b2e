from decimal import Decimal

import pytest

from marketplace.services.base import ErrorCodes
from marketplace.shipping.domain.services import ShippingRateService


@pytest.mark.unit
class TestShippingRateServiceUnit:
    def setup_method(self):
        self.service = ShippingRateService()

    def _by_service(self, options):
        return {(option.courier, option.service): option for option in options}

    def test_jakarta_one_kg(self):
        result = self.service.calculate_shipping("Jakarta", Decimal("1"))
        assert result.ok

        options = self._by_service(result.value)
        assert len(options) == 8
        assert options[("JNE", "Regular")].cost == Decimal("10000")
        assert options[("JNE", "Regular")].estimated_days == 3
        assert options[("TIKI", "Express")].cost == Decimal("14200")
        assert options[("Pos Indonesia", "Regular")].cost == Decimal("7800")

    def test_options_sorted_by_cost(self):
        options = self.service.calculate_shipping("surabaya", Decimal("2")).value
        costs = [option.cost for option in options]
        assert costs == sorted(costs)
        assert (options[0].courier, options[0].service) == ("JNE", "Cargo")

    def test_destination_lookup_is_case_insensitive(self):
        upper = self.service.calculate_shipping("BANDUNG", Decimal("1")).value
        lower = self.service.calculate_shipping("bandung", Decimal("1")).value
        assert [o.cost for o in upper] == [o.cost for o in lower]

    def test_multiplier_applied_and_rounded_half_up(self):
        # JNE Regular in Bandung: (8000 + 1.5 * 2000) * 1.3 = 14300
        options = self._by_service(self.service.calculate_shipping("Bandung", Decimal("1.5")).value)
        assert options[("JNE", "Regular")].cost == Decimal("14300")
        # TIKI Regular: (7500 + 1.5 * 2200) * 1.3 = 14040
        assert options[("TIKI", "Regular")].cost == Decimal("14040")

    def test_unknown_destination_uses_default_multiplier(self):
        options = self._by_service(self.service.calculate_shipping("Atlantis", Decimal("1")).value)
        # (8000 + 2000) * 2.0
        assert options[("JNE", "Regular")].cost == Decimal("20000")
        assert options[("JNE", "Regular")].estimated_days == 3

    def test_heavy_parcel_surcharge(self):
        options = self._by_service(self.service.calculate_shipping("Jakarta", Decimal("12")).value)
        # (8000 + 12 * 2000) * 1.0 + (12 - 10) * 1000
        assert options[("JNE", "Regular")].cost == Decimal("34000")

    def test_far_destinations_add_days(self):
        medan = self._by_service(self.service.calculate_shipping("Medan", Decimal("1")).value)
        assert medan[("JNE", "Regular")].estimated_days == 4

        jayapura = self._by_service(self.service.calculate_shipping("Jayapura", Decimal("1")).value)
        assert jayapura[("JNE", "Express")].estimated_days == 3

        makassar = self._by_service(self.service.calculate_shipping("Makassar", Decimal("1")).value)
        assert makassar[("JNE", "Regular")].estimated_days == 4

    def test_destination_required(self):
        result = self.service.calculate_shipping("   ", Decimal("1"))
        assert not result.ok
        assert result.error == ErrorCodes.VALIDATION_ERROR

    @pytest.mark.parametrize("weight", [Decimal("0"), Decimal("-1")])
    def test_weight_must_be_positive(self, weight):
        result = self.service.calculate_shipping("Jakarta", weight)
        assert not result.ok
        assert result.error_detail == "Weight must be greater than 0"

    def test_weight_limit(self):
        assert self.service.calculate_shipping("Jakarta", Decimal("50")).ok

        result = self.service.calculate_shipping("Jakarta", Decimal("50.5"))
        assert not result.ok
        assert result.error == ErrorCodes.WEIGHT_LIMIT_EXCEEDED
        assert result.error_detail == "Weight exceeds maximum limit of 50kg for regular shipping"
