import pytest

from booking import BookingCategory, RentalTrip
from core.exceptions import ConfigurationNotFoundError
from pricing.config import PricingConfig
from pricing.models import DiagnosticKind, RentalPackage
from pricing.rental import RentalFareCalculator, price_package, select_cheapest_package
from tests.factories import DEPOT, north_of_depot, rental_packages


def rental_trip(distance_km=50.0, duration_min=300.0, dropoff=None, package_hours=4):
    return RentalTrip(
        vehicle_class="sedan",
        actual_distance_km=distance_km,
        actual_duration_minutes=duration_min,
        package_hours=package_hours,
        dropoff=dropoff or DEPOT,
    )


@pytest.fixture
def calculator():
    return RentalFareCalculator(PricingConfig())


@pytest.mark.unit
class TestPackageSelection:
    def test_costs_every_package(self):
        package_a, package_b = rental_packages()

        cost_a = price_package(package_a, billable_distance_km=50.0, duration_min=300.0)
        cost_b = price_package(package_b, billable_distance_km=50.0, duration_min=300.0)

        # A: 500 + 10 km x 15 + 60 min x 2
        assert cost_a.total == pytest.approx(770.0)
        assert cost_a.extra_km == pytest.approx(10.0)
        assert cost_a.extra_minutes == pytest.approx(60.0)
        assert cost_b.total == pytest.approx(650.0)

    def test_cheapest_package_wins(self):
        selected = select_cheapest_package(rental_packages(), 50.0, 300.0)

        assert selected.package.package_name == "6 hrs / 60 km"

    def test_tie_keeps_first_package(self):
        first = RentalPackage(
            package_name="first", duration_hours=4, km_included=40, base_fare=600,
            extra_km_rate=10,
        )
        second = first.model_copy(update={"package_name": "second"})

        selected = select_cheapest_package([first, second], 20.0, 60.0)

        assert selected.package.package_name == "first"

    def test_empty_package_list_rejected(self):
        with pytest.raises(ValueError):
            select_cheapest_package([], 10.0, 10.0)


@pytest.mark.unit
class TestRentalFare:
    def test_selects_lower_total_package_over_booked_one(self, calculator, rate_source):
        fare = calculator.calculate(rental_trip(), rate_source).breakdown

        assert fare.booking_category == BookingCategory.RENTAL
        assert fare.details.package_name == "6 hrs / 60 km"
        assert fare.details.booked_package_hours == 4
        assert fare.base_fare == 650.0
        assert fare.extra_km_charges == 0.0
        assert fare.time_fare == 0.0
        assert fare.distance_fare == 0.0
        assert fare.details.within_allowance is True
        assert fare.platform_fee == 20.0
        assert fare.total_fare == 706.0

    def test_override_of_booked_package_is_logged(self, calculator, rate_source, caplog):
        with caplog.at_level("INFO", logger="pricing.rental"):
            calculator.calculate(rental_trip(), rate_source)

        assert any("instead of booked 4 h" in r.getMessage() for r in caplog.records)

    def test_return_to_depot_distance_is_billed(self, calculator, rate_source):
        fare = calculator.calculate(
            rental_trip(distance_km=35.0, duration_min=120.0, dropoff=north_of_depot(10)),
            rate_source,
        ).breakdown

        assert fare.details.distance_to_depot_km == pytest.approx(10.0, rel=1e-6)
        assert fare.details.total_distance_with_return_km == pytest.approx(45.0, rel=1e-6)
        assert fare.details.package_name == "4 hrs / 40 km"
        assert fare.extra_km_charges == pytest.approx(75.0, rel=1e-6)
        assert fare.details.within_allowance is False

    def test_extra_time_measured_against_selected_package(self, calculator, rate_source):
        fare = calculator.calculate(
            rental_trip(distance_km=10.0, duration_min=270.0), rate_source
        ).breakdown

        assert fare.details.package_name == "4 hrs / 40 km"
        assert fare.details.extra_minutes == pytest.approx(30.0)
        assert fare.time_fare == pytest.approx(60.0)
        assert fare.gst_on_charges == pytest.approx((500.0 + 60.0) * 0.05)

    def test_no_packages_raises(self, calculator, rate_source):
        rate_source.rental = {}

        with pytest.raises(
            ConfigurationNotFoundError, match="Rental fare configuration not found"
        ):
            calculator.calculate(rental_trip(), rate_source)

    def test_missing_fare_matrix_row_uses_rental_fallback(self, calculator, rate_source):
        del rate_source.rates[(BookingCategory.RENTAL, "sedan")]

        result = calculator.calculate(rental_trip(), rate_source)

        assert result.breakdown.platform_fee == 20.0
        assert result.diagnostics.of_kind(DiagnosticKind.FALLBACK)
