"""Fare calculation service implementing business logic."""

from decimal import Decimal, ROUND_HALF_UP, localcontext
from typing import Mapping, Optional, Protocol, Tuple, runtime_checkable
from abc import ABC, abstractmethod
import logging
import math

from ridefare.models import FareBreakdown, PromoRule, TripInput, VehicleRate
from ridefare.config import NONE_PROMO_CODE, settings

logger = logging.getLogger(__name__)

NO_PROMO = PromoRule(percentage=0.0, cap_amount=0.0)

_CENT = Decimal("0.01")

# Enough digits for any finite float plus the two decimals
_MONEY_PRECISION = 400


def round_money(value: float) -> float:
    """
    Round a monetary amount to 2 decimal places, half away from zero.

    The float is converted through its shortest repr so that 2.675 rounds
    to 2.68 as written rather than by its binary approximation. Non-finite
    values are returned unchanged.
    """
    if not math.isfinite(value):
        return value
    with localcontext() as ctx:
        ctx.prec = _MONEY_PRECISION
        return float(Decimal(repr(value)).quantize(_CENT, rounding=ROUND_HALF_UP))


def normalize_promo_code(raw: str) -> str:
    """Strip surrounding whitespace and uppercase."""
    return raw.strip().upper()


def resolve_promo(raw: str, promo_registry: Mapping[str, PromoRule]) -> Tuple[str, PromoRule]:
    """
    Look up a promo code in the registry.

    Unknown codes resolve to NONE with no discount instead of failing.
    NONE is available even when the registry does not list it.
    """
    code = normalize_promo_code(raw)
    if code in promo_registry:
        return code, promo_registry[code]
    return NONE_PROMO_CODE, promo_registry.get(NONE_PROMO_CODE, NO_PROMO)


def compute_fare(
    trip: TripInput,
    rate: VehicleRate,
    peak_multiplier: float,
    minimum_fare: float,
    promo_registry: Mapping[str, PromoRule],
) -> FareBreakdown:
    """
    Compute an itemized fare for a trip.

    Only the distance cost is scaled by the peak multiplier. The discount is
    min(subtotal * percentage, cap) and the payable total is floored at the
    minimum fare. Each monetary field is rounded independently from its
    unrounded value.

    Inputs are assumed valid; nothing is raised and nothing is mutated.
    """
    code, promo = resolve_promo(trip.promo_code_raw, promo_registry)

    distance_cost_off_peak = trip.distance_km * rate.per_km_rate
    time_cost = trip.duration_min * rate.per_minute_rate if rate.per_minute_rate else 0.0
    multiplier = peak_multiplier if trip.is_peak else 1.0
    distance_cost_final = distance_cost_off_peak * multiplier
    subtotal = rate.base_fare + rate.booking_fee + distance_cost_final + time_cost

    discount = min(subtotal * promo.percentage, promo.cap_amount)
    discount = min(max(discount, 0.0), subtotal)

    total_before_minimum = subtotal - discount
    total_payable = max(total_before_minimum, minimum_fare)

    return FareBreakdown(
        base=round_money(rate.base_fare),
        booking_fee=round_money(rate.booking_fee),
        distance_cost_off_peak=round_money(distance_cost_off_peak),
        time_cost=round_money(time_cost),
        peak_multiplier_applied=multiplier,
        distance_cost_final=round_money(distance_cost_final),
        subtotal=round_money(subtotal),
        resolved_promo_code=code,
        discount_applied=round_money(discount),
        total_before_minimum=round_money(total_before_minimum),
        total_payable=round_money(total_payable),
    )


@runtime_checkable
class FareCalculatorInterface(Protocol):
    """
    Interface for fare calculation.
    Presentation layers depend on this protocol rather than a concrete class.
    """

    def calculate_fare(self, trip: TripInput, vehicle_class: str) -> FareBreakdown:
        """Calculate the fare breakdown for a trip in a vehicle class."""
        ...


class BaseFareCalculator(ABC):
    """Abstract base class holding the pricing constants."""

    def __init__(self, peak_multiplier: float, minimum_fare: float,
                 promo_registry: Mapping[str, PromoRule]):
        self.peak_multiplier = peak_multiplier
        self.minimum_fare = minimum_fare
        self.promo_registry = promo_registry

    @abstractmethod
    def get_rate(self, vehicle_class: str) -> VehicleRate:
        """
        Look up the rate for a vehicle class.
        Must be implemented by subclasses.
        """
        pass

    def calculate_fare(self, trip: TripInput, vehicle_class: str) -> FareBreakdown:
        """
        Calculate the fare breakdown for a trip.

        Raises:
            KeyError: If the vehicle class has no rate
        """
        rate = self.get_rate(vehicle_class)
        breakdown = compute_fare(
            trip, rate, self.peak_multiplier, self.minimum_fare, self.promo_registry
        )
        if (breakdown.resolved_promo_code == NONE_PROMO_CODE
                and normalize_promo_code(trip.promo_code_raw) not in ("", NONE_PROMO_CODE)):
            logger.info("Unknown promo code %r, no discount applied", trip.promo_code_raw)
        logger.debug(
            "Quoted %s %.2f km peak=%s: payable %.2f",
            vehicle_class, trip.distance_km, trip.is_peak, breakdown.total_payable,
        )
        return breakdown


class TableFareCalculator(BaseFareCalculator):
    """Fare calculator over an explicit rate table."""

    def __init__(self, vehicle_rates: Mapping[str, VehicleRate], peak_multiplier: float,
                 minimum_fare: float, promo_registry: Mapping[str, PromoRule]):
        super().__init__(peak_multiplier, minimum_fare, promo_registry)
        self.vehicle_rates = vehicle_rates

    def get_rate(self, vehicle_class: str) -> VehicleRate:
        return self.vehicle_rates[vehicle_class.strip().upper()]


class ConfiguredFareCalculator(BaseFareCalculator):
    """
    Fare calculator reading the tables from settings on every call.
    A settings reload takes effect on the next quote.
    """

    def __init__(self):
        pass  # Tables are fetched from settings per call

    @property
    def peak_multiplier(self) -> float:
        return settings.get_peak_multiplier()

    @property
    def minimum_fare(self) -> float:
        return settings.get_minimum_fare()

    @property
    def promo_registry(self) -> Mapping[str, PromoRule]:
        return settings.get_promo_codes()

    def get_rate(self, vehicle_class: str) -> VehicleRate:
        return settings.get_vehicle_rate(vehicle_class)


# Singleton instance for default calculator
_default_calculator: Optional[FareCalculatorInterface] = None


def get_fare_calculator() -> FareCalculatorInterface:
    """
    Get the default fare calculator instance (Singleton pattern).

    Returns:
        Fare calculator instance implementing FareCalculatorInterface
    """
    global _default_calculator
    if _default_calculator is None:
        _default_calculator = ConfiguredFareCalculator()
    return _default_calculator
