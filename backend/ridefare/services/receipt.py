"""Plain-text rendering of fare breakdowns."""

from ridefare.config import NONE_PROMO_CODE
from ridefare.models import FareBreakdown, TripInput, VehicleRate

LABEL_WIDTH = 23
RULE_WIDTH = 29


def _line(label: str, value: str) -> str:
    return f"{label:<{LABEL_WIDTH}}: {value}"


def render_breakdown(breakdown: FareBreakdown, currency: str = "RM") -> str:
    """
    Render a breakdown as a console receipt.

    The time cost line is shown only when non-zero, and the discount only
    when a promo code other than NONE was applied.
    """
    lines = [f"--- Fare Breakdown ({currency}) ---"]
    lines.append(_line("Base fare", f"{breakdown.base:.2f}"))
    lines.append(_line("Booking fee", f"{breakdown.booking_fee:.2f}"))
    lines.append(_line("Distance cost (off-peak)", f"{breakdown.distance_cost_off_peak:.2f}"))
    if breakdown.peak_multiplier_applied > 1.0:
        lines.append(
            f"Peak multiplier x{breakdown.peak_multiplier_applied:.2f} applied to distance"
        )
    else:
        lines.append(_line("Peak multiplier", "x1.00 (off-peak)"))
    lines.append(_line("Distance cost (final)", f"{breakdown.distance_cost_final:.2f}"))
    if breakdown.time_cost > 0:
        lines.append(_line("Time cost", f"{breakdown.time_cost:.2f}"))
    lines.append(_line("Subtotal", f"{breakdown.subtotal:.2f}"))

    promo = breakdown.resolved_promo_code
    if promo != NONE_PROMO_CODE:
        promo = f"{promo} (discount {breakdown.discount_applied:.2f})"
    lines.append(_line("Promo code used", promo))

    lines.append(_line("Total before min fare", f"{breakdown.total_before_minimum:.2f}"))
    if breakdown.minimum_fare_enforced:
        lines.append(_line("Minimum fare enforced", f"{breakdown.total_payable:.2f}"))
    lines.append("-" * RULE_WIDTH)
    lines.append(_line("Total payable", f"{breakdown.total_payable:.2f}"))
    return "\n".join(lines)


def render_trip_summary(vehicle_name: str, trip: TripInput, rate: VehicleRate) -> str:
    """One-line trip summary shown above the breakdown."""
    summary = (
        f"Vehicle: {vehicle_name} | {'Peak' if trip.is_peak else 'Off-peak'}"
        f" | Distance: {trip.distance_km:.2f} km"
    )
    if rate.charges_per_minute:
        summary += f" | Time: {trip.duration_min:.2f} min"
    return summary
