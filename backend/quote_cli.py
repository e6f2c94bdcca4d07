#!/usr/bin/env python3
"""
Command-line fare quoting utility.

Usage:
    python quote_cli.py quote <vehicle> <distance_km> [minutes] [--peak] [--promo CODE]
    python quote_cli.py interactive   - Menu-driven fare calculator
    python quote_cli.py rates         - Show the vehicle rate table
    python quote_cli.py promos        - Show available promo codes
"""

import sys
import os
sys.path.append(os.path.dirname(os.path.abspath(__file__)))

from ridefare.config import settings
from ridefare.models import TripInput
from ridefare.services import get_fare_calculator, render_breakdown, render_trip_summary

MAX_DISTANCE_KM = 200.0
MAX_DURATION_MIN = 1000.0


def read_positive_float(prompt, max_value=None):
    """
    Prompt until a positive number (<= max_value) is entered.
    Returns None when input ends.
    """
    while True:
        try:
            raw = input(prompt)
        except EOFError:
            return None
        try:
            value = float(raw)
        except ValueError:
            value = None
        if value is not None and value > 0 and (max_value is None or value <= max_value):
            return value
        message = "Invalid input. Please enter a positive number"
        if max_value is not None:
            message += f" (<= {max_value:g})"
        print(message + ".")


def read_menu_choice(prompt, lo, hi):
    """
    Prompt until an integer between lo and hi is entered.
    Returns None when input ends.
    """
    while True:
        try:
            raw = input(prompt)
        except EOFError:
            return None
        try:
            choice = int(raw)
        except ValueError:
            choice = None
        if choice is not None and lo <= choice <= hi:
            return choice
        print(f"Invalid choice. Please enter a number between {lo} and {hi}.")


def print_quote(vehicle_class, trip):
    """Compute and print the summary and breakdown for a trip."""
    rate = settings.get_vehicle_rate(vehicle_class)
    breakdown = get_fare_calculator().calculate_fare(trip, vehicle_class)

    print("\n=== Summary " + "=" * 33)
    print(render_trip_summary(rate.name or vehicle_class, trip, rate))
    print("=" * 45)
    print()
    print(render_breakdown(breakdown, settings.CURRENCY))
    print()
    return breakdown


def show_rates():
    """Display the vehicle rate table."""
    currency = settings.CURRENCY
    print("\n" + "="*62)
    print("VEHICLE RATES")
    print("="*62)
    print(f"{'Class':<10} {'Name':<18} {'Base':>7} {'Per km':>7} {'Per min':>8} {'Booking':>8}")
    print("-"*62)

    for key, rate in settings.get_vehicle_rates().items():
        print(
            f"{key:<10} {(rate.name or key):<18} {rate.base_fare:>7.2f} {rate.per_km_rate:>7.2f} "
            f"{rate.per_minute_rate:>8.2f} {rate.booking_fee:>8.2f}"
        )

    print("-"*62)
    print(f"Peak multiplier: x{settings.get_peak_multiplier():.2f} (distance only)")
    print(f"Minimum fare: {currency} {settings.get_minimum_fare():.2f}")
    print("="*62)


def show_promos():
    """Display the promo codes."""
    print("\n" + "="*40)
    print("PROMO CODES")
    print("="*40)
    print(f"{'Code':<12} {'Discount':>9} {'Cap':>10}")
    print("-"*40)

    for code, promo in settings.get_promo_codes().items():
        print(f"{code:<12} {promo.percentage:>9.0%} {promo.cap_amount:>10.2f}")

    print("-"*40)
    print("Unknown codes are treated as NONE.")
    print("="*40)


def quote_command(args):
    """Handle: quote <vehicle> <distance_km> [minutes] [--peak] [--promo CODE]."""
    is_peak = False
    promo = "NONE"
    positional = []

    i = 0
    while i < len(args):
        arg = args[i]
        if arg == "--peak":
            is_peak = True
        elif arg == "--promo":
            if i + 1 >= len(args):
                print("Error: --promo requires a code")
                return 1
            promo = args[i + 1]
            i += 1
        else:
            positional.append(arg)
        i += 1

    if len(positional) not in (2, 3):
        print(__doc__)
        return 1

    vehicle_class = positional[0].strip().upper()
    if not settings.is_valid_vehicle(vehicle_class):
        print(f"Error: unknown vehicle class {positional[0]!r}. "
              f"Available: {', '.join(settings.get_available_vehicles())}")
        return 1

    try:
        distance = float(positional[1])
        minutes = float(positional[2]) if len(positional) == 3 else 0.0
    except ValueError:
        print("Error: distance and minutes must be numbers")
        return 1

    if not 0 < distance <= MAX_DISTANCE_KM:
        print(f"Error: distance must be greater than 0 and at most {MAX_DISTANCE_KM:g} km")
        return 1
    if not 0 <= minutes <= MAX_DURATION_MIN:
        print(f"Error: minutes must be between 0 and {MAX_DURATION_MIN:g}")
        return 1

    trip = TripInput(distance_km=distance, duration_min=minutes, is_peak=is_peak,
                     promo_code_raw=promo)
    print_quote(vehicle_class, trip)
    return 0


def run_interactive():
    """Menu-driven calculator loop."""
    vehicles = settings.get_available_vehicles()
    rates = settings.get_vehicle_rates()
    currency = settings.CURRENCY

    print("Ride Fare Calculator")
    print(f"Promo codes available: {', '.join(settings.get_promo_codes())}")

    while True:
        print("\nSelect vehicle type:")
        for idx, key in enumerate(vehicles, 1):
            print(f"{idx}) {rates[key].name or key}")

        choice = read_menu_choice(f"Enter choice (1-{len(vehicles)}): ", 1, len(vehicles))
        if choice is None:
            print("Input ended unexpectedly. Exiting.")
            return 0
        vehicle_class = vehicles[choice - 1]
        rate = rates[vehicle_class]

        details = (f"Base fare: {currency} {rate.base_fare:.2f}, Per km: {currency} "
                   f"{rate.per_km_rate:.2f}, Booking fee: {currency} {rate.booking_fee:.2f}")
        if rate.charges_per_minute:
            details += f", Per minute: {currency} {rate.per_minute_rate:.2f}"
        print(f"Selected: {rate.name or vehicle_class}")
        print(details)

        distance = read_positive_float("Enter trip distance (km): ", MAX_DISTANCE_KM)
        if distance is None:
            print("Input ended unexpectedly. Exiting.")
            return 0

        minutes = 0.0
        if rate.charges_per_minute:
            minutes = read_positive_float("Enter estimated time (minutes): ", MAX_DURATION_MIN)
            if minutes is None:
                print("Input ended unexpectedly. Exiting.")
                return 0

        peak_choice = read_menu_choice("Is this a peak-hour ride? 1) No  2) Yes : ", 1, 2)
        if peak_choice is None:
            print("Input ended unexpectedly. Exiting.")
            return 0

        try:
            promo = input("Enter promo code (or NONE): ")
        except EOFError:
            promo = "NONE"

        trip = TripInput(distance_km=distance, duration_min=minutes,
                         is_peak=peak_choice == 2, promo_code_raw=promo)
        print_quote(vehicle_class, trip)

        again = read_menu_choice("Would you like to calculate another fare? 1) Yes  2) No : ", 1, 2)
        if again != 1:
            break

    print("Thank you for using the Ride Fare Calculator. Have a nice day!")
    return 0


def main(argv=None):
    argv = sys.argv[1:] if argv is None else argv
    if not argv:
        print(__doc__)
        return 1

    command = argv[0].lower()
    if command == "quote":
        return quote_command(argv[1:])
    elif command == "interactive":
        return run_interactive()
    elif command == "rates":
        show_rates()
        return 0
    elif command == "promos":
        show_promos()
        return 0

    print(f"Unknown command: {command}")
    print(__doc__)
    return 1


if __name__ == "__main__":
    sys.exit(main())
