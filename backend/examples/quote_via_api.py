"""
Example client for the ride fare API.

Lists the rate table and promo codes, then quotes a trip in every vehicle
class with and without a peak surcharge.
"""

import requests
import sys


def show_tables(base_url: str = "http://localhost:8000"):
    """Print the rate table and promo codes served by the API."""
    response = requests.get(f"{base_url}/api/vehicles", timeout=10)
    response.raise_for_status()
    data = response.json()

    print(f"Peak multiplier: x{data['peak_multiplier']:.2f}")
    print(f"Minimum fare: {data['currency']} {data['minimum_fare']:.2f}")
    for vehicle in data["vehicles"]:
        print(f"  {vehicle['vehicle_class']:<10} {vehicle['name']:<18} "
              f"base {vehicle['base_fare']:.2f}  per km {vehicle['per_km_rate']:.2f}")

    response = requests.get(f"{base_url}/api/promo-codes", timeout=10)
    response.raise_for_status()
    codes = [promo["code"] for promo in response.json()["promo_codes"]]
    print(f"Promo codes: {', '.join(codes)}")
    return data["vehicles"]


def quote_trip(base_url: str, vehicle_class: str, distance_km: float,
               duration_min: float = 0.0, is_peak: bool = False,
               promo_code: str = "NONE") -> dict:
    """
    Request a quote for one trip.

    Returns:
        The breakdown dictionary, or an empty dict if the request was rejected
    """
    payload = {
        "vehicle_class": vehicle_class,
        "distance_km": distance_km,
        "duration_min": duration_min,
        "is_peak": is_peak,
        "promo_code": promo_code,
    }
    response = requests.post(f"{base_url}/api/quote", json=payload, timeout=10)

    if response.status_code != 200:
        print(f"✗ Quote rejected ({response.status_code}): {response.text}")
        return {}

    return response.json()["breakdown"]


def main():
    base_url = sys.argv[1] if len(sys.argv) > 1 else "http://localhost:8000"
    distance = float(sys.argv[2]) if len(sys.argv) > 2 else 10.0
    promo = sys.argv[3] if len(sys.argv) > 3 else "GRAB10"

    vehicles = show_tables(base_url)

    print(f"\nQuotes for {distance:g} km with promo {promo}:")
    for vehicle in vehicles:
        for is_peak in (False, True):
            breakdown = quote_trip(base_url, vehicle["vehicle_class"], distance,
                                   duration_min=15.0, is_peak=is_peak, promo_code=promo)
            if breakdown:
                label = "peak" if is_peak else "off-peak"
                print(f"  {vehicle['name']:<18} {label:<9} "
                      f"subtotal {breakdown['subtotal']:>7.2f}  "
                      f"discount {breakdown['discount_applied']:>5.2f}  "
                      f"payable {breakdown['total_payable']:>7.2f}")


if __name__ == "__main__":
    main()
