"""Configuration for the ride fare calculator."""

from typing import Dict, Optional
import json
import logging
import os
from dotenv import load_dotenv

from ridefare.models import FareConfigFile, PromoRule, VehicleRate

load_dotenv()

logger = logging.getLogger(__name__)

NONE_PROMO_CODE = "NONE"

DEFAULT_VEHICLE_RATES: Dict[str, VehicleRate] = {
    "ECONOMY": VehicleRate(
        name="GrabCar Economy", base_fare=2.50, per_km_rate=1.20,
        per_minute_rate=0.20, booking_fee=1.00,
    ),
    "PREMIUM": VehicleRate(
        name="GrabCar Premium", base_fare=4.00, per_km_rate=1.60,
        per_minute_rate=0.30, booking_fee=1.00,
    ),
    "BIKE": VehicleRate(
        name="GrabBike", base_fare=1.50, per_km_rate=0.50,
        per_minute_rate=0.00, booking_fee=0.50,
    ),
}

DEFAULT_PROMO_CODES: Dict[str, PromoRule] = {
    NONE_PROMO_CODE: PromoRule(percentage=0.00, cap_amount=0.00),
    "GRAB10": PromoRule(percentage=0.10, cap_amount=3.00),     # 10% off up to RM3
    "STUDENT15": PromoRule(percentage=0.15, cap_amount=5.00),  # 15% off up to RM5
    "SUPER20": PromoRule(percentage=0.20, cap_amount=8.00),    # 20% off up to RM8
}


def load_fare_config(path: str) -> FareConfigFile:
    """
    Read and validate a JSON fare configuration file.

    Vehicle and promo keys are normalized to uppercase.

    Raises:
        OSError: If the file cannot be read
        ValueError: If the content is not valid JSON or fails validation
    """
    with open(path, encoding="utf-8") as fh:
        raw = json.load(fh)

    config = FareConfigFile.model_validate(raw)
    updates = {}
    if config.vehicles is not None:
        updates["vehicles"] = {k.strip().upper(): v for k, v in config.vehicles.items()}
    if config.promo_codes is not None:
        updates["promo_codes"] = {k.strip().upper(): v for k, v in config.promo_codes.items()}
    return config.model_copy(update=updates)


class Settings:
    """Application settings."""

    # API Settings
    API_TITLE = "Ride Fare Calculator"
    API_VERSION = "1.0.0"
    API_DESCRIPTION = (
        "Itemized ride fare quotes with peak surcharge, promo codes and minimum fare"
    )

    # CORS Settings
    CORS_ORIGINS = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
        "http://localhost:8000",
        "http://127.0.0.1:8000",
    ]

    # Pricing constants, overridable by the fare config file
    PEAK_MULTIPLIER = float(os.getenv("PEAK_MULTIPLIER", "1.50"))
    MINIMUM_FARE = float(os.getenv("MINIMUM_FARE", "5.00"))
    CURRENCY = os.getenv("CURRENCY", "RM")

    FARE_CONFIG_PATH = os.getenv("FARE_CONFIG_PATH")
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    # Loaded once, then read-only
    _vehicle_rates_cache: Optional[Dict[str, VehicleRate]] = None
    _promo_codes_cache: Optional[Dict[str, PromoRule]] = None
    _peak_multiplier: Optional[float] = None
    _minimum_fare: Optional[float] = None

    @classmethod
    def _load(cls):
        vehicles = dict(DEFAULT_VEHICLE_RATES)
        promos = dict(DEFAULT_PROMO_CODES)
        peak_multiplier = cls.PEAK_MULTIPLIER
        minimum_fare = cls.MINIMUM_FARE

        if cls.FARE_CONFIG_PATH:
            try:
                config = load_fare_config(cls.FARE_CONFIG_PATH)
            except (OSError, ValueError) as e:
                logger.warning(
                    "Could not load fare config from %s: %s. Using default tables.",
                    cls.FARE_CONFIG_PATH, e,
                )
            else:
                if config.vehicles is not None:
                    vehicles = config.vehicles
                if config.promo_codes is not None:
                    promos = config.promo_codes
                if config.peak_multiplier is not None:
                    peak_multiplier = config.peak_multiplier
                if config.minimum_fare is not None:
                    minimum_fare = config.minimum_fare
                logger.info(
                    "Loaded fare config from %s (%d vehicles, %d promo codes)",
                    cls.FARE_CONFIG_PATH, len(vehicles), len(promos),
                )

        cls._vehicle_rates_cache = vehicles
        cls._promo_codes_cache = promos
        cls._peak_multiplier = peak_multiplier
        cls._minimum_fare = minimum_fare

    @classmethod
    def get_vehicle_rates(cls) -> Dict[str, VehicleRate]:
        """Get the rate table keyed by vehicle class."""
        if cls._vehicle_rates_cache is None:
            cls._load()
        return cls._vehicle_rates_cache

    @classmethod
    def get_promo_codes(cls) -> Dict[str, PromoRule]:
        """Get the promo registry keyed by uppercase code."""
        if cls._promo_codes_cache is None:
            cls._load()
        return cls._promo_codes_cache

    @classmethod
    def get_peak_multiplier(cls) -> float:
        if cls._peak_multiplier is None:
            cls._load()
        return cls._peak_multiplier

    @classmethod
    def get_minimum_fare(cls) -> float:
        if cls._minimum_fare is None:
            cls._load()
        return cls._minimum_fare

    @classmethod
    def get_vehicle_rate(cls, vehicle_class: str) -> VehicleRate:
        """
        Get the rate for a vehicle class (case-insensitive).

        Raises:
            KeyError: If the vehicle class is not configured
        """
        return cls.get_vehicle_rates()[vehicle_class.strip().upper()]

    @classmethod
    def is_valid_vehicle(cls, vehicle_class: str) -> bool:
        """Check if a vehicle class exists in the rate table."""
        return vehicle_class.strip().upper() in cls.get_vehicle_rates()

    @classmethod
    def get_available_vehicles(cls) -> list:
        """Vehicle class keys in configuration order."""
        return list(cls.get_vehicle_rates().keys())

    @classmethod
    def reload_configuration(cls):
        """Force reload of the fare tables."""
        cls._vehicle_rates_cache = None
        cls._promo_codes_cache = None
        cls._peak_multiplier = None
        cls._minimum_fare = None
        cls._load()


settings = Settings()
