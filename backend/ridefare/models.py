"""Models for the ride fare calculation system."""

from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Dict, Optional


class VehicleRate(BaseModel):
    """Static pricing for one vehicle class."""
    model_config = ConfigDict(frozen=True)

    base_fare: float = Field(..., ge=0, description="Flat base fare")
    per_km_rate: float = Field(..., ge=0, description="Cost per kilometre")
    per_minute_rate: float = Field(0.0, ge=0, description="Cost per minute, 0 if unused")
    booking_fee: float = Field(..., ge=0, description="Fixed booking fee")
    name: Optional[str] = Field(None, description="Display name of the vehicle class")

    @property
    def charges_per_minute(self) -> bool:
        return self.per_minute_rate > 0


class PromoRule(BaseModel):
    """Percentage discount with an absolute cap."""
    model_config = ConfigDict(frozen=True)

    percentage: float = Field(..., ge=0, le=1, description="Discount fraction (0-1)")
    cap_amount: float = Field(..., ge=0, description="Maximum discount amount")


class TripInput(BaseModel):
    """Trip parameters supplied by the caller."""
    model_config = ConfigDict(frozen=True)

    distance_km: float = Field(..., gt=0, description="Trip distance in kilometres")
    duration_min: float = Field(0.0, ge=0, description="Trip duration in minutes")
    is_peak: bool = Field(False, description="Whether the ride is during peak hours")
    promo_code_raw: str = Field("NONE", description="Promo code as entered")


class FareBreakdown(BaseModel):
    """Itemized fare; monetary fields are rounded to 2 decimal places."""
    model_config = ConfigDict(frozen=True)

    base: float
    booking_fee: float
    distance_cost_off_peak: float
    time_cost: float
    peak_multiplier_applied: float
    distance_cost_final: float
    subtotal: float
    resolved_promo_code: str
    discount_applied: float
    total_before_minimum: float
    total_payable: float

    @property
    def minimum_fare_enforced(self) -> bool:
        return self.total_payable > self.total_before_minimum


class QuoteRequest(BaseModel):
    """Request model for a fare quote."""
    vehicle_class: str = Field(..., min_length=1, description="Vehicle class key, e.g. ECONOMY")
    distance_km: float = Field(..., gt=0, le=200, description="Trip distance (max 200 km)")
    duration_min: float = Field(0.0, ge=0, le=1000, description="Trip duration (max 1000 min)")
    is_peak: bool = Field(False, description="Peak-hour ride")
    promo_code: str = Field("NONE", description="Promo code, unknown codes apply no discount")

    @field_validator('vehicle_class')
    @classmethod
    def validate_vehicle_class(cls, v):
        # Checked against the configured rate table
        from ridefare.config import settings
        key = v.strip().upper()
        if not settings.is_valid_vehicle(key):
            raise ValueError(
                f"Vehicle class {v!r} is not valid. Available: {settings.get_available_vehicles()}"
            )
        return key

    def to_trip(self) -> TripInput:
        return TripInput(
            distance_km=self.distance_km,
            duration_min=self.duration_min,
            is_peak=self.is_peak,
            promo_code_raw=self.promo_code,
        )


class QuoteResponse(BaseModel):
    """Response model for a fare quote."""
    vehicle_class: str = Field(..., description="Normalized vehicle class key")
    vehicle_name: str = Field(..., description="Display name of the vehicle class")
    peak_multiplier: float = Field(..., description="Configured peak multiplier")
    minimum_fare: float = Field(..., description="Configured minimum fare")
    currency: str = Field(..., description="Currency label")
    breakdown: FareBreakdown


class FareConfigFile(BaseModel):
    """Shape of the optional JSON fare configuration file."""
    peak_multiplier: Optional[float] = Field(None, ge=1)
    minimum_fare: Optional[float] = Field(None, ge=0)
    vehicles: Optional[Dict[str, VehicleRate]] = None
    promo_codes: Optional[Dict[str, PromoRule]] = None
