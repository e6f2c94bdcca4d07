"""API endpoints for fare quotes."""

from fastapi import APIRouter, HTTPException, Depends

from ridefare.models import QuoteRequest, QuoteResponse
from ridefare.services import get_fare_calculator
from ridefare.services.fare_calculator import FareCalculatorInterface
from ridefare.config import settings

router = APIRouter(prefix="/api", tags=["Fare Calculation"])


def get_calculator() -> FareCalculatorInterface:
    """
    Dependency injection for fare calculator.
    Returns any implementation of FareCalculatorInterface.
    """
    return get_fare_calculator()


@router.post("/quote", response_model=QuoteResponse)
async def quote_fare(
    request: QuoteRequest,
    calculator: FareCalculatorInterface = Depends(get_calculator)
) -> QuoteResponse:
    """
    Quote the fare for a single trip.

    Unknown promo codes are quoted without discount rather than rejected.

    Raises:
        HTTPException: 400 if quoting fails on the supplied input
    """
    try:
        breakdown = calculator.calculate_fare(request.to_trip(), request.vehicle_class)
    except KeyError:
        raise HTTPException(
            status_code=400,
            detail=f"Vehicle class {request.vehicle_class} is not configured"
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Internal error: {str(e)}")

    rate = settings.get_vehicle_rate(request.vehicle_class)
    return QuoteResponse(
        vehicle_class=request.vehicle_class,
        vehicle_name=rate.name or request.vehicle_class,
        peak_multiplier=settings.get_peak_multiplier(),
        minimum_fare=settings.get_minimum_fare(),
        currency=settings.CURRENCY,
        breakdown=breakdown,
    )


@router.get("/vehicles")
async def get_vehicles():
    """
    Get the configured rate table.

    Returns:
        Vehicle rates in configuration order
    """
    vehicles = []
    for key, rate in settings.get_vehicle_rates().items():
        vehicles.append({
            "vehicle_class": key,
            "name": rate.name or key,
            "base_fare": rate.base_fare,
            "per_km_rate": rate.per_km_rate,
            "per_minute_rate": rate.per_minute_rate,
            "booking_fee": rate.booking_fee,
        })

    return {
        "vehicles": vehicles,
        "peak_multiplier": settings.get_peak_multiplier(),
        "minimum_fare": settings.get_minimum_fare(),
        "currency": settings.CURRENCY,
    }


@router.get("/promo-codes")
async def get_promo_codes():
    """Get the configured promo codes with their percentage and cap."""
    return {
        "promo_codes": [
            {
                "code": code,
                "percentage": promo.percentage,
                "cap_amount": promo.cap_amount,
            }
            for code, promo in settings.get_promo_codes().items()
        ],
        "unknown_code_policy": "Unrecognized codes are treated as NONE (no discount)",
    }


@router.get("/health")
async def health_check():
    """Health check endpoint including configuration status."""
    return {
        "status": "healthy",
        "service": settings.API_TITLE,
        "vehicle_classes": len(settings.get_vehicle_rates()),
        "promo_codes": len(settings.get_promo_codes()),
    }
