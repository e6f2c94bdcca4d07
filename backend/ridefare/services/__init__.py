"""Services package for the ride fare calculator."""

from .fare_calculator import (
    compute_fare,
    get_fare_calculator,
    FareCalculatorInterface,
    TableFareCalculator,
    ConfiguredFareCalculator
)
from .receipt import render_breakdown, render_trip_summary

__all__ = [
    'compute_fare',
    'get_fare_calculator',
    'FareCalculatorInterface',
    'TableFareCalculator',
    'ConfiguredFareCalculator',
    'render_breakdown',
    'render_trip_summary'
]
