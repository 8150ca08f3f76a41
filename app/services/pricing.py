# app/services/pricing.py
"""
Parking fee calculation.
Linear in parked time: no rounding, no minimum charge, no clamping of
negative durations (clock skew yields a negative amount).
"""

from datetime import timedelta
from decimal import Decimal


def calculate_price(parked_hours: float, hour_price: int) -> Decimal:
    return Decimal(str(parked_hours)) * hour_price


def parked_hours(parked_time: timedelta) -> float:
    return parked_time.total_seconds() / 3600
