from decimal import Decimal
from pydantic import BaseModel
from datetime import datetime, timedelta
from typing import Optional
from app.schemas.vehicle_type import VehicleTypeOut


class ReceiptOut(BaseModel):
    registration_number: str
    brand: Optional[str]
    model: Optional[str]
    color: Optional[str]
    wheel_count: int
    vehicle_type: Optional[VehicleTypeOut]
    arrival_time: Optional[datetime]    # None when the vehicle was not parked
    checkout_time: datetime
    parked_time: timedelta
    price: Decimal


class CheckoutOut(ReceiptOut):
    """Checkout confirmation: same figures as the receipt, nothing deleted yet."""
    id: int
