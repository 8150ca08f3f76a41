# app/services/checkout_service.py
"""
Checkout workflow: ends a vehicle's parking session.

  1. Load the vehicle with its assignments (NotFoundError if the id is unknown)
  2. Parked time = now - arrival of the first assignment, price = hours × hour_price
  3. Delete every assignment of the vehicle and commit
  4. Return the receipt

A vehicle without an assignment is checked out as a no-op: nothing is
deleted and the receipt carries zero parked time and price.
"""

from datetime import datetime, timedelta
from decimal import Decimal
from typing import Optional
from sqlalchemy.orm import Session
from app.models.vehicle import Vehicle
from app.schemas.checkout import CheckoutOut, ReceiptOut
from app.schemas.vehicle_type import VehicleTypeOut
from app.services.exceptions import NotFoundError
from app.services.pricing import calculate_price, parked_hours
from app.services.vehicle_service import get_vehicle
from app.utils.logger import get_logger

logger = get_logger(__name__)


def _receipt_fields(vehicle: Vehicle, hour_price: int, now: datetime) -> dict:
    # More than one assignment is not expected; the first one stored wins
    assignment = vehicle.assignments[0] if vehicle.assignments else None
    if assignment:
        arrival_time = assignment.arrival_date
        parked_time = now - arrival_time
        price = calculate_price(parked_hours(parked_time), hour_price)
    else:
        arrival_time, parked_time, price = None, timedelta(0), Decimal(0)

    return dict(
        registration_number=vehicle.registration_number,
        brand=vehicle.brand,
        model=vehicle.model,
        color=vehicle.color,
        wheel_count=vehicle.wheel_count,
        vehicle_type=VehicleTypeOut.model_validate(vehicle.vehicle_type) if vehicle.vehicle_type else None,
        arrival_time=arrival_time,
        checkout_time=now,
        parked_time=parked_time,
        price=price,
    )


def preview_checkout(db: Session, vehicle_id: int, hour_price: int, now: Optional[datetime] = None) -> CheckoutOut:
    """Figures shown before the checkout is confirmed. Nothing is deleted."""
    now = now or datetime.utcnow()
    vehicle = get_vehicle(db, vehicle_id)
    if not vehicle.assignments:
        raise NotFoundError(f"Vehicle {vehicle_id} is not parked")
    return CheckoutOut(id=vehicle.id, **_receipt_fields(vehicle, hour_price, now))


def checkout_vehicle(db: Session, vehicle_id: int, hour_price: int, now: Optional[datetime] = None) -> ReceiptOut:
    now = now or datetime.utcnow()
    vehicle = get_vehicle(db, vehicle_id)
    receipt = ReceiptOut(**_receipt_fields(vehicle, hour_price, now))

    if not vehicle.assignments:
        logger.warning(f"[Checkout] Vehicle {vehicle.registration_number} is not parked — nothing to check out")

    for assignment in list(vehicle.assignments):
        db.delete(assignment)
    db.commit()

    logger.info(
        f"[Checkout] {receipt.registration_number} | parked {receipt.parked_time} | price {receipt.price}"
    )
    return receipt
