"""Parked vehicle listing, vehicle details/modify, park and checkout endpoints."""

from typing import Annotated, Union
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from app.config import settings
from app.database import get_db
from app.schemas.checkout import CheckoutOut, ReceiptOut
from app.schemas.vehicle import (
    GarageStatusOut, ParkOut, ParkedVehicleOut, VehicleDetailsOut, VehicleModify, VehicleOut, VehicleSearch,
)
from app.services.checkout_service import checkout_vehicle, preview_checkout
from app.services.listing_service import list_parked_vehicles
from app.services.vehicle_service import (
    check_registration_unique, get_garage_status, get_vehicle_details, modify_vehicle, park_vehicle,
)

router = APIRouter()


@router.get("/vehicles", response_model=list[ParkedVehicleOut], summary="List parked vehicles")
def list_vehicles(search: Annotated[VehicleSearch, Query()], db: Session = Depends(get_db)):
    """
    Currently parked vehicles only. String filters are case-sensitive prefixes,
    wheel_count and vehicle_type_id are exact. Sort with order + desc.
    """
    return list_parked_vehicles(db, search)


@router.get("/vehicles/registration-check", response_model=Union[bool, str],
            summary="Check that a registration number is free")
def registration_check(registration_number: str, db: Session = Depends(get_db)):
    """Returns true when free, otherwise the message to show next to the field."""
    return check_registration_unique(db, registration_number)


@router.get("/vehicles/garage-status", response_model=GarageStatusOut, summary="Hour price and free capacity")
def garage_status(db: Session = Depends(get_db)):
    return get_garage_status(db, settings.HOUR_PRICE, settings.GARAGE_CAPACITY)


@router.get("/vehicles/{vehicle_id}", response_model=VehicleDetailsOut, summary="Vehicle details")
def vehicle_details(vehicle_id: int, db: Session = Depends(get_db)):
    return get_vehicle_details(db, vehicle_id)


@router.put("/vehicles/{vehicle_id}", response_model=VehicleOut, summary="Modify a vehicle")
def modify(vehicle_id: int, body: VehicleModify, db: Session = Depends(get_db)):
    """Only fields present in the body are changed. Owner and type are fixed."""
    return modify_vehicle(db, vehicle_id, body.model_dump(exclude_unset=True))


@router.post("/vehicles/{vehicle_id}/park", response_model=ParkOut, status_code=201, summary="Park a vehicle")
def park(vehicle_id: int, db: Session = Depends(get_db)):
    return park_vehicle(db, vehicle_id, settings.HOUR_PRICE, settings.GARAGE_CAPACITY)


@router.get("/vehicles/{vehicle_id}/checkout", response_model=CheckoutOut, summary="Checkout preview")
def checkout_preview(vehicle_id: int, db: Session = Depends(get_db)):
    """Parked time and price so far. Nothing is changed."""
    return preview_checkout(db, vehicle_id, settings.HOUR_PRICE)


@router.post("/vehicles/{vehicle_id}/checkout", response_model=ReceiptOut, summary="Check out a vehicle")
def checkout(vehicle_id: int, db: Session = Depends(get_db)):
    """Frees the vehicle's slot and returns the receipt."""
    return checkout_vehicle(db, vehicle_id, settings.HOUR_PRICE)
