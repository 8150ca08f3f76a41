from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from app.database import get_db
from app.schemas.vehicle_type import VehicleTypeCreate, VehicleTypeOut
from app.services.vehicle_type_service import create_vehicle_type, list_vehicle_types

router = APIRouter()


@router.get("/vehicle-types", response_model=list[VehicleTypeOut], summary="List vehicle types")
def get_vehicle_types(db: Session = Depends(get_db)):
    return list_vehicle_types(db)


@router.post("/vehicle-types", response_model=VehicleTypeOut, status_code=201, summary="Add a vehicle type")
def add_vehicle_type(body: VehicleTypeCreate, db: Session = Depends(get_db)):
    return create_vehicle_type(db, body)
