# app/services/vehicle_type_service.py
"""Vehicle type catalogue (car, motorcycle, bus, ...) used by the add-vehicle flow."""

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from app.models.vehicle_type import VehicleType
from app.schemas.vehicle_type import VehicleTypeCreate
from app.services.exceptions import ConflictError
from app.utils.logger import get_logger

logger = get_logger(__name__)

DEFAULT_VEHICLE_TYPES = (
    ("Car", 1),
    ("Motorcycle", 1),
    ("Van", 2),
    ("Bus", 3),
)


def list_vehicle_types(db: Session) -> list[VehicleType]:
    return db.query(VehicleType).order_by(VehicleType.id).all()


def create_vehicle_type(db: Session, data: VehicleTypeCreate) -> VehicleType:
    vehicle_type = VehicleType(name=data.name, needed_size=data.needed_size)
    db.add(vehicle_type)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError(f"Vehicle type '{data.name}' already exists")
    db.refresh(vehicle_type)
    logger.info(f"[VehicleType] Added {vehicle_type.name} (size={vehicle_type.needed_size})")
    return vehicle_type


def seed_vehicle_types(db: Session) -> int:
    """Insert DEFAULT_VEHICLE_TYPES that are missing. Returns how many were added."""
    existing = {name for (name,) in db.query(VehicleType.name).all()}
    added = 0
    for name, needed_size in DEFAULT_VEHICLE_TYPES:
        if name not in existing:
            db.add(VehicleType(name=name, needed_size=needed_size))
            added += 1
    db.commit()
    return added
