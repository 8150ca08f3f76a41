# app/services/vehicle_service.py
"""
Vehicle lookup and management: add, details, modify, park and the
registration number uniqueness check.
Registration numbers are normalized on every write and before every lookup.
"""

from datetime import datetime
from typing import Optional
from sqlalchemy import func
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, joinedload, selectinload
from app.models.member import Member
from app.models.vehicle import Vehicle
from app.models.vehicle_assignment import VehicleAssignment
from app.models.vehicle_type import VehicleType
from app.schemas.vehicle import GarageStatusOut, ParkOut, VehicleCreate, VehicleDetailsOut
from app.services.exceptions import ConflictError, NotFoundError, ValidationFailedError
from app.services.registration import normalize_registration_number
from app.utils.logger import get_logger

logger = get_logger(__name__)

DUPLICATE_REGISTRATION_MESSAGE = (
    "A vehicle with that registration number is already parked. Try modifying the vehicle instead."
)

# member_id and vehicle_type_id are never modifiable
MODIFIABLE_FIELDS = ("registration_number", "brand", "model", "color", "wheel_count")
REQUIRED_FIELDS = ("registration_number", "wheel_count")


def get_vehicle(db: Session, vehicle_id: int) -> Vehicle:
    """Vehicle with its type, owner and assignments loaded. Raises NotFoundError."""
    vehicle = (
        db.query(Vehicle)
        .options(
            selectinload(Vehicle.assignments),
            joinedload(Vehicle.vehicle_type),
            joinedload(Vehicle.member),
        )
        .filter(Vehicle.id == vehicle_id)
        .first()
    )
    if not vehicle:
        raise NotFoundError(f"Vehicle {vehicle_id} not found")
    return vehicle


def lookup_vehicle_by_registration(db: Session, registration_number: str):
    """Find a vehicle by registration number (normalized first). Returns None if not found."""
    registration_number = normalize_registration_number(registration_number)
    return db.query(Vehicle).filter(Vehicle.registration_number == registration_number).first()


def is_registered(db: Session, registration_number: str) -> bool:
    return lookup_vehicle_by_registration(db, registration_number) is not None


def check_registration_unique(db: Session, registration_number: str):
    """
    Returns the duplicate message if the registration number is taken, else True.
    A failing lookup also returns True: the unique index checks again on write.
    """
    try:
        if is_registered(db, registration_number):
            return DUPLICATE_REGISTRATION_MESSAGE
    except SQLAlchemyError as e:
        db.rollback()
        logger.warning(f"Registration check failed for '{registration_number}': {e}")
    return True


def _normalized_registration(registration_number: str) -> str:
    normalized = normalize_registration_number(registration_number)
    if not normalized:
        raise ValidationFailedError("Registration number must contain more than spaces and hyphens")
    return normalized


def _commit_registration(db: Session):
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError(DUPLICATE_REGISTRATION_MESSAGE)


def add_vehicle(db: Session, member_id: int, data: VehicleCreate) -> Vehicle:
    """Register a new vehicle for an existing member."""
    if not db.query(Member).filter(Member.id == member_id).first():
        raise NotFoundError(f"Member {member_id} not found")
    if not db.query(VehicleType).filter(VehicleType.id == data.vehicle_type_id).first():
        raise NotFoundError(f"Vehicle type {data.vehicle_type_id} not found")

    registration_number = _normalized_registration(data.registration_number)
    if is_registered(db, registration_number):
        raise ConflictError(DUPLICATE_REGISTRATION_MESSAGE)

    vehicle = Vehicle(
        registration_number=registration_number,
        brand=data.brand,
        model=data.model,
        color=data.color,
        wheel_count=data.wheel_count,
        member_id=member_id,
        vehicle_type_id=data.vehicle_type_id,
    )
    db.add(vehicle)
    _commit_registration(db)
    db.refresh(vehicle)
    logger.info(f"[Add] Vehicle {registration_number} registered to member {member_id}")
    return vehicle


def modify_vehicle(db: Session, vehicle_id: int, changes: dict) -> Vehicle:
    """
    Partial update restricted to MODIFIABLE_FIELDS.
    Any other key (member_id, vehicle_type_id, ...) is rejected, not ignored.
    """
    rejected = sorted(set(changes) - set(MODIFIABLE_FIELDS))
    if rejected:
        raise ValidationFailedError(f"Fields cannot be modified: {', '.join(rejected)}")
    for field in REQUIRED_FIELDS:
        if field in changes and changes[field] is None:
            raise ValidationFailedError(f"{field} cannot be empty")

    vehicle = get_vehicle(db, vehicle_id)

    if "registration_number" in changes:
        registration_number = _normalized_registration(changes["registration_number"])
        if registration_number != vehicle.registration_number and is_registered(db, registration_number):
            raise ConflictError(DUPLICATE_REGISTRATION_MESSAGE)
        changes = {**changes, "registration_number": registration_number}

    for field in MODIFIABLE_FIELDS:
        if field in changes:
            setattr(vehicle, field, changes[field])

    _commit_registration(db)
    db.refresh(vehicle)
    logger.info(f"[Modify] Vehicle {vehicle.id} updated: {', '.join(sorted(changes)) or 'no changes'}")
    return vehicle


def get_vehicle_details(db: Session, vehicle_id: int, now: Optional[datetime] = None) -> VehicleDetailsOut:
    vehicle = get_vehicle(db, vehicle_id)
    details = VehicleDetailsOut(
        id=vehicle.id,
        registration_number=vehicle.registration_number,
        brand=vehicle.brand,
        model=vehicle.model,
        color=vehicle.color,
        wheel_count=vehicle.wheel_count,
        vehicle_type_name=vehicle.vehicle_type.name,
        owner_first_name=vehicle.member.first_name,
        owner_last_name=vehicle.member.last_name,
    )
    if vehicle.assignments:
        now = now or datetime.utcnow()
        details.arrival_time = vehicle.assignments[0].arrival_date
        details.parked_time = now - details.arrival_time
    return details


def used_capacity(db: Session) -> int:
    """Sum of needed_size over every parked vehicle."""
    return (
        db.query(func.coalesce(func.sum(VehicleType.needed_size), 0))
        .select_from(VehicleAssignment)
        .join(Vehicle, Vehicle.id == VehicleAssignment.vehicle_id)
        .join(VehicleType, VehicleType.id == Vehicle.vehicle_type_id)
        .scalar()
    )


def park_vehicle(db: Session, vehicle_id: int, hour_price: int, capacity: int,
                 now: Optional[datetime] = None) -> ParkOut:
    """Check a registered vehicle in: one new assignment, if it fits in the garage."""
    vehicle = get_vehicle(db, vehicle_id)
    if vehicle.assignments:
        raise ConflictError(f"Vehicle {vehicle.registration_number} is already parked")

    needed = vehicle.vehicle_type.needed_size
    used = used_capacity(db)
    if used + needed > capacity:
        logger.warning(f"[Park] Garage full: {vehicle.registration_number} needs {needed}, {capacity - used} free")
        raise ConflictError(f"Garage is full: {needed} units needed, {max(0, capacity - used)} free")

    arrival = now or datetime.utcnow()
    db.add(VehicleAssignment(vehicle_id=vehicle.id, arrival_date=arrival))
    db.commit()
    logger.info(f"[Park] {vehicle.registration_number} parked at {arrival:%Y-%m-%d %H:%M:%S} ({used + needed}/{capacity})")
    return ParkOut(
        vehicle_id=vehicle_id,
        registration_number=vehicle.registration_number,
        arrival_time=arrival,
        hour_price=hour_price,
    )


def get_garage_status(db: Session, hour_price: int, capacity: int) -> GarageStatusOut:
    used = used_capacity(db)
    parked = db.query(func.count(func.distinct(VehicleAssignment.vehicle_id))).scalar()
    return GarageStatusOut(
        hour_price=hour_price,
        capacity=capacity,
        used_capacity=used,
        free_capacity=max(0, capacity - used),
        parked_vehicles=parked,
    )
