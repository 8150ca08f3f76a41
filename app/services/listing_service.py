# app/services/listing_service.py
"""
Parked-vehicle listing: search, sort and deduplicate.

Runs one query over vehicle ⋈ assignment ⋈ member ⋈ type, so only vehicles
that are currently parked are listed. Filters and sort order are looked up
from the tables below rather than chained one by one.
"""

from datetime import datetime
from typing import Optional
from sqlalchemy import func
from sqlalchemy.orm import Session
from app.models.member import Member
from app.models.vehicle import Vehicle
from app.models.vehicle_assignment import VehicleAssignment
from app.models.vehicle_type import VehicleType
from app.schemas.vehicle import ParkedVehicleOut, VehicleOrder, VehicleSearch
from app.schemas.vehicle_type import VehicleTypeOut
from app.services.membership import classify_membership
from app.utils.logger import get_logger

logger = get_logger(__name__)

# (VehicleSearch field, column, prefix match)
SEARCH_FILTERS = (
    ("registration_number", Vehicle.registration_number, True),
    ("brand", Vehicle.brand, True),
    ("model", Vehicle.model, True),
    ("wheel_count", Vehicle.wheel_count, False),
    ("vehicle_type_id", Vehicle.vehicle_type_id, False),
)

# Sort column, and whether the column runs opposite to the requested key
SORT_COLUMNS = {
    VehicleOrder.REGISTRATION_NUMBER: (Vehicle.registration_number, False),
    VehicleOrder.TYPE: (Vehicle.vehicle_type_id, False),
    VehicleOrder.PARKED_TIME: (VehicleAssignment.arrival_date, True),  # parked longest = arrived first
    VehicleOrder.ARRIVAL_TIME: (VehicleAssignment.arrival_date, False),
}


def build_filters(search: VehicleSearch) -> list:
    """Predicates for every filter present in the search. Empty strings count as absent."""
    predicates = []
    for field, column, prefix in SEARCH_FILTERS:
        value = getattr(search, field)
        if value is None:
            continue
        if prefix:
            value = value.strip()
            if not value:
                continue
            # substr instead of LIKE: LIKE ignores case on SQLite
            predicates.append(func.substr(column, 1, len(value)) == value)
        else:
            predicates.append(column == value)
    return predicates


def build_order(search: VehicleSearch) -> list:
    """ORDER BY clauses. Tie-breakers follow `desc` so flipping it reverses the whole list."""
    column, inverted = SORT_COLUMNS[search.order]
    descending = search.desc != inverted
    tie_breakers = (Vehicle.id, VehicleAssignment.id)
    return [column.desc() if descending else column.asc()] + [
        c.desc() if search.desc else c.asc() for c in tie_breakers
    ]


def list_parked_vehicles(db: Session, search: VehicleSearch, now: Optional[datetime] = None) -> list[ParkedVehicleOut]:
    now = now or datetime.utcnow()
    rows = (
        db.query(Vehicle, VehicleAssignment, Member, VehicleType)
        .join(VehicleAssignment, VehicleAssignment.vehicle_id == Vehicle.id)
        .join(Member, Member.id == Vehicle.member_id)
        .join(VehicleType, VehicleType.id == Vehicle.vehicle_type_id)
        .filter(*build_filters(search))
        .order_by(*build_order(search))
        .all()
    )

    # A vehicle joined to several assignments keeps only its first row
    seen = set()
    result = []
    for vehicle, assignment, member, vehicle_type in rows:
        if vehicle.id in seen:
            continue
        seen.add(vehicle.id)
        result.append(ParkedVehicleOut(
            id=vehicle.id,
            registration_number=vehicle.registration_number,
            vehicle_type=VehicleTypeOut(
                id=vehicle_type.id,
                name=vehicle_type.name,
                needed_size=vehicle_type.needed_size,
            ),
            arrival_time=assignment.arrival_date,
            parked_time=now - assignment.arrival_date,
            owner=f"{member.first_name} {member.last_name}",
            membership_type=classify_membership(member.pro_membership_to_date, now.date()),
        ))

    logger.debug(f"Listing: {len(result)} parked vehicles ({len(rows)} rows) order={search.order.value} desc={search.desc}")
    return result
