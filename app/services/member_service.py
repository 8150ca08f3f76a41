# app/services/member_service.py
"""
Member listing, details and registration.
"""

from datetime import date
from functools import cmp_to_key
from typing import Optional
from sqlalchemy import func
from sqlalchemy.orm import Session, selectinload
from app.models.member import Member
from app.models.vehicle import Vehicle
from app.schemas.member import MemberCreate, MemberDetailsOut, MemberListOut, MemberVehicleOut
from app.services.exceptions import NotFoundError
from app.services.membership import classify_membership
from app.utils.logger import get_logger

logger = get_logger(__name__)

NAME_PREFIX_LENGTH = 2


def compare_first_name_prefix(a: MemberListOut, b: MemberListOut) -> int:
    """
    Orders members by the first two characters of their first name,
    case-sensitive (ordinal). Not a total order: members sharing the two
    characters compare equal and keep whatever order the stable sort leaves
    them in. First names are required, so both are always strings.
    """
    x = a.first_name[:NAME_PREFIX_LENGTH]
    y = b.first_name[:NAME_PREFIX_LENGTH]
    if x == y:
        return 0
    return -1 if x < y else 1


def list_members(db: Session) -> list[MemberListOut]:
    rows = (
        db.query(Member, func.count(Vehicle.id))
        .outerjoin(Vehicle, Vehicle.member_id == Member.id)
        .group_by(Member.id)
        .order_by(Member.id)
        .all()
    )
    members = [
        MemberListOut(
            id=member.id,
            first_name=member.first_name,
            last_name=member.last_name,
            nr_of_vehicles=count,
        )
        for member, count in rows
    ]
    return sorted(members, key=cmp_to_key(compare_first_name_prefix))


def get_member_details(db: Session, member_id: int, today: Optional[date] = None) -> MemberDetailsOut:
    member = (
        db.query(Member)
        .options(selectinload(Member.vehicles))
        .filter(Member.id == member_id)
        .first()
    )
    if not member:
        raise NotFoundError(f"Member {member_id} not found")
    return MemberDetailsOut(
        id=member.id,
        first_name=member.first_name,
        last_name=member.last_name,
        pro_membership_to_date=member.pro_membership_to_date,
        membership_type=classify_membership(member.pro_membership_to_date, today),
        vehicles=[MemberVehicleOut.model_validate(v) for v in member.vehicles],
    )


def create_member(db: Session, data: MemberCreate) -> Member:
    member = Member(
        first_name=data.first_name,
        last_name=data.last_name,
        pro_membership_to_date=data.pro_membership_to_date,
    )
    db.add(member)
    db.commit()
    db.refresh(member)
    logger.info(f"[Member] Registered {member.first_name} {member.last_name} (id={member.id})")
    return member

