"""Member registration, listing and details, and adding vehicles to a member."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from app.database import get_db
from app.schemas.member import MemberCreate, MemberDetailsOut, MemberListOut
from app.schemas.vehicle import VehicleCreate, VehicleOut
from app.services.member_service import create_member, get_member_details, list_members
from app.services.vehicle_service import add_vehicle

router = APIRouter()


@router.get("/members", response_model=list[MemberListOut], summary="List members")
def get_members(db: Session = Depends(get_db)):
    """Members with their vehicle count, ordered by the first two letters of the first name."""
    return list_members(db)


@router.post("/members", response_model=MemberDetailsOut, status_code=201, summary="Register a member")
def register_member(body: MemberCreate, db: Session = Depends(get_db)):
    member = create_member(db, body)
    return get_member_details(db, member.id)


@router.get("/members/{member_id}", response_model=MemberDetailsOut, summary="Member details")
def member_details(member_id: int, db: Session = Depends(get_db)):
    return get_member_details(db, member_id)


@router.post("/members/{member_id}/vehicles", response_model=VehicleOut, status_code=201,
             summary="Register a vehicle for a member")
def register_vehicle(member_id: int, body: VehicleCreate, db: Session = Depends(get_db)):
    return add_vehicle(db, member_id, body)
