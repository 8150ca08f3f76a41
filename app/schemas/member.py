from pydantic import BaseModel, Field
from datetime import date
from typing import Optional
from app.services.membership import MembershipType


class MemberCreate(BaseModel):
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    pro_membership_to_date: Optional[date] = None


class MemberListOut(BaseModel):
    id: int
    first_name: str
    last_name: str
    nr_of_vehicles: int


class MemberVehicleOut(BaseModel):
    id: int
    brand: Optional[str]
    model: Optional[str]
    registration_number: str

    class Config:
        from_attributes = True


class MemberDetailsOut(BaseModel):
    id: int
    first_name: str
    last_name: str
    pro_membership_to_date: Optional[date]
    membership_type: MembershipType
    vehicles: list[MemberVehicleOut]
