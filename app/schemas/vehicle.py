from enum import Enum
from pydantic import BaseModel, Field, field_validator
from datetime import datetime, timedelta
from typing import Optional
from app.schemas.vehicle_type import VehicleTypeOut
from app.services.membership import MembershipType


class VehicleOrder(str, Enum):
    REGISTRATION_NUMBER = "registration_number"
    TYPE = "type"
    PARKED_TIME = "parked_time"
    ARRIVAL_TIME = "arrival_time"


class VehicleSearch(BaseModel):
    """Listing filters (all optional, combined with AND) and sort order."""
    registration_number: Optional[str] = None   # prefix
    brand: Optional[str] = None                 # prefix
    model: Optional[str] = None                 # prefix
    wheel_count: Optional[int] = None
    vehicle_type_id: Optional[int] = None
    order: VehicleOrder = VehicleOrder.ARRIVAL_TIME
    desc: bool = False

    @field_validator("wheel_count", "vehicle_type_id", mode="before")
    @classmethod
    def blank_as_missing(cls, value):
        # A search form posts "" for a blank numeric field
        if isinstance(value, str) and not value.strip():
            return None
        return value


class ParkedVehicleOut(BaseModel):
    id: int
    registration_number: str
    vehicle_type: VehicleTypeOut
    arrival_time: datetime
    parked_time: timedelta
    owner: str
    membership_type: MembershipType


class VehicleCreate(BaseModel):
    registration_number: str = Field(..., min_length=1, max_length=20)
    brand: Optional[str] = Field(None, max_length=50)
    model: Optional[str] = Field(None, max_length=50)
    color: Optional[str] = Field(None, max_length=30)
    wheel_count: int = Field(..., ge=0)
    vehicle_type_id: int


class VehicleModify(BaseModel):
    """Owner and vehicle type are not part of this body and cannot be changed."""
    registration_number: Optional[str] = Field(None, min_length=1, max_length=20)
    brand: Optional[str] = Field(None, max_length=50)
    model: Optional[str] = Field(None, max_length=50)
    color: Optional[str] = Field(None, max_length=30)
    wheel_count: Optional[int] = Field(None, ge=0)


class VehicleOut(BaseModel):
    id: int
    registration_number: str
    brand: Optional[str]
    model: Optional[str]
    color: Optional[str]
    wheel_count: int
    member_id: int
    vehicle_type_id: int

    class Config:
        from_attributes = True


class VehicleDetailsOut(BaseModel):
    id: int
    registration_number: str
    brand: Optional[str]
    model: Optional[str]
    color: Optional[str]
    wheel_count: int
    vehicle_type_name: str
    owner_first_name: str
    owner_last_name: str
    arrival_time: Optional[datetime] = None
    parked_time: Optional[timedelta] = None


class ParkOut(BaseModel):
    vehicle_id: int
    registration_number: str
    arrival_time: datetime
    hour_price: int


class GarageStatusOut(BaseModel):
    hour_price: int
    capacity: int
    used_capacity: int
    free_capacity: int
    parked_vehicles: int
