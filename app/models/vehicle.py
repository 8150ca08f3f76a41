"""
Registered vehicles table.
registration_number is stored normalized (upper-case, no spaces or hyphens)
and is unique across the garage.
"""

from sqlalchemy import Column, Integer, String, ForeignKey
from sqlalchemy.orm import relationship
from app.database import Base


class Vehicle(Base):
    __tablename__ = "vehicles"

    id = Column(Integer, primary_key=True, autoincrement=True)
    registration_number = Column(String(20), unique=True, nullable=False, index=True)
    brand = Column(String(50))
    model = Column(String(50))
    color = Column(String(30))
    wheel_count = Column(Integer, nullable=False)
    member_id = Column(Integer, ForeignKey("members.id"), nullable=False, index=True)
    vehicle_type_id = Column(Integer, ForeignKey("vehicle_types.id"), nullable=False)

    member = relationship("Member", back_populates="vehicles")
    vehicle_type = relationship("VehicleType")
    assignments = relationship(
        "VehicleAssignment",
        back_populates="vehicle",
        order_by="VehicleAssignment.id",
    )

    def __repr__(self):
        return f"<Vehicle {self.registration_number} member={self.member_id}>"
