"""
Vehicle assignments table — one row per vehicle currently parked.
Created by park, deleted by checkout. Parked time = now - arrival_date.
"""

from sqlalchemy import Column, Integer, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from app.database import Base


class VehicleAssignment(Base):
    __tablename__ = "vehicle_assignments"

    id = Column(Integer, primary_key=True, autoincrement=True)
    vehicle_id = Column(Integer, ForeignKey("vehicles.id"), nullable=False, index=True)
    arrival_date = Column(DateTime, nullable=False, index=True)

    vehicle = relationship("Vehicle", back_populates="assignments")

    def __repr__(self):
        return f"<VehicleAssignment vehicle={self.vehicle_id} arrived={self.arrival_date}>"
