"""
Vehicle types table (car, motorcycle, bus, ...).
needed_size is the number of garage capacity units one vehicle of this type occupies.
"""

from sqlalchemy import Column, Integer, String
from app.database import Base


class VehicleType(Base):
    __tablename__ = "vehicle_types"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(50), unique=True, nullable=False)
    needed_size = Column(Integer, default=1, nullable=False)

    def __repr__(self):
        return f"<VehicleType {self.name} size={self.needed_size}>"
