"""
Members table — garage customers who own vehicles.
pro_membership_to_date drives the membership tier (see services/membership.py).
"""

from sqlalchemy import Column, Integer, String, Date
from sqlalchemy.orm import relationship
from app.database import Base


class Member(Base):
    __tablename__ = "members"

    id = Column(Integer, primary_key=True, autoincrement=True)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    pro_membership_to_date = Column(Date)      # NULL = never been pro

    vehicles = relationship("Vehicle", back_populates="member")

    def __repr__(self):
        return f"<Member {self.id} {self.first_name} {self.last_name}>"
