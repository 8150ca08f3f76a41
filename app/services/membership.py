# app/services/membership.py
"""Membership tier derived from a member's pro membership expiry date."""

from datetime import date, datetime
from enum import Enum
from typing import Optional


class MembershipType(str, Enum):
    STANDARD = "standard"
    PRO = "pro"


def classify_membership(pro_membership_to_date: Optional[date], today: Optional[date] = None) -> MembershipType:
    """PRO up to and including the expiry day, STANDARD after it or when never set."""
    if pro_membership_to_date is None:
        return MembershipType.STANDARD
    today = today or datetime.utcnow().date()
    return MembershipType.PRO if today <= pro_membership_to_date else MembershipType.STANDARD
