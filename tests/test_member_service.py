"""Tests for member listing order, details and registration."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest
from datetime import date, timedelta
from functools import cmp_to_key
from types import SimpleNamespace
from app.schemas.member import MemberCreate
from app.services.exceptions import NotFoundError
from app.services.member_service import (
    compare_first_name_prefix, create_member, get_member_details, list_members,
)
from app.services.membership import MembershipType
from factories import add_member, add_vehicle, add_vehicle_type


def named(first_name):
    return SimpleNamespace(first_name=first_name)


class TestCompareFirstNamePrefix:
    def test_only_two_characters_compared(self):
        assert compare_first_name_prefix(named("Anna"), named("Annika")) == 0

    def test_orders_by_prefix(self):
        assert compare_first_name_prefix(named("Anna"), named("Bo")) == -1
        assert compare_first_name_prefix(named("Bo"), named("Anna")) == 1

    def test_case_sensitive(self):
        # Upper-case letters sort before lower-case ones
        assert compare_first_name_prefix(named("Bo"), named("anna")) == -1

    def test_short_name_before_longer_prefix(self):
        assert compare_first_name_prefix(named("A"), named("Al")) == -1
        assert compare_first_name_prefix(named("Al"), named("A")) == 1

    def test_ties_keep_input_order(self):
        people = [named("Anneli"), named("Bo"), named("Anders"), named("Anna")]
        ordered = sorted(people, key=cmp_to_key(compare_first_name_prefix))
        assert [p.first_name for p in ordered] == ["Anneli", "Anders", "Anna", "Bo"]


class TestListMembers:
    def test_sorted_with_vehicle_counts(self, db_session):
        car = add_vehicle_type(db_session)
        bo = add_member(db_session, "Bo", "Ek")
        anna = add_member(db_session, "Anna", "Berg")
        add_vehicle(db_session, bo, car, "AAA111")
        add_vehicle(db_session, bo, car, "BBB222")

        members = list_members(db_session)

        assert [m.first_name for m in members] == ["Anna", "Bo"]
        counts = {m.id: m.nr_of_vehicles for m in members}
        assert counts == {anna.id: 0, bo.id: 2}

    def test_no_members(self, db_session):
        assert list_members(db_session) == []


class TestMemberDetails:
    def test_details_with_vehicles(self, db_session):
        car = add_vehicle_type(db_session)
        today = date(2026, 3, 1)
        anna = add_member(db_session, "Anna", "Berg", pro_membership_to_date=today)
        add_vehicle(db_session, anna, car, "ABC123", "Volvo", "V70")

        details = get_member_details(db_session, anna.id, today=today)

        assert details.membership_type == MembershipType.PRO
        assert [v.registration_number for v in details.vehicles] == ["ABC123"]
        assert details.vehicles[0].brand == "Volvo"

    def test_expired_membership(self, db_session):
        today = date(2026, 3, 1)
        bo = add_member(db_session, "Bo", "Ek", pro_membership_to_date=today - timedelta(days=1))
        assert get_member_details(db_session, bo.id, today=today).membership_type == MembershipType.STANDARD

    def test_unknown_member(self, db_session):
        with pytest.raises(NotFoundError):
            get_member_details(db_session, 42)


class TestCreateMember:
    def test_persisted(self, db_session):
        member = create_member(db_session, MemberCreate(first_name="Cecilia", last_name="Dahl"))
        assert member.id is not None
        assert member.pro_membership_to_date is None
