"""Tests for vehicle add / modify / details / park and the registration check."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest
from unittest.mock import MagicMock
from datetime import timedelta
from sqlalchemy.exc import OperationalError
from app.models.vehicle import Vehicle
from app.models.vehicle_assignment import VehicleAssignment
from app.schemas.vehicle import VehicleCreate
from app.services.exceptions import ConflictError, NotFoundError, ValidationFailedError
from app.services.vehicle_service import (
    DUPLICATE_REGISTRATION_MESSAGE, add_vehicle, check_registration_unique, get_garage_status,
    get_vehicle_details, modify_vehicle, park_vehicle,
)
from factories import NOW, add_member, add_vehicle_type, park


@pytest.fixture()
def owner(db_session):
    return add_member(db_session, "Anna", "Berg")


@pytest.fixture()
def car(db_session):
    return add_vehicle_type(db_session, "Car", 1)


def vehicle_form(car, registration_number="ab 12-34", **kwargs):
    data = dict(registration_number=registration_number, brand="Volvo", model="V70",
                color="Red", wheel_count=4, vehicle_type_id=car.id)
    data.update(kwargs)
    return VehicleCreate(**data)


class TestAddVehicle:
    def test_registration_normalized(self, db_session, owner, car):
        vehicle = add_vehicle(db_session, owner.id, vehicle_form(car))
        assert vehicle.registration_number == "AB1234"
        assert vehicle.member_id == owner.id

    def test_duplicate_after_normalization_rejected(self, db_session, owner, car):
        add_vehicle(db_session, owner.id, vehicle_form(car, "AB1234"))
        with pytest.raises(ConflictError) as exc:
            add_vehicle(db_session, owner.id, vehicle_form(car, "ab-12 34"))
        assert exc.value.message == DUPLICATE_REGISTRATION_MESSAGE
        assert db_session.query(Vehicle).count() == 1

    def test_unknown_member(self, db_session, car):
        with pytest.raises(NotFoundError):
            add_vehicle(db_session, 999, vehicle_form(car))

    def test_unknown_vehicle_type(self, db_session, owner, car):
        with pytest.raises(NotFoundError):
            add_vehicle(db_session, owner.id, vehicle_form(car, vehicle_type_id=999))

    def test_registration_of_only_separators_rejected(self, db_session, owner, car):
        with pytest.raises(ValidationFailedError):
            add_vehicle(db_session, owner.id, vehicle_form(car, "- -"))
        assert db_session.query(Vehicle).count() == 0


class TestRegistrationCheck:
    def test_free_number(self, db_session):
        assert check_registration_unique(db_session, "NEW123") is True

    def test_taken_number_in_other_format(self, db_session, owner, car):
        add_vehicle(db_session, owner.id, vehicle_form(car, "AB1234"))
        assert check_registration_unique(db_session, "ab 12-34") == DUPLICATE_REGISTRATION_MESSAGE

    def test_database_error_passes_check(self):
        db = MagicMock()
        db.query.side_effect = OperationalError("SELECT", {}, Exception("db down"))
        assert check_registration_unique(db, "AB1234") is True
        db.rollback.assert_called_once()


class TestModifyVehicle:
    @pytest.fixture()
    def vehicle(self, db_session, owner, car):
        return add_vehicle(db_session, owner.id, vehicle_form(car, "AB1234"))

    def test_changes_allowed_fields(self, db_session, vehicle):
        updated = modify_vehicle(db_session, vehicle.id, {"brand": "Saab", "registration_number": "xy 99-88"})
        assert updated.brand == "Saab"
        assert updated.registration_number == "XY9988"
        assert updated.model == "V70"

    def test_owner_and_type_cannot_be_reassigned(self, db_session, vehicle, owner, car):
        other = add_member(db_session, "Bo", "Ek")
        with pytest.raises(ValidationFailedError):
            modify_vehicle(db_session, vehicle.id, {"brand": "Saab", "member_id": other.id})
        with pytest.raises(ValidationFailedError):
            modify_vehicle(db_session, vehicle.id, {"vehicle_type_id": 2})

        db_session.refresh(vehicle)
        assert vehicle.member_id == owner.id
        assert vehicle.vehicle_type_id == car.id
        assert vehicle.brand == "Volvo"

    def test_keeping_own_registration(self, db_session, vehicle):
        updated = modify_vehicle(db_session, vehicle.id, {"registration_number": "AB-1234", "color": "Blue"})
        assert updated.registration_number == "AB1234"
        assert updated.color == "Blue"

    def test_duplicate_registration(self, db_session, vehicle, owner, car):
        add_vehicle(db_session, owner.id, vehicle_form(car, "CD5678"))
        with pytest.raises(ConflictError):
            modify_vehicle(db_session, vehicle.id, {"registration_number": "CD 5678"})

    def test_required_field_cannot_be_cleared(self, db_session, vehicle):
        with pytest.raises(ValidationFailedError):
            modify_vehicle(db_session, vehicle.id, {"wheel_count": None})

    def test_unknown_vehicle(self, db_session):
        with pytest.raises(NotFoundError):
            modify_vehicle(db_session, 999, {"brand": "Saab"})


class TestVehicleDetails:
    def test_parked_vehicle(self, db_session, owner, car):
        vehicle = add_vehicle(db_session, owner.id, vehicle_form(car))
        park(db_session, vehicle, NOW - timedelta(minutes=45))

        details = get_vehicle_details(db_session, vehicle.id, now=NOW)

        assert details.vehicle_type_name == "Car"
        assert details.owner_first_name == "Anna"
        assert details.owner_last_name == "Berg"
        assert details.parked_time == timedelta(minutes=45)

    def test_unparked_vehicle(self, db_session, owner, car):
        vehicle = add_vehicle(db_session, owner.id, vehicle_form(car))
        details = get_vehicle_details(db_session, vehicle.id, now=NOW)
        assert details.arrival_time is None
        assert details.parked_time is None

    def test_unknown_vehicle(self, db_session):
        with pytest.raises(NotFoundError):
            get_vehicle_details(db_session, 999)


class TestParkVehicle:
    def test_creates_assignment(self, db_session, owner, car):
        vehicle = add_vehicle(db_session, owner.id, vehicle_form(car))

        result = park_vehicle(db_session, vehicle.id, hour_price=10, capacity=5, now=NOW)

        assert result.arrival_time == NOW
        assert result.hour_price == 10
        assignment = db_session.query(VehicleAssignment).one()
        assert assignment.vehicle_id == vehicle.id

    def test_already_parked(self, db_session, owner, car):
        vehicle = add_vehicle(db_session, owner.id, vehicle_form(car))
        park_vehicle(db_session, vehicle.id, hour_price=10, capacity=5, now=NOW)
        with pytest.raises(ConflictError):
            park_vehicle(db_session, vehicle.id, hour_price=10, capacity=5, now=NOW)
        assert db_session.query(VehicleAssignment).count() == 1

    def test_garage_full(self, db_session, owner, car):
        bus = add_vehicle_type(db_session, "Bus", 3)
        small = add_vehicle(db_session, owner.id, vehicle_form(car, "CAR1"))
        big = add_vehicle(db_session, owner.id, vehicle_form(bus, "BUS1", wheel_count=6))
        park_vehicle(db_session, small.id, hour_price=10, capacity=3, now=NOW)

        with pytest.raises(ConflictError):
            park_vehicle(db_session, big.id, hour_price=10, capacity=3, now=NOW)

    def test_exact_fit(self, db_session, owner, car):
        bus = add_vehicle_type(db_session, "Bus", 3)
        big = add_vehicle(db_session, owner.id, vehicle_form(bus, "BUS1", wheel_count=6))
        park_vehicle(db_session, big.id, hour_price=10, capacity=3, now=NOW)
        assert get_garage_status(db_session, 10, 3).free_capacity == 0

    def test_unknown_vehicle(self, db_session):
        with pytest.raises(NotFoundError):
            park_vehicle(db_session, 999, hour_price=10, capacity=5)


class TestGarageStatus:
    def test_counts(self, db_session, owner, car):
        van = add_vehicle_type(db_session, "Van", 2)
        park(db_session, add_vehicle(db_session, owner.id, vehicle_form(car, "CAR1")), NOW)
        park(db_session, add_vehicle(db_session, owner.id, vehicle_form(van, "VAN1")), NOW)
        add_vehicle(db_session, owner.id, vehicle_form(car, "CAR2"))

        status = get_garage_status(db_session, hour_price=10, capacity=5)

        assert status.used_capacity == 3
        assert status.free_capacity == 2
        assert status.parked_vehicles == 2
        assert status.hour_price == 10
