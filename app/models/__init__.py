# Garage Manager — Database Models
# Import all models here for SQLAlchemy discovery

from app.models.member import Member                          # noqa
from app.models.vehicle_type import VehicleType               # noqa
from app.models.vehicle import Vehicle                        # noqa
from app.models.vehicle_assignment import VehicleAssignment   # noqa
