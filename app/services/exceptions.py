# app/services/exceptions.py
"""
Domain errors raised by the service layer.
app/main.py maps them to HTTP responses:
NotFoundError → 404, ConflictError → 409, ValidationFailedError → 422.
"""


class GarageError(Exception):
    """Base class for expected, user-facing service errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(GarageError):
    """A referenced member, vehicle or vehicle type does not exist."""


class ConflictError(GarageError):
    """The request clashes with stored state (duplicate registration, already parked, garage full)."""


class ValidationFailedError(GarageError):
    """Input passed schema validation but is still unusable (e.g. a registration number of only hyphens)."""
