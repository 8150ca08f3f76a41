# app/services/registration.py
"""Registration number normalization — applied on every write path and before uniqueness checks."""

_STRIPPED_CHARS = str.maketrans("", "", " -")


def normalize_registration_number(registration_number: str) -> str:
    """'ab 12-34' → 'AB1234'. Idempotent."""
    return registration_number.translate(_STRIPPED_CHARS).upper()
