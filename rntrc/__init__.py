"""Decode and generate Ukrainian taxpayer registration numbers (RNTRC)."""

from .codec import (
    BASE_DATE,
    GENDERS,
    MAX_DATE,
    MIN_DATE,
    WEIGHTS,
    Rntrc,
    checksum,
    generate,
    is_valid,
)
from .errors import FormatError, RangeError, RntrcError, ValidationError

__all__ = [
    "BASE_DATE",
    "GENDERS",
    "MAX_DATE",
    "MIN_DATE",
    "WEIGHTS",
    "Rntrc",
    "checksum",
    "generate",
    "is_valid",
    "FormatError",
    "RangeError",
    "RntrcError",
    "ValidationError",
]
