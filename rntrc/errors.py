"""Errors raised while decoding or generating an RNTRC."""


class RntrcError(ValueError):
    """Base class for every RNTRC error."""


class FormatError(RntrcError):
    """Input is not 10 digits, the date does not exist, or the gender is unknown."""


class ValidationError(RntrcError):
    """Well-formed number that fails the checksum or gender-digit rule."""


class RangeError(RntrcError):
    """Birthdate outside the range a 5-digit day offset can hold."""
