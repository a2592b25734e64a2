"""
codec.py
────────
Decode and generate RNTRC numbers (Ukrainian taxpayer registration numbers).

An RNTRC is 10 digits:

    DDDDD SSSG C
    │     │  │ └ check digit
    │     │  └── gender digit (odd = male, even = female, never 0)
    │     └───── accounting-card sequence number
    └─────────── days since 1899-12-31

See https://zakon.rada.gov.ua/laws/show/z1306-17#n230 for the official layout.
"""

import calendar
import logging
import math
import random
import re
from datetime import MAXYEAR, MINYEAR, date, datetime, timedelta, timezone

from .errors import FormatError, RangeError, RntrcError, ValidationError

logger = logging.getLogger(__name__)

# ── 0.  CONSTANTS ───────────────────────────────────────────────────────
WEIGHTS   = (-1, 5, 7, 9, 4, 6, 10, 5, 7)
BASE_DATE = datetime(1899, 12, 31, tzinfo=timezone.utc)
MIN_DATE  = datetime(1900, 1, 1, tzinfo=timezone.utc)
MAX_DATE  = datetime(2173, 10, 14, tzinfo=timezone.utc)
GENDERS   = ('male', 'female')

# [0-9] rather than \d: str patterns match any Unicode digit with \d
_RNTRC_RE  = re.compile(r'[0-9]{10}')
_DIGITS_RE = re.compile(r'[0-9]*')


# ── 1.  HELPERS ─────────────────────────────────────────────────────────
def checksum(rntrc) -> str:
    """Check digit for the first 9 digits of ``rntrc`` (extra digits are ignored)."""
    digits = str(rntrc)[:len(WEIGHTS)]
    if not _DIGITS_RE.fullmatch(digits):
        raise FormatError(f"Cannot compute a checksum for non-digit input {digits!r}")

    total = sum(int(d) * w for d, w in zip(digits, WEIGHTS))
    # a remainder of 10 maps to 0
    return str(total % 11 % 10)


def is_valid(rntrc) -> bool:
    """True if ``rntrc`` is 10 digits and passes the checksum and gender-digit rules."""
    try:
        Rntrc(rntrc)
    except RntrcError:
        return False
    return True


def _as_int(value, field: str) -> int | None:
    """
    Read a day / month / year argument.

    None, NaN and non-numeric strings count as "not given". Infinite or
    fractional numbers are not dates and raise FormatError.
    """
    if value is None:
        return None
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            try:
                value = float(value)
            except ValueError:
                return None
    if isinstance(value, float):
        if math.isnan(value):
            return None
        if not value.is_integer():
            raise FormatError(f"Invalid date: {field} {value!r} is not a whole number")
    try:
        return int(value)
    except OverflowError as e:
        raise FormatError(f"Invalid date: {field} {value!r} is not a whole number") from e
    except (TypeError, ValueError):
        return None


def _out_of_range() -> RangeError:
    return RangeError(
        f"Birthdate must be between {MIN_DATE.date().isoformat()} "
        f"and {MAX_DATE.date().isoformat()}"
    )


# ── 2.  THE RNTRC VALUE ─────────────────────────────────────────────────
class Rntrc:
    """
    An immutable RNTRC number.

    ``Rntrc('1234567899')`` checks that the value is 10 digits (always) and that
    the check digit and gender digit are valid (unless ``ignore_invalid`` is set).
    """

    __slots__ = ('_value', '_ignore_invalid')

    def __init__(self, rntrc, ignore_invalid: bool = False):
        value = str(rntrc)
        if not _RNTRC_RE.fullmatch(value):
            raise FormatError(f"Invalid RNTRC {value!r}: must be exactly 10 digits")

        object.__setattr__(self, '_value', value)
        object.__setattr__(self, '_ignore_invalid', bool(ignore_invalid))

        if not self._ignore_invalid:
            if value[8] == '0':
                raise ValidationError(f"Invalid RNTRC {value}: gender digit must not be 0")
            expected = checksum(value)
            if value[9] != expected:
                raise ValidationError(
                    f"Invalid RNTRC {value}: check digit is {value[9]}, expected {expected}"
                )

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __reduce__(self):
        return (type(self), (self._value, self._ignore_invalid))

    # ── string conversions ──
    def __str__(self) -> str:
        return self._value

    def __repr__(self) -> str:
        if self._ignore_invalid:
            return f"Rntrc({self._value!r}, ignore_invalid=True)"
        return f"Rntrc({self._value!r})"

    def __format__(self, format_spec: str) -> str:
        return format(self._value, format_spec)

    def __eq__(self, other):
        if isinstance(other, Rntrc):
            return self._value == other._value
        if isinstance(other, str):
            return self._value == other
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._value)

    # ── derived fields ──
    @property
    def ignore_invalid(self) -> bool:
        return self._ignore_invalid

    def birthdate(self) -> datetime:
        """Birthdate as a UTC-midnight ``datetime``."""
        return BASE_DATE + timedelta(days=int(self._value[:5]))

    def gender(self) -> str:
        return 'male' if int(self._value[8]) % 2 else 'female'

    def male(self) -> bool:
        return self.gender() == 'male'

    def female(self) -> bool:
        return self.gender() == 'female'

    def accounting_card_number(self) -> str:
        """Sequence number of the accounting card (form 1DR), leading zeros kept."""
        return self._value[5:9]

    def valid(self) -> bool:
        if self._value[8] == '0':
            return False
        return self._value[9] == checksum(self._value)

    # ── generation ──
    @classmethod
    def generate(cls, day=None, month=None, year=None, gender: str | None = None,
                 *, rng=None, today: date | None = None) -> 'Rntrc':
        """
        Generate a valid RNTRC.

        • ``day`` / ``month`` / ``year`` may be ints or numeric strings; anything
          missing (or not a number) is picked at random, never later than ``today``.
          Fractional or infinite values are rejected.
        • ``gender`` is 'male', 'female' or None (random gender digit 1-8).
        • ``rng`` is any object with ``randint(a, b)``; defaults to the ``random`` module.
        • ``today`` defaults to the current UTC date.

        Raises FormatError for a date that does not exist or an unknown gender,
        RangeError for a birthdate outside 1900-01-01 … 2173-10-14.
        """
        if rng is None:
            rng = random
        if today is None:
            today = datetime.now(timezone.utc).date()

        year = _as_int(year, "year")
        if year is None:
            year = rng.randint(1900, today.year)
        if not MINYEAR <= year <= MAXYEAR:
            raise _out_of_range()

        month = _as_int(month, "month")
        if month is None:
            max_month = today.month if year == today.year else 12
            month = rng.randint(1, max_month)

        day = _as_int(day, "day")
        if day is None:
            if not 1 <= month <= 12:
                raise FormatError(f"Invalid date: {year}-{month}: no such month")
            if (year, month) == (today.year, today.month):
                max_day = today.day
            else:
                max_day = calendar.monthrange(year, month)[1]
            day = rng.randint(1, max_day)

        try:
            birthdate = datetime(year, month, day, tzinfo=timezone.utc)
        except (ValueError, OverflowError) as e:
            raise FormatError(f"Invalid date: {year}-{month}-{day}") from e

        if not MIN_DATE <= birthdate <= MAX_DATE:
            raise _out_of_range()

        days = (birthdate - BASE_DATE).days
        record = rng.randint(0, 999)

        if not gender:
            gender_digit = rng.randint(1, 8)
        elif gender == 'female':
            gender_digit = rng.randint(0, 3) * 2 + 2
        elif gender == 'male':
            gender_digit = rng.randint(0, 4) * 2 + 1
        else:
            raise FormatError('Gender must be either "male" or "female"')

        stem = f"{days:05d}{record:03d}{gender_digit}"
        logger.debug("Generated RNTRC stem %s for %s (gender=%s)",
                     stem, birthdate.date().isoformat(), gender or 'any')
        return cls(stem + checksum(stem))


generate = Rntrc.generate
