#!/usr/bin/env python3
"""
mask_solver.py
──────────────
Generate every valid RNTRC that matches a 10-char mask.
  * Use '*' for unknown digits in the mask.
  * Gender filter is 'M', 'F', or 'U' (unknown).

Example:
    RNTRC_MASK=33333012**  RNTRC_GENDER=F  python -m rntrc.mask_solver

The check digit is never brute-forced: a '*' in the last position takes the
computed checksum, a fixed digit there only keeps candidates that match it.
"""

import logging
import os
import sys
from itertools import product

from dotenv import load_dotenv

from .codec import Rntrc, checksum
from .errors import FormatError, RntrcError

logger = logging.getLogger(__name__)

# ── 0.  CONFIGURATION ───────────────────────────────────────────────────
DEFAULT_MASK      = "33333012**"
DEFAULT_GENDER    = "U"              # 'M' / 'F' / 'U'
DEFAULT_LOG_LEVEL = "INFO"

ALL_DIGITS = "0123456789"
GENDER_DIGITS = {
    "M": "13579",
    "F": "2468",                     # 0 is never a valid gender digit
    "U": "123456789",
}


# ── 1.  SOLVER ──────────────────────────────────────────────────────────
def _check_mask(mask: str) -> str:
    mask = str(mask)
    if len(mask) != 10 or not set(mask) <= set(ALL_DIGITS + "*"):
        raise FormatError(f"Mask must be 10 chars of 0-9 or *, got {mask!r}")
    return mask


def _gender_digits(gender: str) -> str:
    key = str(gender).upper()
    if key not in GENDER_DIGITS:
        raise FormatError(f"Gender must be 'M', 'F' or 'U', got {gender!r}")
    return GENDER_DIGITS[key]


def solve(mask: str, gender: str = "U"):
    """Yield every valid RNTRC matching ``mask``, in ascending order."""
    mask = _check_mask(mask)
    allowed_gender = _gender_digits(gender)

    opts = []
    for i, ch in enumerate(mask[:9]):
        if i == 8:
            pool = allowed_gender
            opts.append(pool if ch == "*" else (ch if ch in pool else ""))
        elif ch == "*":
            opts.append(ALL_DIGITS)
        else:
            opts.append(ch)

    wanted_check = mask[9]
    logger.debug("Solving mask %s (gender=%s), %d wildcard(s)",
                 mask, gender, mask.count("*"))

    for combo in product(*opts):
        stem = "".join(combo)
        if stem[:5] == "00000":       # the epoch itself, before 1900-01-01
            continue
        check = checksum(stem)
        if wanted_check != "*" and wanted_check != check:
            continue
        yield stem + check


def count(mask: str, gender: str = "U") -> int:
    return sum(1 for _ in solve(mask, gender))


# ── 2.  ENTRY POINT ─────────────────────────────────────────────────────
def _log_level(name: str | None) -> str:
    """Upper-cased level name, or DEFAULT_LOG_LEVEL if logging does not know it."""
    level = (name or DEFAULT_LOG_LEVEL).strip().upper()
    if not isinstance(logging.getLevelName(level), int):
        return DEFAULT_LOG_LEVEL
    return level


def main() -> None:
    load_dotenv()

    requested_level = os.getenv("RNTRC_LOG_LEVEL", DEFAULT_LOG_LEVEL)
    logging.basicConfig(
        level=_log_level(requested_level),
        format='%(asctime)s - %(levelname)s - %(message)s',
        handlers=[logging.StreamHandler(sys.stdout)]
    )
    if _log_level(requested_level) != requested_level.strip().upper():
        logging.warning(f"Unknown RNTRC_LOG_LEVEL {requested_level!r}, using {DEFAULT_LOG_LEVEL}")

    mask = os.getenv("RNTRC_MASK", DEFAULT_MASK)
    gender = os.getenv("RNTRC_GENDER", DEFAULT_GENDER)
    logging.info(f"Solving mask {mask} for gender {gender}")

    total = 0
    try:
        for value in solve(mask, gender):
            rntrc = Rntrc(value)
            print(f"{rntrc}  {rntrc.birthdate().date().isoformat()}  {rntrc.gender()}")
            total += 1
    except RntrcError as e:
        logging.error(f"Cannot solve mask: {e}")
        sys.exit(str(e))

    print(f"\nGenerated {total} RNTRCs that satisfy the mask.")
    logging.info("Mask solver finished.")


if __name__ == "__main__":
    main()
