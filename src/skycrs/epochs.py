"""
skycrs.epochs — Epochs, Julian Dates & Date Strings
=====================================================

Conversions between Besselian epochs, Julian epochs and Julian Dates, the
old and new FITS ``DATE-OBS`` formats, and the epoch-string parser used to
turn user-supplied equinoxes (``"B1950"``, ``"J2000"``, ``"MJD51544.5"``,
``"F1999-12-31T12:00:00"`` ...) into decimal years.

Besselian epochs use the tropical year at B1900; Julian epochs use the
Julian year of 365.25 days from J2000.0 = JD 2451545.0.

Reference
---------
Meeus, J. (1998). *Astronomical Algorithms*, 2nd ed., Ch. 7.
Lieske, J.H. (1979). A&A 73, 282 (Besselian/Julian epochs).
"""

import logging
import re
from datetime import datetime, timedelta
from typing import NamedTuple

from .errors import MalformedEpochError
from .utils import (
    JD_B1900, JD_J2000, JULIAN_YEAR, TROPICAL_YEAR, MJD_OFFSET, RJD_OFFSET,
)

logger = logging.getLogger(__name__)


class Epoch(NamedTuple):
    """One instant expressed three ways."""
    besselian: float
    julian: float
    julian_date: float


# ════════════════════════════════════════════════════════════════════════════
#  Epoch ↔ Julian Date
# ════════════════════════════════════════════════════════════════════════════

def besselian_epoch_to_jd(epoch: float) -> float:
    """Besselian epoch (e.g. 1950.0) → Julian Date."""
    return (epoch - 1900.0) * TROPICAL_YEAR + JD_B1900


def jd_to_besselian_epoch(jd: float) -> float:
    """Julian Date → Besselian epoch."""
    return 1900.0 + (jd - JD_B1900) / TROPICAL_YEAR


def julian_epoch_to_jd(epoch: float) -> float:
    """Julian epoch (e.g. 2000.0) → Julian Date."""
    return (epoch - 2000.0) * JULIAN_YEAR + JD_J2000


def jd_to_julian_epoch(jd: float) -> float:
    """Julian Date → Julian epoch."""
    return 2000.0 + (jd - JD_J2000) / JULIAN_YEAR


# ════════════════════════════════════════════════════════════════════════════
#  Calendar Dates
# ════════════════════════════════════════════════════════════════════════════

def calendar_to_jd(year: int, month: int, day: float) -> float:
    """Julian Date of a calendar date with fractional day.

    The Gregorian correction is applied after 1582-10-15; earlier dates are
    taken in the Julian calendar, including those before 29 Feb of year 0.

    Parameters
    ----------
    year : int
    month : int — 1..12
    day : float — day of month, fraction of day included

    Returns
    -------
    jd : float
    """
    if not 1 <= month <= 12:
        raise ValueError(f"month must be in [1,12], got {month}")

    if month > 2:
        y, m = year, month
    else:
        y, m = year - 1, month + 12

    calday = year + month / 100.0 + day / 10_000.0
    if calday > 1582.1015:
        a = int(y / 100.0)
        b = 2 - a + int(a / 4.0)
    else:
        b = 0

    if calday > 0.0229:
        days = int(365.25 * y)
    else:
        days = int(365.25 * y - 0.75)
    return days + int(30.6001 * (m + 1)) + day + 1_720_994.5 + b


def jd_to_calendar(jd: float) -> tuple[int, int, float]:
    """Julian Date → (year, month, fractional day)  (Meeus algorithm)."""
    z = int(jd + 0.5)
    f = (jd + 0.5) - z
    if z < 2_299_161:
        a = z
    else:
        alpha = int((z - 1_867_216.25) / 36_524.25)
        a = z + 1 + alpha - alpha // 4
    b = a + 1524
    c = int((b - 122.1) / 365.25)
    d = int(365.25 * c)
    e = int((b - d) / 30.6001)

    day = b - d - int(30.6001 * e) + f
    month = e - 1 if e < 14 else e - 13
    year = c - 4716 if month > 2 else c - 4715
    return int(year), int(month), float(day)


def fits_date(text: str) -> tuple[int, int, float]:
    """Split a FITS date into (year, month, fractional day).

    Accepts the old ``dd/mm/yy`` form (years 1900-1999) and the ISO form
    ``YYYY-MM-DD[Thh:mm:ss[.sss]]``.
    """
    text = text.strip()
    try:
        parts = text.split("/")
        if len(parts) == 3:
            year = int(parts[2]) % 1900 + 1900
            return year, int(parts[1]), float(parts[0])

        seconds = 0.0
        date_part, _, time_part = text.partition("T")
        if time_part:
            for value, scale in zip(time_part.split(":"), (3600.0, 60.0, 1.0)):
                seconds += float(value) * scale

        year_s, month_s, day_s = date_part.split("-")
        return int(year_s), int(month_s), float(day_s) + seconds / 86_400.0
    except ValueError as exc:
        raise MalformedEpochError(f"cannot parse FITS date {text!r}") from exc


# ── ISO Strings ─────────────────────────────────────────────────────────────

def iso_to_julian_date(date_obs: str) -> float:
    """ISO date (``YYYY-MM-DD[Thh:mm:ss[.sss]]`` or ``dd/mm/yy``) → JD."""
    year, month, day = fits_date(date_obs)
    return calendar_to_jd(year, month, day)


def iso_to_modified_julian_date(date_obs: str) -> float:
    """ISO date → Modified Julian Date."""
    return iso_to_julian_date(date_obs) - MJD_OFFSET


def julian_date_to_iso(jd: float) -> str:
    """Julian Date → ``YYYY-MM-DDThh:mm:ss`` (seconds rounded)."""
    year, month, day = jd_to_calendar(jd)
    whole_day = int(day)
    seconds = round((day - whole_day) * 86_400.0)
    stamp = datetime(year, month, whole_day) + timedelta(seconds=seconds)
    return stamp.isoformat(timespec="seconds")


def modified_julian_date_to_iso(mjd: float) -> str:
    """Modified Julian Date → ISO string."""
    return julian_date_to_iso(mjd + MJD_OFFSET)


# ════════════════════════════════════════════════════════════════════════════
#  Epoch Strings
# ════════════════════════════════════════════════════════════════════════════
#
#  "<prefix><number>[_anything]"   prefix ∈ {B, -B, J, -J, JD, MJD, RJD, F}
#
#  B/J take an epoch in years (negated for the "-" forms), JD/MJD/RJD a day
#  count, F a FITS date.
# ════════════════════════════════════════════════════════════════════════════

_PREFIX_RE = re.compile(r"^(?P<prefix>[^\d]*)(?P<value>\d.*)?$")


def _parse_number(prefix: str, value: str) -> float:
    try:
        return float(value)
    except ValueError as exc:
        raise MalformedEpochError(
            f"cannot convert {value!r} to a number after prefix {prefix!r}"
        ) from exc


def parse_epoch(value_str: str) -> Epoch:
    """Parse an epoch string into Besselian epoch, Julian epoch and JD.

    Parameters
    ----------
    value_str : str — e.g. ``"B1950"``, ``"J2000.0"``, ``"JD2451545"``,
        ``"MJD51544.5"``, ``"RJD51545"``, ``"F1999-12-31T12:00:00"``.
        Anything after an underscore is ignored; the prefix is
        case-insensitive.

    Returns
    -------
    Epoch(besselian, julian, julian_date)

    Raises
    ------
    MalformedEpochError
        no prefix, unknown prefix, or a number that does not parse.
    """
    text = str(value_str).strip().split("_", 1)[0]
    match = _PREFIX_RE.match(text)
    if match is None or not match.group("prefix"):
        raise MalformedEpochError(
            f'epoch {value_str!r} should start with "J", "B", "JD", "MJD", "RJD" or "F"'
        )
    prefix = match.group("prefix").strip().upper()
    value = match.group("value")
    if value is None:
        raise MalformedEpochError(f"epoch {value_str!r} has no numeric value")

    if prefix in ("B", "-B"):
        b = _parse_number(prefix, value)
        if prefix == "-B":
            b = -b
        jd = besselian_epoch_to_jd(b)
        epoch = Epoch(b, jd_to_julian_epoch(jd), jd)
    elif prefix in ("J", "-J"):
        j = _parse_number(prefix, value)
        if prefix == "-J":
            j = -j
        jd = julian_epoch_to_jd(j)
        epoch = Epoch(jd_to_besselian_epoch(jd), j, jd)
    elif prefix in ("JD", "MJD", "RJD"):
        jd = _parse_number(prefix, value)
        if prefix == "MJD":
            jd += MJD_OFFSET
        elif prefix == "RJD":
            jd += RJD_OFFSET
        epoch = Epoch(jd_to_besselian_epoch(jd), jd_to_julian_epoch(jd), jd)
    elif prefix == "F":
        year, month, day = fits_date(value)
        try:
            jd = calendar_to_jd(year, month, day)
        except ValueError as exc:
            raise MalformedEpochError(f"bad FITS date in epoch {value_str!r}") from exc
        epoch = Epoch(jd_to_besselian_epoch(jd), jd_to_julian_epoch(jd), jd)
    else:
        raise MalformedEpochError(f"unknown prefix for epoch: {prefix!r}")

    logger.debug("parsed epoch %r → %s", value_str, epoch)
    return epoch
