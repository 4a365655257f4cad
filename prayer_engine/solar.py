"""
Low-precision solar ephemeris: Julian day, declination and equation of time.

Accurate to roughly one arcminute, which is enough for prayer times and not
meant for general astronomy.
"""

import math
from dataclasses import dataclass
from datetime import date as date_type

J2000 = 2451545.0
OBLIQUITY = 23.439


@dataclass(frozen=True)
class SolarPosition:
    julian_day: float
    declination: float  # degrees
    equation_of_time: float  # minutes


def _deg2rad(d: float) -> float:
    return d * math.pi / 180.0


def _rad2deg(r: float) -> float:
    return r * 180.0 / math.pi


def _wrap_180(degrees: float) -> float:
    """Wrap an angle into (-180, 180]."""
    d = math.fmod(degrees, 360.0)
    if d > 180.0:
        d -= 360.0
    elif d <= -180.0:
        d += 360.0
    return d


def julian_day(year: int, month: int, day: int) -> float:
    """Julian day at 0h of a Gregorian calendar date."""
    if month <= 2:
        year -= 1
        month += 12
    A = math.floor(year / 100)
    B = 2 - A + math.floor(A / 4)
    return math.floor(365.25 * (year + 4716)) + math.floor(30.6001 * (month + 1)) + day + B - 1524.5


def solar_position(day: date_type) -> SolarPosition:
    """
    Declination and equation of time for a civil date.

    Any time-of-day component of ``day`` is ignored.
    """
    jd = julian_day(day.year, day.month, day.day)
    n = jd - J2000

    L = (280.460 + 0.9856474 * n) % 360.0
    g = _deg2rad((357.528 + 0.9856003 * n) % 360.0)
    lam = _deg2rad(L + 1.915 * math.sin(g) + 0.020 * math.sin(2 * g))

    eps = _deg2rad(OBLIQUITY)
    decl = _rad2deg(math.asin(math.sin(lam) * math.sin(eps)))
    alpha = _rad2deg(math.atan2(math.cos(eps) * math.sin(lam), math.cos(lam)))

    # L is in [0, 360) while atan2 gives (-180, 180]; unwrapped the
    # difference jumps by a full turn near the March equinox.
    eqt = 4.0 * _wrap_180(L - alpha)

    return SolarPosition(julian_day=jd, declination=decl, equation_of_time=eqt)
