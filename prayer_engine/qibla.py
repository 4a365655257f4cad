"""Great-circle bearing toward the Kaaba."""

import math

from .models import GeoCoordinate
from .solar import _deg2rad, _rad2deg

KAABA_LATITUDE = 21.4225
KAABA_LONGITUDE = 39.8262

# Closer than this (in degrees on both axes) the bearing is meaningless.
_SELF_TOLERANCE = 1e-6


def is_at_kaaba(latitude: float, longitude: float) -> bool:
    return (
        abs(latitude - KAABA_LATITUDE) < _SELF_TOLERANCE
        and abs(longitude - KAABA_LONGITUDE) < _SELF_TOLERANCE
    )


def calculate_qibla(latitude: float, longitude: float) -> float:
    """
    Initial bearing from the observer to the Kaaba, degrees clockwise from
    true north in [0, 360).

    At the Kaaba itself the direction is undefined and 0.0 is returned; use
    is_at_kaaba() to tell that case apart from due north.
    """
    GeoCoordinate(latitude, longitude)
    if is_at_kaaba(latitude, longitude):
        return 0.0

    d_lng = _deg2rad(KAABA_LONGITUDE - longitude)
    lat1 = _deg2rad(latitude)
    lat2 = _deg2rad(KAABA_LATITUDE)

    x = math.sin(d_lng) * math.cos(lat2)
    y = math.cos(lat1) * math.sin(lat2) - math.sin(lat1) * math.cos(lat2) * math.cos(d_lng)

    bearing = (_rad2deg(math.atan2(x, y)) + 360.0) % 360.0
    # (-tiny + 360) % 360 can round up to exactly 360.0
    return 0.0 if bearing >= 360.0 else bearing
