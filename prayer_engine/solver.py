"""Hour-angle solving for a target sun altitude."""

import math

from .solar import _deg2rad, _rad2deg


def time_from_angle(angle_deg: float, lat_deg: float, decl_deg: float) -> float | None:
    """
    Hours between solar noon and the moment the sun reaches ``angle_deg``.

    angle_deg: sun altitude, negative = below the horizon (e.g. -18 for Fajr).
    Returns None if the sun never reaches that altitude on this day at this
    latitude (polar day/night). The result is always non-negative.
    """
    lat_r = _deg2rad(lat_deg)
    decl_r = _deg2rad(decl_deg)
    denominator = math.cos(lat_r) * math.cos(decl_r)
    if denominator == 0:
        return None
    cos_omega = (math.sin(_deg2rad(angle_deg)) - math.sin(lat_r) * math.sin(decl_r)) / denominator
    if not -1.0 <= cos_omega <= 1.0:
        return None
    return _rad2deg(math.acos(cos_omega)) / 15.0


def asr_angle(lat_deg: float, decl_deg: float, shadow_factor: int) -> float:
    """Sun altitude (degrees) at which a stick's shadow is ``shadow_factor`` times its length plus the noon shadow."""
    zenith_at_noon = _deg2rad(abs(lat_deg - decl_deg))
    return _rad2deg(math.atan(1.0 / (shadow_factor + math.tan(zenith_at_noon))))
