"""
Prayer-time calculation engine.

Pure functions only: identical inputs always give identical outputs and no
call shares state with another.
"""

from .errors import (
    BoundaryFailure,
    InvalidAdjustment,
    InvalidCoordinate,
    NoGeometricSolution,
    PrayerTimesError,
    UnknownMethodOrMadhab,
)
from .methods import (
    METHODS,
    CalculationMethod,
    IshaAngle,
    IshaInterval,
    Madhab,
    PrayerAdjustments,
    PrayerConfig,
    available_madhabs,
    available_methods,
    get_madhab,
    get_method,
    resolve_config,
)
from .models import (
    DailyPrayerTimes,
    GeoCoordinate,
    NextPrayer,
    PrayerTime,
    PrayerType,
    TimeRemaining,
)
from .next_prayer import (
    classify_prayers,
    current_prayer,
    is_prayer_approaching,
    select_next_prayer,
    time_remaining,
)
from .prayer_times import calculate_prayer_times, format_time
from .qibla import KAABA_LATITUDE, KAABA_LONGITUDE, calculate_qibla, is_at_kaaba
from .solar import SolarPosition, julian_day, solar_position
from .solver import asr_angle, time_from_angle

__all__ = [
    "BoundaryFailure",
    "CalculationMethod",
    "DailyPrayerTimes",
    "GeoCoordinate",
    "InvalidAdjustment",
    "InvalidCoordinate",
    "IshaAngle",
    "IshaInterval",
    "KAABA_LATITUDE",
    "KAABA_LONGITUDE",
    "METHODS",
    "Madhab",
    "NextPrayer",
    "NoGeometricSolution",
    "PrayerAdjustments",
    "PrayerConfig",
    "PrayerTime",
    "PrayerTimesError",
    "PrayerType",
    "SolarPosition",
    "TimeRemaining",
    "UnknownMethodOrMadhab",
    "asr_angle",
    "available_madhabs",
    "available_methods",
    "calculate_prayer_times",
    "calculate_qibla",
    "classify_prayers",
    "current_prayer",
    "format_time",
    "get_madhab",
    "get_method",
    "is_at_kaaba",
    "is_prayer_approaching",
    "julian_day",
    "resolve_config",
    "select_next_prayer",
    "solar_position",
    "time_from_angle",
    "time_remaining",
]
