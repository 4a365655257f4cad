"""
Prayer times from astronomical formulas.

Fajr and Isha use the twilight angles of the selected calculation method,
Sunrise and Maghrib use 0.833° below the horizon (refraction plus the solar
disk radius) and Asr uses the shadow-length rule of the selected madhab.
"""

import logging
from datetime import date as date_type, datetime, timedelta, timezone

from .errors import BoundaryFailure, NoGeometricSolution
from .methods import IshaInterval, PrayerConfig, get_madhab, get_method
from .models import DailyPrayerTimes, GeoCoordinate, PrayerTime, PrayerType
from .qibla import calculate_qibla, is_at_kaaba
from .solar import solar_position
from .solver import asr_angle, time_from_angle

logger = logging.getLogger(__name__)

SUNRISE_SUNSET_ANGLE = 0.833
DEFAULT_IMMINENT_THRESHOLD_MINUTES = 5


def format_time(ts: datetime, use_12_hour: bool = True) -> str:
    """'5:12 AM' style (12h) or '05:12' (24h), always with ASCII digits."""
    if not use_12_hour:
        return f"{ts.hour:02d}:{ts.minute:02d}"
    suffix = "AM" if ts.hour < 12 else "PM"
    hour = ts.hour % 12 or 12
    return f"{hour}:{ts.minute:02d} {suffix}"


def _frame(utc_offset: float) -> timezone:
    if utc_offset == 0:
        return timezone.utc
    return timezone(timedelta(hours=utc_offset))


def _hours_to_datetime(day: date_type, hours: float, tz: timezone) -> datetime:
    """
    Absolute timestamp ``hours`` after the date's midnight, rounded to the minute.

    Values outside [0, 24) land on the neighbouring day instead of wrapping,
    so the six boundaries stay in chronological order.
    """
    midnight = datetime(day.year, day.month, day.day, tzinfo=tz)
    return midnight + timedelta(minutes=round(hours * 60))


def calculate_prayer_times(
    latitude: float,
    longitude: float,
    day: date_type,
    config: PrayerConfig | None = None,
    *,
    reference: datetime | None = None,
    imminent_threshold_minutes: float = DEFAULT_IMMINENT_THRESHOLD_MINUTES,
) -> DailyPrayerTimes:
    """
    Compute the six boundaries for one civil day.

    config.utc_offset selects the frame of the returned timestamps (hours east
    of UTC, 0 = UTC). When ``reference`` is given the result comes back already
    classified against it (see next_prayer.classify_prayers); otherwise every
    status flag is False and no next prayer is selected.

    Raises InvalidCoordinate, UnknownMethodOrMadhab or NoGeometricSolution.
    """
    location = GeoCoordinate(latitude, longitude)
    config = config or PrayerConfig()
    method = get_method(config.method)
    madhab = get_madhab(config.madhab)
    if isinstance(day, datetime):
        day = day.date()

    sun = solar_position(day)
    decl = sun.declination
    dhuhr = 12.0 + config.utc_offset - longitude / 15.0 - sun.equation_of_time / 60.0
    logger.debug(
        "Solar position for %s: decl=%.4f eqt=%.3fmin noon=%.4fh",
        day, decl, sun.equation_of_time, dhuhr,
    )

    failures: list[BoundaryFailure] = []

    def hours_from_noon(boundary: PrayerType, angle: float) -> float | None:
        offset = time_from_angle(angle, latitude, decl)
        if offset is None:
            failures.append(BoundaryFailure(
                boundary=boundary.value,
                angle=angle,
                reason=(
                    f"the sun does not reach {angle:.3f}° at latitude {latitude} on "
                    f"{day.isoformat()} ({method.key})"
                ),
            ))
        return offset

    fajr_offset = hours_from_noon(PrayerType.FAJR, -method.fajr_angle)
    sunrise_offset = hours_from_noon(PrayerType.SUNRISE, -SUNRISE_SUNSET_ANGLE)
    asr_offset = hours_from_noon(PrayerType.ASR, asr_angle(latitude, decl, madhab.shadow_factor))
    sunset_offset = hours_from_noon(PrayerType.MAGHRIB, -SUNRISE_SUNSET_ANGLE)

    if isinstance(method.isha, IshaInterval):
        if sunset_offset is None:
            failures.append(BoundaryFailure(
                boundary=PrayerType.ISHA.value,
                angle=-SUNRISE_SUNSET_ANGLE,
                reason=f"Isha is {method.isha.minutes} minutes after Maghrib, which has no solution",
            ))
            isha = None
        else:
            isha = dhuhr + sunset_offset + method.isha.minutes / 60.0
    else:
        isha_offset = hours_from_noon(PrayerType.ISHA, -method.isha.degrees)
        isha = None if isha_offset is None else dhuhr + isha_offset

    if failures:
        error = NoGeometricSolution(failures)
        logger.warning("%s (lat=%s, lng=%s, date=%s)", error, latitude, longitude, day)
        raise error

    hours = {
        PrayerType.FAJR: dhuhr - fajr_offset,
        PrayerType.SUNRISE: dhuhr - sunrise_offset,
        PrayerType.DHUHR: dhuhr,
        PrayerType.ASR: dhuhr + asr_offset,
        PrayerType.MAGHRIB: dhuhr + sunset_offset,
        PrayerType.ISHA: isha,
    }

    tz = _frame(config.utc_offset)
    prayers = []
    for prayer_type, value in hours.items():
        ts = _hours_to_datetime(day, value, tz)
        ts += timedelta(minutes=config.adjustments.minutes_for(prayer_type.key))
        prayers.append(PrayerTime(
            name=prayer_type.value,
            arabic_name=prayer_type.arabic_name,
            time=ts,
            time_string=format_time(ts),
            type=prayer_type,
        ))

    result = DailyPrayerTimes(
        date=day,
        location=location,
        config=config,
        prayers=tuple(prayers),
        sunrise=prayers[1].time,
        sunset=prayers[4].time,
        qibla=calculate_qibla(latitude, longitude),
        qibla_degenerate=is_at_kaaba(latitude, longitude),
    )

    if reference is None:
        return result

    from .next_prayer import classify_prayers
    return classify_prayers(result, reference, imminent_threshold_minutes)

