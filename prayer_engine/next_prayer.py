"""
Next-prayer selection and status classification.

Everything here is a re-evaluation over a snapshot: nothing is stored, so
callers can poll as often as they like (every tick, every minute).
"""

import logging
import math
from dataclasses import replace
from datetime import datetime, timedelta

from .errors import PrayerTimesError
from .models import DailyPrayerTimes, NextPrayer, PrayerTime, PrayerType, TimeRemaining

logger = logging.getLogger(__name__)


def _align(daily: DailyPrayerTimes, reference: datetime) -> datetime:
    """Naive reference instants are taken to be in the result's own frame."""
    if reference.tzinfo is None:
        return reference.replace(tzinfo=daily.prayers[0].time.tzinfo)
    return reference


def time_remaining(start: datetime, end: datetime) -> TimeRemaining:
    """Whole hours/minutes from ``start`` until ``end`` (floored, never negative)."""
    total_minutes = max(0, math.floor((end - start).total_seconds() / 60))
    return TimeRemaining(
        hours=total_minutes // 60,
        minutes=total_minutes % 60,
        total_minutes=total_minutes,
    )


def is_prayer_approaching(prayer_time: datetime, reference: datetime, threshold_minutes: float = 5) -> bool:
    diff = prayer_time - reference
    return timedelta(0) < diff <= timedelta(minutes=threshold_minutes)


def _tomorrow_fajr(daily: DailyPrayerTimes) -> PrayerTime:
    # Fajr moves from day to day, so it is recomputed rather than shifted by 24h.
    from .prayer_times import calculate_prayer_times

    tomorrow = calculate_prayer_times(
        daily.location.latitude,
        daily.location.longitude,
        daily.date + timedelta(days=1),
        daily.config,
    )
    return tomorrow.get(PrayerType.FAJR)


def _first_prayer_after(daily: DailyPrayerTimes, reference: datetime) -> PrayerTime:
    """Recompute around ``reference`` when it lies past the snapshot's following Fajr."""
    from .prayer_times import calculate_prayer_times

    # Start a day early: Isha of the previous civil day can fall after midnight.
    start = reference.astimezone(daily.prayers[0].time.tzinfo).date() - timedelta(days=1)
    for offset in range(3):
        other = calculate_prayer_times(
            daily.location.latitude,
            daily.location.longitude,
            start + timedelta(days=offset),
            daily.config,
        )
        for prayer in other.prayers:
            if prayer.type.is_prayer and prayer.time > reference:
                return prayer
    raise PrayerTimesError(f"No prayer found after {reference.isoformat()}")


def select_next_prayer(
    daily: DailyPrayerTimes,
    reference: datetime,
    imminent_threshold_minutes: float = 5,
) -> NextPrayer:
    """
    First prayer strictly after ``reference``; Sunrise is never a candidate.

    After Isha the next prayer is the following day's Fajr. A reference past
    that Fajr means the snapshot is stale: the days around the reference are
    recomputed and the first prayer after it is returned, still flagged
    ``is_tomorrow`` since it is not part of ``daily``. May raise
    NoGeometricSolution if a recomputed day has no solution at this latitude.
    """
    reference = _align(daily, reference)
    candidate = next(
        (p for p in daily.prayers if p.type.is_prayer and p.time > reference),
        None,
    )
    is_tomorrow = candidate is None
    if is_tomorrow:
        candidate = _tomorrow_fajr(daily)
        logger.debug("All prayers of %s passed; next is Fajr at %s", daily.date, candidate.time)
        if candidate.time <= reference:
            logger.warning("Snapshot for %s is stale at %s; recomputing", daily.date, reference.isoformat())
            candidate = _first_prayer_after(daily, reference)

    remaining = time_remaining(reference, candidate.time)
    return NextPrayer(
        prayer=replace(candidate, is_next=True, is_passed=False, is_upcoming=False, is_imminent=False),
        remaining=remaining,
        is_tomorrow=is_tomorrow,
        is_imminent=is_prayer_approaching(candidate.time, reference, imminent_threshold_minutes),
    )


def classify_prayers(
    daily: DailyPrayerTimes,
    reference: datetime,
    imminent_threshold_minutes: float = 5,
) -> DailyPrayerTimes:
    """
    Fresh copy of ``daily`` with status flags set against ``reference``.

    Each entry is exactly one of next / passed / upcoming; upcoming entries
    within the threshold are additionally flagged imminent.
    """
    reference = _align(daily, reference)
    selected = select_next_prayer(daily, reference, imminent_threshold_minutes)
    threshold = timedelta(minutes=imminent_threshold_minutes)

    prayers = []
    for prayer in daily.prayers:
        if not selected.is_tomorrow and prayer.type is selected.prayer.type:
            flags = dict(is_next=True, is_passed=False, is_upcoming=False, is_imminent=False)
        elif prayer.time < reference:
            flags = dict(is_next=False, is_passed=True, is_upcoming=False, is_imminent=False)
        else:
            flags = dict(
                is_next=False,
                is_passed=False,
                is_upcoming=True,
                is_imminent=prayer.time - reference <= threshold,
            )
        prayers.append(replace(prayer, **flags))

    return replace(
        daily,
        prayers=tuple(prayers),
        next_prayer=selected.prayer,
        time_to_next=selected.remaining,
        next_is_tomorrow=selected.is_tomorrow,
        next_is_imminent=selected.is_imminent,
    )


def current_prayer(daily: DailyPrayerTimes, reference: datetime) -> PrayerType | None:
    """
    The prayer whose period ``reference`` falls in.

    Fajr lasts until Sunrise; between Sunrise and Dhuhr there is no prayer
    period (None). Before Fajr it is still the previous night's Isha.
    """
    reference = _align(daily, reference)
    prayers = daily.prayers
    for i, prayer in enumerate(prayers):
        if not prayer.type.is_prayer:
            continue
        following = prayers[i + 1] if i + 1 < len(prayers) else None
        if prayer.time <= reference and (following is None or following.time > reference):
            return prayer.type
    if reference < prayers[0].time:
        return PrayerType.ISHA
    return None
