"""Value objects produced by the engine."""

import math
from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Any

from .errors import InvalidCoordinate
from .methods import PrayerConfig


class PrayerType(str, Enum):
    FAJR = "Fajr"
    SUNRISE = "Sunrise"
    DHUHR = "Dhuhr"
    ASR = "Asr"
    MAGHRIB = "Maghrib"
    ISHA = "Isha"

    @property
    def key(self) -> str:
        """Lower-case name used for adjustments and JSON keys."""
        return self.value.lower()

    @property
    def arabic_name(self) -> str:
        return ARABIC_NAMES[self]

    @property
    def is_prayer(self) -> bool:
        """Sunrise is a displayed boundary, not a prayer."""
        return self is not PrayerType.SUNRISE


ARABIC_NAMES = {
    PrayerType.FAJR: "الفجر",
    PrayerType.SUNRISE: "الشروق",
    PrayerType.DHUHR: "الظهر",
    PrayerType.ASR: "العصر",
    PrayerType.MAGHRIB: "المغرب",
    PrayerType.ISHA: "العشاء",
}


@dataclass(frozen=True)
class GeoCoordinate:
    latitude: float
    longitude: float

    def __post_init__(self) -> None:
        lat, lng = self.latitude, self.longitude
        if not (isinstance(lat, (int, float)) and isinstance(lng, (int, float))):
            raise InvalidCoordinate(lat, lng)
        if not (math.isfinite(lat) and math.isfinite(lng)):
            raise InvalidCoordinate(lat, lng)
        if not (-90 <= lat <= 90 and -180 <= lng <= 180):
            raise InvalidCoordinate(lat, lng)

    def to_dict(self) -> dict[str, float]:
        return {"latitude": self.latitude, "longitude": self.longitude}


@dataclass(frozen=True)
class TimeRemaining:
    hours: int
    minutes: int
    total_minutes: int

    def to_dict(self) -> dict[str, int]:
        return {"hours": self.hours, "minutes": self.minutes, "totalMinutes": self.total_minutes}


@dataclass(frozen=True)
class PrayerTime:
    name: str
    arabic_name: str
    time: datetime
    time_string: str
    type: PrayerType
    is_passed: bool = False
    is_next: bool = False
    is_upcoming: bool = False
    is_imminent: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "arabicName": self.arabic_name,
            "time": self.time.isoformat(),
            "timeString": self.time_string,
            "type": self.type.value,
            "isPassed": self.is_passed,
            "isNext": self.is_next,
            "isUpcoming": self.is_upcoming,
            "isImminent": self.is_imminent,
        }


@dataclass(frozen=True)
class NextPrayer:
    prayer: PrayerTime
    remaining: TimeRemaining
    is_tomorrow: bool = False
    is_imminent: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "prayer": self.prayer.to_dict(),
            "remaining": self.remaining.to_dict(),
            "isTomorrow": self.is_tomorrow,
            "isImminent": self.is_imminent,
        }


@dataclass(frozen=True)
class DailyPrayerTimes:
    date: date
    location: GeoCoordinate
    config: PrayerConfig
    prayers: tuple[PrayerTime, ...]
    sunrise: datetime
    sunset: datetime
    qibla: float
    qibla_degenerate: bool = False
    next_prayer: PrayerTime | None = None
    time_to_next: TimeRemaining | None = None
    next_is_tomorrow: bool = False
    next_is_imminent: bool = False

    def get(self, prayer_type: PrayerType | str) -> PrayerTime:
        prayer_type = PrayerType(prayer_type)
        for prayer in self.prayers:
            if prayer.type is prayer_type:
                return prayer
        raise KeyError(prayer_type)

    def times(self) -> dict[str, datetime]:
        """Boundary timestamps keyed by lower-case name."""
        return {p.type.key: p.time for p in self.prayers}

    def to_dict(self) -> dict[str, Any]:
        return {
            "date": self.date.isoformat(),
            "location": self.location.to_dict(),
            "config": self.config.to_dict(),
            "prayers": [p.to_dict() for p in self.prayers],
            "nextPrayer": self.next_prayer.to_dict() if self.next_prayer else None,
            "timeToNext": self.time_to_next.to_dict() if self.time_to_next else None,
            "nextIsTomorrow": self.next_is_tomorrow,
            "nextIsImminent": self.next_is_imminent,
            "sunrise": self.sunrise.isoformat(),
            "sunset": self.sunset.isoformat(),
            "qibla": self.qibla,
            "qiblaDegenerate": self.qibla_degenerate,
        }
