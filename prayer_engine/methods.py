"""
Calculation-method profiles, madhab rules and per-prayer adjustments.

Everything here is immutable: profiles live in a read-only mapping and every
record is a frozen dataclass, so a resolved configuration can be shared
between threads freely.
"""

import math
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping

from .errors import InvalidAdjustment, UnknownMethodOrMadhab

BOUNDARY_KEYS = ("fajr", "sunrise", "dhuhr", "asr", "maghrib", "isha")


@dataclass(frozen=True)
class IshaAngle:
    """Isha starts when the sun is ``degrees`` below the horizon."""

    degrees: float


@dataclass(frozen=True)
class IshaInterval:
    """Isha starts a fixed number of minutes after Maghrib."""

    minutes: int


IshaRule = IshaAngle | IshaInterval


@dataclass(frozen=True)
class CalculationMethod:
    key: str
    name: str
    arabic_name: str
    fajr_angle: float
    isha: IshaRule
    region: str = "Global"

    @property
    def isha_angle(self) -> float | None:
        return self.isha.degrees if isinstance(self.isha, IshaAngle) else None

    @property
    def isha_offset_minutes(self) -> int | None:
        return self.isha.minutes if isinstance(self.isha, IshaInterval) else None

    def to_dict(self) -> dict[str, Any]:
        return {
            "key": self.key,
            "name": self.name,
            "nameAr": self.arabic_name,
            "region": self.region,
            "fajrAngle": self.fajr_angle,
            "ishaAngle": self.isha_angle,
            "ishaOffsetMinutes": self.isha_offset_minutes,
        }


_METHODS = (
    CalculationMethod("MuslimWorldLeague", "Muslim World League", "رابطة العالم الإسلامي", 18, IshaAngle(17)),
    CalculationMethod("Egyptian", "Egyptian General Authority of Survey", "الهيئة المساحية المصرية", 19.5, IshaAngle(17.5)),
    CalculationMethod("Karachi", "University of Islamic Sciences, Karachi", "جامعة العلوم الإسلامية كراتشي", 18, IshaAngle(18)),
    CalculationMethod("UmmAlQura", "Umm al-Qura University (Saudi Arabia)", "جامعة أم القرى", 18.5, IshaInterval(90), region="Saudi Arabia"),
    CalculationMethod("Kuwait", "Kuwait Ministry of Awqaf", "وزارة الأوقاف الكويتية", 18, IshaAngle(17.5)),
    # 90 here is minutes after Maghrib, the same rule as Umm al-Qura
    CalculationMethod("Qatar", "Qatar Islamic Affairs Ministry", "وزارة الأوقاف القطرية", 18, IshaInterval(90)),
    CalculationMethod("Singapore", "Islamic Religious Council of Singapore", "المجلس الإسلامي سنغافورة", 20, IshaAngle(18)),
    CalculationMethod("NorthAmerica", "Islamic Society of North America", "الجمعية الإسلامية لأمريكا الشمالية", 15, IshaAngle(15)),
    CalculationMethod("Turkey", "Turkey Presidency of Religious Affairs", "الرئاسة التركية للشؤون الدينية", 18, IshaAngle(17)),
)

METHODS: Mapping[str, CalculationMethod] = MappingProxyType({m.key: m for m in _METHODS})


class Madhab(str, Enum):
    SHAFI = "Shafi"
    HANAFI = "Hanafi"

    @property
    def shadow_factor(self) -> int:
        """Shadow-length multiplier used for Asr."""
        return 2 if self is Madhab.HANAFI else 1

    @property
    def display_name(self) -> str:
        return "Hanafi" if self is Madhab.HANAFI else "Shafi, Maliki, Hanbali"

    @property
    def arabic_name(self) -> str:
        return "الحنفي" if self is Madhab.HANAFI else "الشافعي والمالكي والحنبلي"

    @property
    def description(self) -> str:
        if self is Madhab.HANAFI:
            return "Asr when shadow equals object length × 2 + noon shadow"
        return "Asr when shadow equals object length + noon shadow"


def _whole_minutes(name: Any, minutes: Any) -> int:
    if minutes is None:
        return 0
    if isinstance(minutes, bool) or not isinstance(minutes, (int, float)):
        raise InvalidAdjustment(name, minutes, "not a number")
    if not math.isfinite(minutes) or minutes != int(minutes):
        raise InvalidAdjustment(name, minutes, "adjustments are whole minutes")
    return int(minutes)


@dataclass(frozen=True)
class PrayerAdjustments:
    """Signed minute offsets added to each boundary after the angle step."""

    fajr: int = 0
    sunrise: int = 0
    dhuhr: int = 0
    asr: int = 0
    maghrib: int = 0
    isha: int = 0

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any] | None) -> "PrayerAdjustments":
        if not data:
            return cls()
        values = {}
        for name, minutes in data.items():
            key = str(name).lower()
            if key not in BOUNDARY_KEYS:
                raise InvalidAdjustment(name, minutes, f"expected one of: {', '.join(BOUNDARY_KEYS)}")
            values[key] = _whole_minutes(name, minutes)
        return cls(**values)

    def minutes_for(self, boundary: str) -> int:
        return getattr(self, boundary.lower())

    def is_identity(self) -> bool:
        return not any(self.to_dict().values())

    def to_dict(self) -> dict[str, int]:
        return {key: getattr(self, key) for key in BOUNDARY_KEYS}


@dataclass(frozen=True)
class PrayerConfig:
    method: CalculationMethod = METHODS["UmmAlQura"]
    madhab: Madhab = Madhab.SHAFI
    adjustments: PrayerAdjustments = field(default_factory=PrayerAdjustments)
    utc_offset: float = 0.0  # hours east of UTC the results are expressed in

    def to_dict(self) -> dict[str, Any]:
        return {
            "method": self.method.key,
            "madhab": self.madhab.value,
            "adjustments": self.adjustments.to_dict(),
            "utcOffset": self.utc_offset,
        }


def get_method(name: str | CalculationMethod) -> CalculationMethod:
    if isinstance(name, CalculationMethod):
        if METHODS.get(name.key) != name:
            raise UnknownMethodOrMadhab("calculation method", name.key, tuple(METHODS))
        return name
    method = METHODS.get(name)
    if method is None and isinstance(name, str):
        lowered = name.lower()
        method = next((m for k, m in METHODS.items() if k.lower() == lowered), None)
    if method is None:
        raise UnknownMethodOrMadhab("calculation method", name, tuple(METHODS))
    return method


def get_madhab(name: str | Madhab) -> Madhab:
    if isinstance(name, Madhab):
        return name
    if isinstance(name, str):
        for madhab in Madhab:
            if madhab.value.lower() == name.lower():
                return madhab
    raise UnknownMethodOrMadhab("madhab", name, tuple(m.value for m in Madhab))


def resolve_config(
    method: str | CalculationMethod = "UmmAlQura",
    madhab: str | Madhab = Madhab.SHAFI,
    adjustments: PrayerAdjustments | Mapping[str, Any] | None = None,
    utc_offset: float = 0.0,
) -> PrayerConfig:
    """Build a PrayerConfig from names, rejecting anything outside the built-in sets."""
    if not isinstance(adjustments, PrayerAdjustments):
        adjustments = PrayerAdjustments.from_mapping(adjustments)
    return PrayerConfig(
        method=get_method(method),
        madhab=get_madhab(madhab),
        adjustments=adjustments,
        utc_offset=float(utc_offset),
    )


def available_methods() -> list[dict[str, Any]]:
    return [m.to_dict() for m in METHODS.values()]


def available_madhabs() -> list[dict[str, str]]:
    return [
        {
            "key": m.value,
            "name": m.display_name,
            "nameAr": m.arabic_name,
            "description": m.description,
        }
        for m in Madhab
    ]
