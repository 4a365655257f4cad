"""Errors raised by the prayer-time engine."""

from dataclasses import dataclass
from typing import Any


class PrayerTimesError(ValueError):
    """Base class for every engine failure."""

    code = "prayer_times_error"

    def to_dict(self) -> dict[str, Any]:
        return {"error": self.code, "message": str(self)}


class InvalidCoordinate(PrayerTimesError):
    """Latitude or longitude outside [-90, 90] / [-180, 180] (or not a finite number)."""

    code = "invalid_coordinate"

    def __init__(self, latitude: float, longitude: float) -> None:
        self.latitude = latitude
        self.longitude = longitude
        super().__init__(
            f"Invalid coordinate ({latitude}, {longitude}): latitude must be within "
            f"[-90, 90] and longitude within [-180, 180]"
        )

    def to_dict(self) -> dict[str, Any]:
        payload = super().to_dict()
        payload.update(latitude=self.latitude, longitude=self.longitude)
        return payload


@dataclass(frozen=True)
class BoundaryFailure:
    boundary: str
    angle: float
    reason: str


class NoGeometricSolution(PrayerTimesError):
    """One or more boundaries cannot be reached by the sun on this date at this latitude."""

    code = "no_geometric_solution"

    def __init__(self, failures: list[BoundaryFailure] | tuple[BoundaryFailure, ...]) -> None:
        self.failures = tuple(failures)
        names = ", ".join(f.boundary for f in self.failures)
        super().__init__(f"No geometric solution for: {names}")

    @property
    def boundaries(self) -> tuple[str, ...]:
        return tuple(f.boundary for f in self.failures)

    def to_dict(self) -> dict[str, Any]:
        payload = super().to_dict()
        payload["failures"] = [
            {"boundary": f.boundary, "angle": f.angle, "reason": f.reason} for f in self.failures
        ]
        return payload


class UnknownMethodOrMadhab(PrayerTimesError):
    code = "unknown_method_or_madhab"

    def __init__(self, kind: str, value: Any, choices: list[str] | tuple[str, ...] = ()) -> None:
        self.kind = kind
        self.value = value
        self.choices = tuple(choices)
        message = f"Unknown {kind}: {value!r}"
        if self.choices:
            message += f" (expected one of: {', '.join(self.choices)})"
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        payload = super().to_dict()
        payload.update(kind=self.kind, value=str(self.value), choices=list(self.choices))
        return payload


class InvalidAdjustment(PrayerTimesError):
    """Adjustment for an unknown boundary, or a value that is not a whole number of minutes."""

    code = "invalid_adjustment"

    def __init__(self, boundary: Any, minutes: Any, reason: str) -> None:
        self.boundary = boundary
        self.minutes = minutes
        super().__init__(f"Invalid adjustment {boundary!r}={minutes!r}: {reason}")

    def to_dict(self) -> dict[str, Any]:
        payload = super().to_dict()
        payload.update(boundary=str(self.boundary), minutes=str(self.minutes))
        return payload
