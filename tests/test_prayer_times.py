import datetime

import pytest

from prayer_engine import (
    METHODS,
    InvalidAdjustment,
    InvalidCoordinate,
    IshaInterval,
    Madhab,
    NoGeometricSolution,
    PrayerAdjustments,
    PrayerConfig,
    PrayerType,
    UnknownMethodOrMadhab,
    calculate_prayer_times,
    format_time,
    resolve_config,
)

from conftest import CINCINNATI, ISTANBUL, MECCA

ORDER = [
    PrayerType.FAJR,
    PrayerType.SUNRISE,
    PrayerType.DHUHR,
    PrayerType.ASR,
    PrayerType.MAGHRIB,
    PrayerType.ISHA,
]

LOCATIONS = [
    MECCA,
    CINCINNATI,
    ISTANBUL,
    (30.0444, 31.2357),  # Cairo
    (24.8607, 67.0011),  # Karachi
    (-6.2088, 106.8456),  # Jakarta
    (-33.9249, 18.4241),  # Cape Town
    (1.3521, 103.8198),  # Singapore
]

DATES = [
    datetime.date(2024, 3, 20),
    datetime.date(2024, 6, 21),
    datetime.date(2024, 9, 22),
    datetime.date(2024, 12, 21),
]


@pytest.mark.parametrize("method", sorted(METHODS))
@pytest.mark.parametrize("location", LOCATIONS)
def test_boundaries_are_strictly_ordered(method, location):
    config = resolve_config(method=method)
    for day in DATES:
        result = calculate_prayer_times(*location, day, config)
        times = [p.time for p in result.prayers]
        assert [p.type for p in result.prayers] == ORDER
        assert all(a < b for a, b in zip(times, times[1:])), (method, location, day)


def test_calculation_is_deterministic(summer_day, north_america):
    first = calculate_prayer_times(*CINCINNATI, summer_day, north_america)
    second = calculate_prayer_times(*CINCINNATI, summer_day, north_america)
    assert first == second
    assert first.to_dict() == second.to_dict()


def test_mecca_dhuhr_is_near_local_noon():
    result = calculate_prayer_times(*MECCA, datetime.date(2024, 6, 21))
    dhuhr = result.get(PrayerType.DHUHR).time
    # 39.83°E puts apparent noon a little after 09:20 UTC
    assert dhuhr.tzinfo == datetime.timezone.utc
    assert datetime.time(9, 10) <= dhuhr.time() <= datetime.time(9, 35)


def test_utc_offset_shifts_the_frame_not_the_instant(summer_day):
    utc = calculate_prayer_times(*CINCINNATI, summer_day, resolve_config(method="NorthAmerica"))
    edt = calculate_prayer_times(*CINCINNATI, summer_day, resolve_config(method="NorthAmerica", utc_offset=-4))
    for a, b in zip(utc.prayers, edt.prayers):
        assert a.time == b.time
    assert edt.get(PrayerType.DHUHR).time.utcoffset() == datetime.timedelta(hours=-4)
    assert datetime.time(13, 20) <= edt.get(PrayerType.DHUHR).time.time() <= datetime.time(13, 45)


def test_adjustments_are_additive(summer_day):
    base = calculate_prayer_times(*CINCINNATI, summer_day, resolve_config(method="NorthAmerica"))
    adjusted = calculate_prayer_times(
        *CINCINNATI, summer_day,
        resolve_config(method="NorthAmerica", adjustments={"fajr": 3, "isha": -2}),
    )
    delta = {p.type: adjusted.get(p.type).time - p.time for p in base.prayers}
    assert delta[PrayerType.FAJR] == datetime.timedelta(minutes=3)
    assert delta[PrayerType.ISHA] == datetime.timedelta(minutes=-2)
    for prayer_type in (PrayerType.SUNRISE, PrayerType.DHUHR, PrayerType.ASR, PrayerType.MAGHRIB):
        assert delta[prayer_type] == datetime.timedelta(0)


def test_sunrise_and_sunset_follow_their_adjustments(summer_day):
    config = resolve_config(method="NorthAmerica", adjustments={"sunrise": -7, "maghrib": 7})
    result = calculate_prayer_times(*CINCINNATI, summer_day, config)
    assert result.sunrise == result.get(PrayerType.SUNRISE).time
    assert result.sunset == result.get(PrayerType.MAGHRIB).time


@pytest.mark.parametrize("location", LOCATIONS)
def test_hanafi_asr_is_never_earlier_than_shafi(location):
    for day in DATES:
        shafi = calculate_prayer_times(*location, day, resolve_config(method="MuslimWorldLeague", madhab="Shafi"))
        hanafi = calculate_prayer_times(*location, day, resolve_config(method="MuslimWorldLeague", madhab="Hanafi"))
        assert hanafi.get(PrayerType.ASR).time >= shafi.get(PrayerType.ASR).time


def test_hanafi_asr_is_later_in_cincinnati():
    day = datetime.date(2024, 10, 15)
    shafi = calculate_prayer_times(*CINCINNATI, day, resolve_config(method="NorthAmerica", madhab=Madhab.SHAFI))
    hanafi = calculate_prayer_times(*CINCINNATI, day, resolve_config(method="NorthAmerica", madhab=Madhab.HANAFI))
    assert hanafi.get(PrayerType.ASR).time > shafi.get(PrayerType.ASR).time
    # Only Asr depends on the madhab
    for prayer_type in (PrayerType.FAJR, PrayerType.DHUHR, PrayerType.MAGHRIB, PrayerType.ISHA):
        assert hanafi.get(prayer_type).time == shafi.get(prayer_type).time


def test_umm_al_qura_isha_is_ninety_minutes_after_maghrib():
    assert isinstance(METHODS["UmmAlQura"].isha, IshaInterval)
    result = calculate_prayer_times(*MECCA, datetime.date(2024, 6, 21), resolve_config(method="UmmAlQura"))
    gap = result.get(PrayerType.ISHA).time - result.get(PrayerType.MAGHRIB).time
    assert gap == datetime.timedelta(minutes=90)


def test_qatar_isha_is_ninety_minutes_after_maghrib():
    assert METHODS["Qatar"].isha == IshaInterval(90)
    assert METHODS["Qatar"].isha_angle is None
    result = calculate_prayer_times(25.2854, 51.531, datetime.date(2024, 6, 21), resolve_config(method="Qatar"))
    gap = result.get(PrayerType.ISHA).time - result.get(PrayerType.MAGHRIB).time
    assert gap == datetime.timedelta(minutes=90)


def test_angle_based_isha_differs_from_interval(summer_day):
    mwl = calculate_prayer_times(*MECCA, summer_day, resolve_config(method="MuslimWorldLeague"))
    gap = mwl.get(PrayerType.ISHA).time - mwl.get(PrayerType.MAGHRIB).time
    assert datetime.timedelta(minutes=60) < gap < datetime.timedelta(minutes=100)
    assert gap != datetime.timedelta(minutes=90)


def test_mecca_qibla_is_flagged_degenerate():
    result = calculate_prayer_times(*MECCA, datetime.date(2024, 6, 21), resolve_config(method="UmmAlQura", madhab="Shafi"))
    assert result.qibla_degenerate is True
    assert result.qibla == 0.0


def test_polar_summer_reports_no_geometric_solution():
    config = resolve_config(method="MuslimWorldLeague")
    with pytest.raises(NoGeometricSolution) as exc_info:
        calculate_prayer_times(80.0, 15.0, datetime.date(2024, 6, 21), config)

    error = exc_info.value
    assert error.failures[0].boundary == "Fajr"
    assert "Fajr" in error.boundaries
    assert "Sunrise" in error.boundaries
    # Asr is still reachable under the midnight sun
    assert "Asr" not in error.boundaries
    payload = error.to_dict()
    assert payload["error"] == "no_geometric_solution"
    assert payload["failures"][0]["angle"] == -18


def test_interval_isha_fails_with_maghrib():
    with pytest.raises(NoGeometricSolution) as exc_info:
        calculate_prayer_times(80.0, 15.0, datetime.date(2024, 6, 21), resolve_config(method="UmmAlQura"))
    assert "Isha" in exc_info.value.boundaries
    assert "Maghrib" in exc_info.value.boundaries


@pytest.mark.parametrize("latitude, longitude", [
    (90.1, 0),
    (-91, 0),
    (0, 180.5),
    (0, -181),
    (float("nan"), 0),
    (0, float("inf")),
])
def test_invalid_coordinates_are_rejected(latitude, longitude):
    with pytest.raises(InvalidCoordinate):
        calculate_prayer_times(latitude, longitude, datetime.date(2024, 6, 21))


def test_unknown_method_or_madhab_is_rejected():
    with pytest.raises(UnknownMethodOrMadhab):
        resolve_config(method="Jafari")
    with pytest.raises(UnknownMethodOrMadhab):
        resolve_config(madhab="Maliki")


def test_unknown_adjustment_key_is_rejected():
    with pytest.raises(InvalidAdjustment) as excinfo:
        resolve_config(adjustments={"tahajjud": 5})
    assert excinfo.value.to_dict()["error"] == "invalid_adjustment"
    assert excinfo.value.boundary == "tahajjud"


def test_fractional_adjustment_is_rejected_not_truncated():
    with pytest.raises(InvalidAdjustment):
        PrayerAdjustments.from_mapping({"fajr": 2.5})
    with pytest.raises(InvalidAdjustment):
        PrayerAdjustments.from_mapping({"isha": float("nan")})
    with pytest.raises(InvalidAdjustment):
        PrayerAdjustments.from_mapping({"asr": "5"})


def test_whole_float_adjustment_is_accepted():
    adjustments = PrayerAdjustments.from_mapping({"fajr": 3.0, "isha": None})
    assert adjustments.fajr == 3
    assert isinstance(adjustments.fajr, int)
    assert adjustments.isha == 0


def test_config_names_are_case_insensitive():
    config = resolve_config(method="northamerica", madhab="hanafi")
    assert config.method is METHODS["NorthAmerica"]
    assert config.madhab is Madhab.HANAFI


def test_default_config_is_umm_al_qura_shafi():
    config = PrayerConfig()
    assert config.method.key == "UmmAlQura"
    assert config.madhab is Madhab.SHAFI
    assert config.adjustments == PrayerAdjustments()
    assert config.adjustments.is_identity()


def test_unclassified_result_has_no_status():
    result = calculate_prayer_times(*ISTANBUL, datetime.date(2024, 6, 21))
    assert result.next_prayer is None
    assert result.time_to_next is None
    assert not any(p.is_next or p.is_passed or p.is_upcoming for p in result.prayers)


def test_display_strings():
    ts = datetime.datetime(2024, 6, 1, 5, 7)
    assert format_time(ts) == "5:07 AM"
    assert format_time(ts, use_12_hour=False) == "05:07"
    assert format_time(datetime.datetime(2024, 6, 1, 0, 30)) == "12:30 AM"
    assert format_time(datetime.datetime(2024, 6, 1, 19, 42)) == "7:42 PM"
