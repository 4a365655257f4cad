import logging
from datetime import date as date_type, datetime, timedelta, timezone
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, HTTPException, Query, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from prayer_engine import (
    NextPrayer,
    PrayerTimesError,
    available_madhabs,
    available_methods,
    calculate_prayer_times,
    calculate_qibla,
    current_prayer,
    format_time,
    is_at_kaaba,
    resolve_config,
)
from prayer_engine.config import get_config

config = get_config()

logging.basicConfig(level=getattr(logging, str(config.LOG_LEVEL).upper(), logging.INFO))
logger = logging.getLogger("prayer_engine.api")

app = FastAPI(
    title=config.API_TITLE,
    description="API service for calculating Islamic prayer times",
    version=config.API_VERSION,
)


class TimesResponse(BaseModel):
    times: Dict[str, List[str]]


class QiblaResponse(BaseModel):
    latitude: float
    longitude: float
    qibla: float
    degenerate: bool


@app.exception_handler(PrayerTimesError)
async def prayer_times_error_handler(request: Request, exc: PrayerTimesError):
    logger.info(f"Rejected {request.url.path}: {exc}")
    return JSONResponse(status_code=422, content=exc.to_dict())


def _parse_date(value: str) -> date_type:
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError:
        raise HTTPException(status_code=422, detail="date must be YYYY-MM-DD")


def _build_config(method: str, madhab: str, offset_minutes: int, adjustments: Dict[str, int]):
    return resolve_config(
        method=method,
        madhab=madhab,
        adjustments=adjustments,
        utc_offset=offset_minutes / 60.0,
    )


@app.get("/")
def root():
    return {
        "service": "Prayer Times API",
        "status": "online",
        "endpoints": {
            "/api/timesForGPS": "Get prayer times for GPS coordinates",
            "/api/prayerTimes": "Full daily result with next prayer and countdown",
            "/api/qibla": "Qibla bearing for a coordinate",
            "/api/methods": "Available calculation methods",
            "/api/madhabs": "Available madhabs",
        }
    }


@app.get("/api/timesForGPS", response_model=TimesResponse)
def get_times_for_gps(
    lat: float,
    lng: float,
    date: str,
    days: int = Query(1, ge=1),
    timezoneOffset: int = Query(0, ge=-720, le=840),  # minutes east of UTC, e.g. 180
    calculationMethod: str = config.DEFAULT_CALCULATION_METHOD,
    madhab: str = config.DEFAULT_MADHAB,
    fajr: int = 0,
    sunrise: int = 0,
    dhuhr: int = 0,
    asr: int = 0,
    maghrib: int = 0,
    isha: int = 0,
):
    if days > config.MAX_DAYS:
        raise HTTPException(status_code=422, detail=f"days must be at most {config.MAX_DAYS}")

    start_date = _parse_date(date)
    prayer_config = _build_config(
        calculationMethod, madhab, timezoneOffset,
        {"fajr": fajr, "sunrise": sunrise, "dhuhr": dhuhr, "asr": asr, "maghrib": maghrib, "isha": isha},
    )

    response_times = {}
    for i in range(days):
        current_day = start_date + timedelta(days=i)
        calc = calculate_prayer_times(lat, lng, current_day, prayer_config)

        # [0]: Fajr, [1]: Sunrise, [2]: Dhuhr, [3]: Asr, [4]: Maghrib, [5]: Isha
        response_times[current_day.isoformat()] = [
            format_time(p.time, use_12_hour=False) for p in calc.prayers
        ]

    return {"times": response_times}


@app.get("/api/prayerTimes")
def get_prayer_times(
    lat: float,
    lng: float,
    date: Optional[str] = None,
    timezoneOffset: int = Query(0, ge=-720, le=840),
    calculationMethod: str = config.DEFAULT_CALCULATION_METHOD,
    madhab: str = config.DEFAULT_MADHAB,
    now: Optional[datetime] = None,
    threshold: float = Query(config.IMMINENT_THRESHOLD_MINUTES, ge=0),
    fajr: int = 0,
    sunrise: int = 0,
    dhuhr: int = 0,
    asr: int = 0,
    maghrib: int = 0,
    isha: int = 0,
) -> Dict[str, Any]:
    prayer_config = _build_config(
        calculationMethod, madhab, timezoneOffset,
        {"fajr": fajr, "sunrise": sunrise, "dhuhr": dhuhr, "asr": asr, "maghrib": maghrib, "isha": isha},
    )
    frame = timezone(timedelta(minutes=timezoneOffset))
    reference = now or datetime.now(timezone.utc)
    if reference.tzinfo is None:
        reference = reference.replace(tzinfo=frame)
    day = _parse_date(date) if date else reference.astimezone(frame).date()

    daily = calculate_prayer_times(
        lat, lng, day, prayer_config,
        reference=reference,
        imminent_threshold_minutes=threshold,
    )
    period = current_prayer(daily, reference)

    payload = daily.to_dict()
    payload["next"] = NextPrayer(
        prayer=daily.next_prayer,
        remaining=daily.time_to_next,
        is_tomorrow=daily.next_is_tomorrow,
        is_imminent=daily.next_is_imminent,
    ).to_dict()
    payload["currentPrayer"] = period.value if period else None
    payload["reference"] = reference.isoformat()
    return payload


@app.get("/api/qibla", response_model=QiblaResponse)
def get_qibla(lat: float, lng: float):
    return {
        "latitude": lat,
        "longitude": lng,
        "qibla": calculate_qibla(lat, lng),
        "degenerate": is_at_kaaba(lat, lng),
    }


@app.get("/api/methods")
def get_methods():
    return {"methods": available_methods()}


@app.get("/api/madhabs")
def get_madhabs():
    return {"madhabs": available_madhabs()}
