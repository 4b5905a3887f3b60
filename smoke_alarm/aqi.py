# smoke_alarm/aqi.py
# EPA AQI conversion for PM2.5, PM10 (µg/m³), NO2, SO2, O3 (ppb) and CO (ppm).
# Readings arrive unit-tagged and are converted to the table unit first.
# Pure functions: no I/O, no shared state.

import logging
import math
from decimal import ROUND_DOWN, Decimal
from typing import Dict, Iterable, List, Mapping, Optional

from .breakpoints import POLLUTANT_KEYS, TABLES, WEATHER_KEYS
from .errors import InvalidMeasurement
from .exposure import cigarette_equivalent
from .schemas import AQIResult, Breakpoint, PollutantReading, SkippedReading, SubAQI, Unit
from .units import OPENWEATHER_UNITS, tag_readings, to_table_unit

logger = logging.getLogger(__name__)

# (upper bound inclusive, label)
CATEGORIES = [
    (50,  "Good"),
    (100, "Moderate"),
    (150, "Unhealthy for Sensitive Groups"),
    (200, "Unhealthy"),
    (300, "Very Unhealthy"),
]
HAZARDOUS = "Hazardous"


def round_half_up(x: float) -> int:
    # round() is banker's rounding; AQI rounds .5 up
    return int(math.floor(x + 0.5))


def category(aqi: float) -> str:
    """EPA category label. Total: negatives clamp to Good, NaN counts as 0."""
    if math.isnan(aqi):
        aqi = 0
    for upper, label in CATEGORIES:
        if aqi <= upper:
            return label
    return HAZARDOUS


def severity(aqi: float) -> str:
    if math.isnan(aqi) or aqi <= 50:
        return "good"
    if aqi <= 100:
        return "moderate"
    return "unhealthy"


def _truncate(c: float, precision: float) -> float:
    # strip conversion noise first: 70.99999999999999 ppb is 71, not 70
    step = Decimal(str(precision)).normalize()
    return float(Decimal(repr(round(c, 9))).quantize(step, rounding=ROUND_DOWN))


def _interp(bp: Breakpoint, c: float) -> int:
    # Linear interpolation per EPA formula, rounded to nearest integer
    aqi = (bp.i_high - bp.i_low) / (bp.c_high - bp.c_low) * (c - bp.c_low) + bp.i_low
    return round_half_up(aqi)


def interpolate(key: str, c: float, *, extrapolate: bool = False) -> int:
    """
    AQI for concentration ``c`` (already in the table unit) of pollutant ``key``.

    Below the table returns the first row's I_low. Above the table returns the
    last row's I_high, or continues the last row's slope when ``extrapolate``
    is set. Inside the table ``c`` is truncated to the table precision first,
    so values in the gap between two rows land in the lower one.
    """
    table = TABLES[key]
    rows = table.rows
    if c < rows[0].c_low:
        return rows[0].i_low
    if c > rows[-1].c_high:
        return _interp(rows[-1], c) if extrapolate else rows[-1].i_high

    c = _truncate(c, table.precision)
    for bp in rows:
        if bp.c_low <= c <= bp.c_high:
            return _interp(bp, c)
    raise InvalidMeasurement(key, f"no breakpoint row for {c}")


def check_measurement(key: str, value: float) -> None:
    if math.isnan(value) or math.isinf(value):
        raise InvalidMeasurement(key, "not a finite number")
    if value < 0:
        raise InvalidMeasurement(key, "negative concentration")


def sub_aqi(reading: PollutantReading, *, extrapolate: bool = False) -> SubAQI:
    """AQI for one reading. Raises InvalidMeasurement for unusable values."""
    key = reading.key
    if key not in TABLES:
        raise InvalidMeasurement(key, "no breakpoint table for this pollutant")
    check_measurement(key, reading.value)

    c = to_table_unit(key, reading.value, reading.unit)
    aqi = interpolate(key, c, extrapolate=extrapolate)
    return SubAQI(
        key=key,
        concentration=c,
        unit=TABLES[key].unit,
        aqi=aqi,
        severity=severity(aqi),
    )


def calculate_aqi(readings: Iterable[PollutantReading], *, extrapolate: bool = False) -> AQIResult:
    """
    Overall AQI for a set of readings.

    The worst pollutant sets the headline number; ties go to the first key in
    POLLUTANT_KEYS. Weather fields are passed through, unknown keys ignored.
    A bad reading is skipped (and listed in ``skipped``) without affecting
    the others. No pollutants at all gives AQI 0.
    """
    latest: Dict[str, PollutantReading] = {}
    weather: Dict[str, float] = {}
    for r in readings:
        if r.key in TABLES:
            latest[r.key] = r
        elif r.key in WEATHER_KEYS:
            weather[r.key] = r.value

    subs: Dict[str, SubAQI] = {}
    skipped: List[SkippedReading] = []
    for key in POLLUTANT_KEYS:
        if key not in latest:
            continue
        try:
            subs[key] = sub_aqi(latest[key], extrapolate=extrapolate)
        except InvalidMeasurement as e:
            logger.warning("Skipping %s reading: %s", e.key, e.reason)
            skipped.append(SkippedReading(key=e.key, reason=e.reason))

    overall, dominant = 0, None
    for key, s in subs.items():
        if dominant is None or s.aqi > overall:
            overall, dominant = s.aqi, key

    pm25: Optional[float] = subs["pm2_5"].concentration if "pm2_5" in subs else None
    return AQIResult(
        aqi=overall,
        dominant_pollutant=dominant,
        category=category(overall),
        sub_aqis=subs,
        cigarettes=cigarette_equivalent(pm25, overall, extrapolate=extrapolate),
        weather=weather,
        skipped=skipped,
    )


def aqi_for_components(
    components: Mapping[str, float],
    convention: Mapping[str, Unit] = OPENWEATHER_UNITS,
    *,
    extrapolate: bool = False,
) -> AQIResult:
    """Shortcut for a bare provider mapping, e.g. OpenWeatherMap ``components``."""
    return calculate_aqi(tag_readings(components, convention), extrapolate=extrapolate)
