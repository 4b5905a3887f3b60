"""Cigarette-equivalent exposure.

Follows Berkeley Earth's rule of thumb: breathing 22 µg/m³ of PM2.5 for a
day is roughly as harmful as smoking one cigarette. The measured PM2.5 mass
concentration is used whenever it is available; otherwise it is
back-derived from the overall AQI through the PM2.5 breakpoint table.

Values returned here are never rounded. Rounding is a display concern
(see ``smoke_alarm.display``).
"""

import math
from typing import Optional

from .breakpoints import TABLES

UG_M3_PM25_PER_CIGARETTE = 22.0


def aqi_to_pm25(aqi: float, *, extrapolate: bool = False) -> float:
    """
    Invert the PM2.5 breakpoint table: AQI -> µg/m³.

    An AQI that falls between two rows (e.g. 50.5) maps to the start of the
    upper row. Negative AQI maps to 0. Above the table the top concentration
    is returned unless ``extrapolate`` is set, in which case the last row's
    slope is continued.
    """
    if math.isnan(aqi):
        return 0.0
    rows = TABLES["pm2_5"].rows
    for bp in rows:
        if aqi < bp.i_low:
            return bp.c_low
        if aqi <= bp.i_high:
            return (aqi - bp.i_low) / (bp.i_high - bp.i_low) * (bp.c_high - bp.c_low) + bp.c_low

    last = rows[-1]
    if not extrapolate:
        return last.c_high
    return (aqi - last.i_low) / (last.i_high - last.i_low) * (last.c_high - last.c_low) + last.c_low


def cigarettes_from_pm25(pm25_ug_m3: float) -> float:
    return max(0.0, pm25_ug_m3) / UG_M3_PM25_PER_CIGARETTE


def cigarette_equivalent(pm25_ug_m3: Optional[float], aqi: float, *, extrapolate: bool = False) -> float:
    """
    Cigarettes per day for the given exposure.

    ``pm25_ug_m3`` is the measured concentration, or None when the source
    didn't report one (or it was rejected); then ``aqi`` is used instead.
    """
    if pm25_ug_m3 is None:
        pm25_ug_m3 = aqi_to_pm25(aqi, extrapolate=extrapolate)
    return cigarettes_from_pm25(pm25_ug_m3)
