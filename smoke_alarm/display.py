"""Presentation helpers: labels, units and rounding for engine output."""

import math

from .schemas import AQIResult, SubAQI, Unit

POLLUTANT_NAMES = {
    "pm2_5": "Particulate Matter (PM2.5)",
    "pm10": "Particulate Matter (PM10)",
    "no2": "Nitrogen Dioxide (NO₂)",
    "so2": "Sulfur Dioxide (SO₂)",
    "co": "Carbon Monoxide (CO)",
    "o3": "Ozone (O₃)",
    "t": "Temperature",
    "h": "Humidity",
    "p": "Pressure",
    "w": "Wind",
    "wg": "Wind Gust",
}

UNIT_LABELS = {
    Unit.UG_M3: "µg/m³",
    Unit.PPB: "ppb",
    Unit.PPM: "ppm",
}

WEATHER_UNITS = {
    "t": "°C",
    "h": "%",
    "p": "hPa",
    "w": "m/s",
    "wg": "m/s",
}

# (upper bound exclusive, message)
HEALTH_MESSAGES = [
    (1,  "Relatively safe air today"),
    (3,  "Light pollution exposure"),
    (5,  "Moderate health impact"),
    (10, "Heavy pollution - mask recommended"),
    (20, "Severe exposure - stay indoors"),
]
HAZARDOUS_MESSAGE = "Hazardous - avoid outdoor activity"


def pollutant_name(key: str) -> str:
    return POLLUTANT_NAMES.get(key, key.upper())


def cigarettes_badge(cigarettes: float) -> int:
    """Whole cigarettes, rounded up (what the badge shows)."""
    return int(math.ceil(cigarettes))


def cigarettes_short(cigarettes: float) -> str:
    return f"{cigarettes:.1f}"


def health_message(cigarettes: float) -> str:
    for upper, message in HEALTH_MESSAGES:
        if cigarettes < upper:
            return message
    return HAZARDOUS_MESSAGE


def format_concentration(sub: SubAQI) -> str:
    # ppm values are small, keep two decimals; the rest read fine as integers
    if sub.unit == Unit.PPM:
        return f"{sub.concentration:.2f}{UNIT_LABELS[sub.unit]}"
    return f"{round(sub.concentration)}{UNIT_LABELS[sub.unit]}"


def metric_lines(result: AQIResult) -> list:
    """One text line per pollutant / weather field, dashboard order."""
    lines = []
    for key, sub in result.sub_aqis.items():
        lines.append(f"{pollutant_name(key)}: {format_concentration(sub)} (AQI {sub.aqi}, {sub.severity})")
    for key, value in result.weather.items():
        if not math.isfinite(value):
            continue
        lines.append(f"{pollutant_name(key)}: {round(value)}{WEATHER_UNITS.get(key, '')}")
    return lines
