"""Gas concentration unit conversions.

Upstream providers disagree on units: OpenWeatherMap reports every
component as a mass concentration (µg/m³) while the EPA breakpoint tables
expect CO in ppm and NO2, SO2 and O3 in ppb. Conversions go through the
molar volume of an ideal gas at 25 °C and 1 atm:

    ppb = µg/m³ * 24.45 / molecular_weight
    ppm = mg/m³ * 24.45 / molecular_weight

Particulates (PM2.5, PM10) are mass concentrations only.
"""

from typing import Dict, Iterable, List, Mapping

from .breakpoints import TABLES
from .errors import UnitConversionError
from .schemas import PollutantReading, Unit, normalize_key

# L/mol at 25 °C, 1 atm
MOLAR_VOLUME = 24.45

# g/mol
MOLECULAR_WEIGHTS = {
    "co": 28.01,
    "o3": 48.00,
    "no2": 46.01,
    "so2": 64.07,
}

PARTICULATES = ("pm2_5", "pm10")

# Unit each breakpoint table is expressed in
TABLE_UNITS: Dict[str, Unit] = {key: table.unit for key, table in TABLES.items()}

# Provider conventions: pollutant key -> unit the provider reports in
OPENWEATHER_UNITS: Dict[str, Unit] = {k: Unit.UG_M3 for k in TABLE_UNITS}
EPA_UNITS: Dict[str, Unit] = dict(TABLE_UNITS)

UNIT_CONVENTIONS = {
    "openweather": OPENWEATHER_UNITS,
    "epa": EPA_UNITS,
}


def _weight(key: str) -> float:
    try:
        return MOLECULAR_WEIGHTS[key]
    except KeyError:
        raise UnitConversionError(key, "no molecular weight for this pollutant") from None


def ugm3_to_ppb(key: str, value: float) -> float:
    return value * MOLAR_VOLUME / _weight(key)


def ppb_to_ugm3(key: str, value: float) -> float:
    return value * _weight(key) / MOLAR_VOLUME


def ppb_to_ppm(value: float) -> float:
    return value / 1000.0


def ppm_to_ppb(value: float) -> float:
    return value * 1000.0


def ugm3_to_ppm(key: str, value: float) -> float:
    """µg/m³ -> mg/m³ -> ppm, in that order."""
    mg_m3 = value / 1000.0
    return mg_m3 * MOLAR_VOLUME / _weight(key)


def ppm_to_ugm3(key: str, value: float) -> float:
    mg_m3 = value * _weight(key) / MOLAR_VOLUME
    return mg_m3 * 1000.0


def convert(key: str, value: float, from_unit: Unit, to_unit: Unit) -> float:
    key = normalize_key(key)
    from_unit, to_unit = Unit(from_unit), Unit(to_unit)
    if from_unit == to_unit:
        return value
    if key in PARTICULATES:
        raise UnitConversionError(key, f"particulates are mass concentrations, got {from_unit.value} -> {to_unit.value}")

    if from_unit == Unit.UG_M3:
        return ugm3_to_ppm(key, value) if to_unit == Unit.PPM else ugm3_to_ppb(key, value)
    if to_unit == Unit.UG_M3:
        return ppm_to_ugm3(key, value) if from_unit == Unit.PPM else ppb_to_ugm3(key, value)
    # ppb <-> ppm
    return ppb_to_ppm(value) if to_unit == Unit.PPM else ppm_to_ppb(value)


def to_table_unit(key: str, value: float, unit: Unit) -> float:
    """Convert a reading into the unit its breakpoint table uses."""
    key = normalize_key(key)
    if key not in TABLE_UNITS:
        raise UnitConversionError(key, "no breakpoint table for this pollutant")
    return convert(key, value, unit, TABLE_UNITS[key])


def tag_readings(raw: Mapping[str, float], convention: Mapping[str, Unit]) -> List[PollutantReading]:
    """
    Attach units to a bare provider mapping. Keys the convention doesn't
    know (weather fields, nh3, no, ...) are tagged µg/m³ and left for the
    engine to pass through or ignore.
    """
    out: List[PollutantReading] = []
    for key, value in raw.items():
        if value is None:
            continue
        k = normalize_key(key)
        out.append(PollutantReading(key=k, value=value, unit=convention.get(k, Unit.UG_M3)))
    return out


def readings_from_pairs(pairs: Iterable[str], convention: Mapping[str, Unit]) -> List[PollutantReading]:
    """Parse 'key=value' strings (CLI input) into tagged readings."""
    raw: Dict[str, float] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key.strip():
            raise ValueError(f"expected KEY=VALUE, got {pair!r}")
        raw[key] = float(value)
    return tag_readings(raw, convention)
