# smoke_alarm/breakpoints.py
# US EPA AQI breakpoint tables (PM2.5 revised May 2024).
# Each row: (C_low, C_high, I_low, I_high). Units follow the EPA tables:
# PM in µg/m³, CO in ppm (8-hr), NO2/SO2 in ppb (1-hr), O3 in ppb (8-hr).

from typing import Dict, List, Tuple

from .schemas import Breakpoint, BreakpointTable, Unit

PM25 = [
    (0.0,     9.0,   0,  50),
    (9.1,    35.4,  51, 100),
    (35.5,   55.4, 101, 150),
    (55.5,  125.4, 151, 200),
    (125.5, 225.4, 201, 300),
    (225.5, 325.4, 301, 400),
    (325.5, 500.4, 401, 500),
]

PM10 = [
    (0,    54,   0,  50),
    (55,  154,  51, 100),
    (155, 254, 101, 150),
    (255, 354, 151, 200),
    (355, 424, 201, 300),
    (425, 504, 301, 400),
    (505, 604, 401, 500),
]

NO2_1H = [
    (0,      53,   0,  50),
    (54,    100,  51, 100),
    (101,   360, 101, 150),
    (361,   649, 151, 200),
    (650,  1249, 201, 300),
    (1250, 1649, 301, 400),
    (1650, 2049, 401, 500),
]

SO2_1H = [
    (0,     35,   0,  50),
    (36,    75,  51, 100),
    (76,   185, 101, 150),
    (186,  304, 151, 200),
    (305,  604, 201, 300),
    (605,  804, 301, 400),
    (805, 1004, 401, 500),
]

CO_8H = [
    (0.0,   4.4,   0,  50),
    (4.5,   9.4,  51, 100),
    (9.5,  12.4, 101, 150),
    (12.5, 15.4, 151, 200),
    (15.5, 30.4, 201, 300),
    (30.5, 40.4, 301, 400),
    (40.5, 50.4, 401, 500),
]

O3_8H = [
    (0,    54,   0,  50),
    (55,   70,  51, 100),
    (71,   85, 101, 150),
    (86,  105, 151, 200),
    (106, 200, 201, 300),
    # Above 200 ppb EPA switches to the 1-hr table; we stop at 300 here.
]


def _table(key: str, unit: Unit, precision: float, rows: List[Tuple[float, float, int, int]]) -> BreakpointTable:
    return BreakpointTable(
        key=key,
        unit=unit,
        precision=precision,
        rows=tuple(Breakpoint(c_low=c_lo, c_high=c_hi, i_low=i_lo, i_high=i_hi) for c_lo, c_hi, i_lo, i_hi in rows),
    )


# Canonical order, also used to break ties for the dominant pollutant
POLLUTANT_KEYS = ("pm2_5", "pm10", "no2", "so2", "co", "o3")

WEATHER_KEYS = ("t", "h", "p", "w", "wg")

TABLES: Dict[str, BreakpointTable] = {
    "pm2_5": _table("pm2_5", Unit.UG_M3, 0.1, PM25),
    "pm10":  _table("pm10",  Unit.UG_M3, 1,   PM10),
    "no2":   _table("no2",   Unit.PPB,   1,   NO2_1H),
    "so2":   _table("so2",   Unit.PPB,   1,   SO2_1H),
    "co":    _table("co",    Unit.PPM,   0.1, CO_8H),
    "o3":    _table("o3",    Unit.PPB,   1,   O3_8H),
}
