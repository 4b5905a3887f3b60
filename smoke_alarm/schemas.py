# smoke_alarm/schemas.py
from datetime import date, datetime
from enum import Enum
from typing import Dict, List, Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Unit(str, Enum):
    UG_M3 = "ug_m3"
    PPB = "ppb"
    PPM = "ppm"


Severity = Literal["good", "moderate", "unhealthy"]

# WAQI and some sensors spell PM2.5 without the underscore
KEY_ALIASES = {
    "pm25": "pm2_5",
    "pm2.5": "pm2_5",
}


def normalize_key(key: str) -> str:
    k = key.strip().lower()
    return KEY_ALIASES.get(k, k)


# ---------- Engine input ----------
class PollutantReading(BaseModel):
    model_config = ConfigDict(frozen=True)

    key: str = Field(min_length=1, max_length=32)
    value: float
    unit: Unit = Unit.UG_M3

    @field_validator("key")
    @classmethod
    def _normalize(cls, v: str) -> str:
        return normalize_key(v)


# ---------- Breakpoint tables ----------
class Breakpoint(BaseModel):
    model_config = ConfigDict(frozen=True)

    c_low: float
    c_high: float
    i_low: int
    i_high: int


class BreakpointTable(BaseModel):
    model_config = ConfigDict(frozen=True)

    key: str
    unit: Unit
    # concentrations are truncated to this step before the table lookup
    precision: float
    rows: Tuple[Breakpoint, ...]


# ---------- Engine output ----------
class SubAQI(BaseModel):
    model_config = ConfigDict(frozen=True)

    key: str
    concentration: float
    unit: Unit
    aqi: int
    severity: Severity


class SkippedReading(BaseModel):
    model_config = ConfigDict(frozen=True)

    key: str
    reason: str


class AQIResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    aqi: int = 0
    dominant_pollutant: Optional[str] = None
    category: str = "Good"
    sub_aqis: Dict[str, SubAQI] = Field(default_factory=dict)
    # Policy B: PM2.5 µg/m³ / 22, unrounded
    cigarettes: float = 0.0
    weather: Dict[str, float] = Field(default_factory=dict)
    skipped: List[SkippedReading] = Field(default_factory=list)

    @property
    def skipped_keys(self) -> List[str]:
        return [s.key for s in self.skipped]


# ---------- OpenWeatherMap payloads ----------
class GeoLocation(BaseModel):
    name: str
    lat: float
    lon: float
    country: Optional[str] = None
    state: Optional[str] = None


class PollutionSample(BaseModel):
    # OpenWeatherMap reports every component in µg/m³
    measured_at: datetime
    components: Dict[str, float] = Field(default_factory=dict)


# ---------- Dashboard ----------
class DailyAQI(BaseModel):
    model_config = ConfigDict(frozen=True)

    day: date
    avg: int
    min: int
    max: int


class AirQualityReport(BaseModel):
    city: str
    lat: Optional[float] = None
    lon: Optional[float] = None
    result: AQIResult
    health_message: str
    alert: bool = False
    recent_days: List[DailyAQI] = Field(default_factory=list)
    forecast_days: List[DailyAQI] = Field(default_factory=list)
    fell_back: bool = False
    alert_message: Optional[str] = None
    # set when the report shows the fallback city instead of the one asked for
    fallback_notice: Optional[str] = None

    @property
    def aqi(self) -> int:
        return self.result.aqi

    @property
    def category(self) -> str:
        return self.result.category

    @property
    def cigarettes(self) -> float:
        return self.result.cigarettes
