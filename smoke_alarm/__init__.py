from .aqi import aqi_for_components, calculate_aqi, category, interpolate, sub_aqi
from .errors import InvalidMeasurement
from .schemas import AQIResult, PollutantReading, SubAQI, Unit

__version__ = "0.3.0"

__all__ = [
    "AQIResult",
    "InvalidMeasurement",
    "PollutantReading",
    "SubAQI",
    "Unit",
    "aqi_for_components",
    "calculate_aqi",
    "category",
    "interpolate",
    "sub_aqi",
]
