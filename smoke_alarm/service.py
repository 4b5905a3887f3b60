"""Lookup orchestration.

Ties the OpenWeatherMap client to the AQI engine and builds the dashboard
report. What happens when a lookup fails is decided by an explicit fallback
strategy handed in at construction; the engine knows nothing about it.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Callable, List, Optional

from .aqi import aqi_for_components
from .clients.openweather import OpenWeatherClient
from .config import Settings
from .display import health_message
from .errors import ProviderError
from .schemas import AirQualityReport, DailyAQI
from .streak import daily_outlook, daily_streak

logger = logging.getLogger(__name__)

ALERT_THRESHOLD = 100
ALERT_MESSAGE = "Air quality is above safe levels!"


class DefaultCityFallback:
    """On a failed lookup, show a fixed default city instead (once)."""

    def __init__(self, default_city: str = "Delhi") -> None:
        self.default_city = default_city

    def applies_to(self, requested: Optional[str]) -> bool:
        # retrying the city that just failed would fail the same way
        if requested is None:
            return True
        return requested.strip().lower() != self.default_city.strip().lower()

    @property
    def notice(self) -> str:
        return f"Showing {self.default_city}: default city due to lookup issue"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AirQualityService:
    def __init__(
        self,
        client: OpenWeatherClient,
        *,
        fallback: Optional[DefaultCityFallback] = None,
        extrapolate: bool = False,
        streak_days: int = 7,
        forecast_days: int = 4,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self.client = client
        self.fallback = fallback
        self.extrapolate = extrapolate
        self.streak_days = streak_days
        self.forecast_days = forecast_days
        self.clock = clock

    # ---------- public ----------
    def report_for_city(self, name: str) -> AirQualityReport:
        try:
            return self._city_report(name)
        except ProviderError as e:
            return self._fall_back(name, e)

    def report_for_coordinates(self, lat: float, lon: float) -> AirQualityReport:
        try:
            label = self.client.reverse_geocode(lat, lon)
            return self._build(label, lat, lon)
        except ProviderError as e:
            return self._fall_back(None, e)

    # ---------- internals ----------
    def _fall_back(self, requested: Optional[str], error: ProviderError) -> AirQualityReport:
        if self.fallback is None or not self.fallback.applies_to(requested):
            raise error
        logger.warning(
            "Lookup for %s failed (%s); falling back to %s",
            requested or "current location", error, self.fallback.default_city,
        )
        report = self._city_report(self.fallback.default_city)
        return report.model_copy(update={"fell_back": True, "fallback_notice": self.fallback.notice})

    def _city_report(self, name: str) -> AirQualityReport:
        location = self.client.locate(name)
        return self._build(location.name, location.lat, location.lon)

    def _build(self, city: str, lat: float, lon: float) -> AirQualityReport:
        sample = self.client.get_air_pollution(lat, lon)
        result = aqi_for_components(sample.components, extrapolate=self.extrapolate)
        logger.info("%s: AQI %d (%s), dominant %s", city, result.aqi, result.category, result.dominant_pollutant)

        alert = result.aqi > ALERT_THRESHOLD
        return AirQualityReport(
            city=city,
            lat=lat,
            lon=lon,
            result=result,
            health_message=health_message(result.cigarettes),
            alert=alert,
            alert_message=ALERT_MESSAGE if alert else None,
            recent_days=self._recent_days(lat, lon),
            forecast_days=self._forecast(lat, lon),
        )

    def _recent_days(self, lat: float, lon: float) -> List[DailyAQI]:
        if self.streak_days <= 0:
            return []
        end = self.clock()
        start = end - timedelta(days=self.streak_days)
        try:
            samples = self.client.get_air_pollution_history(lat, lon, int(start.timestamp()), int(end.timestamp()))
        except ProviderError as e:
            logger.warning("Recent days unavailable: %s", e)
            return []
        return daily_streak(samples, days=self.streak_days, extrapolate=self.extrapolate)

    def _forecast(self, lat: float, lon: float) -> List[DailyAQI]:
        if self.forecast_days <= 0:
            return []
        try:
            samples = self.client.get_air_pollution_forecast(lat, lon)
        except ProviderError as e:
            logger.warning("Forecast unavailable: %s", e)
            return []
        return daily_outlook(samples, today=self.clock().date(), days=self.forecast_days, extrapolate=self.extrapolate)


def build_service(settings: Settings, session=None) -> AirQualityService:
    client = OpenWeatherClient(
        settings.openweather_api_key,
        base_url=settings.openweather_base_url,
        timeout=settings.http_timeout,
        session=session,
    )
    return AirQualityService(
        client,
        fallback=DefaultCityFallback(settings.default_city),
        extrapolate=settings.extrapolate,
    )
