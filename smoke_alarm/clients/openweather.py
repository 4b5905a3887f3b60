# smoke_alarm/clients/openweather.py
# Thin OpenWeatherMap client: geocoding + air pollution (current, forecast, history).
# Returns raw µg/m³ components; AQI conversion is left to smoke_alarm.aqi.

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

import requests
from pydantic import ValidationError

from ..errors import ConfigurationError, LocationNotFound, ProviderError
from ..schemas import GeoLocation, PollutionSample

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.openweathermap.org"
CURRENT_LOCATION = "Current Location"


def _coord(x: float) -> float:
    # 4 decimals (~11 m) is plenty and keeps provider caches warm
    return round(float(x), 4)


def _sample(item: Dict[str, Any]) -> PollutionSample:
    return PollutionSample(
        measured_at=datetime.fromtimestamp(int(item["dt"]), tz=timezone.utc),
        components={k: float(v) for k, v in item.get("components", {}).items() if v is not None},
    )


class OpenWeatherClient:
    def __init__(
        self,
        api_key: Optional[str],
        *,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 10.0,
        session: Optional[requests.Session] = None,
    ) -> None:
        if not api_key:
            raise ConfigurationError("OPENWEATHER_API_KEY is not set")
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def _get(self, path: str, **params: Any) -> Any:
        url = f"{self.base_url}{path}"
        params["appid"] = self.api_key
        try:
            resp = self.session.get(url, params=params, timeout=self.timeout)
            resp.raise_for_status()
            return resp.json()
        except requests.HTTPError as e:
            status = e.response.status_code if e.response is not None else None
            raise ProviderError(f"OpenWeatherMap {path} returned {status}", status_code=status) from e
        except ValueError as e:
            # JSON decode errors (also RequestExceptions in recent requests)
            raise ProviderError(f"OpenWeatherMap {path} response could not be read: {e}") from e
        except requests.RequestException as e:
            raise ProviderError(f"OpenWeatherMap {path} request failed: {e}") from e

    # ---------- geocoding ----------
    def search_cities(self, query: str, limit: int = 10) -> List[GeoLocation]:
        query = query.strip()
        if not query:
            return []
        data = self._get("/geo/1.0/direct", q=query, limit=limit)
        if not isinstance(data, list):
            raise ProviderError("Geocoding response is not a list")
        try:
            return [GeoLocation.model_validate(item) for item in data]
        except ValidationError as e:
            raise ProviderError("Unexpected geocoding payload") from e

    def locate(self, query: str) -> GeoLocation:
        matches = self.search_cities(query, limit=1)
        if not matches:
            raise LocationNotFound(f"No location matches {query!r}")
        return matches[0]

    def reverse_geocode(self, lat: float, lon: float) -> str:
        """City name for coordinates; never fails, falls back to 'Current Location'."""
        try:
            data = self._get("/geo/1.0/reverse", lat=_coord(lat), lon=_coord(lon), limit=1)
        except ProviderError as e:
            logger.warning("Reverse geocoding failed: %s", e)
            return CURRENT_LOCATION
        if isinstance(data, list) and data and data[0].get("name"):
            return data[0]["name"]
        return CURRENT_LOCATION

    # ---------- air pollution ----------
    def _samples(self, path: str, **params: Any) -> List[PollutionSample]:
        data = self._get(path, **params)
        try:
            return [_sample(item) for item in data["list"]]
        except (KeyError, TypeError, ValueError) as e:
            raise ProviderError(f"Unexpected payload from {path}") from e

    def get_air_pollution(self, lat: float, lon: float) -> PollutionSample:
        samples = self._samples("/data/2.5/air_pollution", lat=_coord(lat), lon=_coord(lon))
        if not samples:
            raise ProviderError("No air pollution data for this location")
        return samples[0]

    def get_air_pollution_forecast(self, lat: float, lon: float) -> List[PollutionSample]:
        return self._samples("/data/2.5/air_pollution/forecast", lat=_coord(lat), lon=_coord(lon))

    def get_air_pollution_history(self, lat: float, lon: float, start: int, end: int) -> List[PollutionSample]:
        """``start``/``end`` are unix timestamps (UTC)."""
        return self._samples(
            "/data/2.5/air_pollution/history",
            lat=_coord(lat),
            lon=_coord(lon),
            start=int(start),
            end=int(end),
        )
