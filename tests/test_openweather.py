"""Tests for the OpenWeatherMap client against an in-memory session."""

from datetime import datetime, timezone

import pytest
import requests

from smoke_alarm.clients.openweather import CURRENT_LOCATION, OpenWeatherClient
from smoke_alarm.errors import ConfigurationError, LocationNotFound, ProviderError

from .conftest import FakeResponse, FakeSession, owm_list

DELHI = {"name": "Delhi", "lat": 28.6517178, "lon": 77.2219388, "country": "IN", "state": "Delhi", "local_names": {"hi": "दिल्ली"}}


def client_with(routes):
    session = FakeSession(routes)
    return OpenWeatherClient("test-key", session=session, timeout=3.0), session


class TestConstruction:
    def test_missing_key(self):
        with pytest.raises(ConfigurationError):
            OpenWeatherClient(None)

    def test_empty_key(self):
        with pytest.raises(ConfigurationError):
            OpenWeatherClient("")

    def test_base_url_trailing_slash(self):
        client = OpenWeatherClient("k", base_url="https://example.test/", session=FakeSession())
        assert client.base_url == "https://example.test"


class TestGeocoding:
    def test_search_cities(self):
        client, session = client_with({"/geo/1.0/direct": FakeResponse([DELHI])})
        matches = client.search_cities("Delhi")
        assert matches[0].name == "Delhi"
        assert matches[0].country == "IN"
        path, params, timeout = session.calls[0]
        assert params == {"q": "Delhi", "limit": 10, "appid": "test-key"}
        assert timeout == 3.0

    def test_blank_query_skips_request(self):
        client, session = client_with({})
        assert client.search_cities("   ") == []
        assert session.calls == []

    def test_locate_no_match(self):
        client, _ = client_with({"/geo/1.0/direct": FakeResponse([])})
        with pytest.raises(LocationNotFound):
            client.locate("Atlantis")

    def test_reverse_geocode(self):
        client, session = client_with({"/geo/1.0/reverse": FakeResponse([{"name": "Connaught Place"}])})
        assert client.reverse_geocode(28.631451234, 77.21667891) == "Connaught Place"
        params = session.calls[0][1]
        assert params["lat"] == 28.6315
        assert params["lon"] == 77.2167

    def test_reverse_geocode_failure_is_soft(self):
        client, _ = client_with({"/geo/1.0/reverse": FakeResponse(status_code=500)})
        assert client.reverse_geocode(1.0, 2.0) == CURRENT_LOCATION

    def test_reverse_geocode_no_match(self):
        client, _ = client_with({"/geo/1.0/reverse": FakeResponse([])})
        assert client.reverse_geocode(1.0, 2.0) == CURRENT_LOCATION


class TestAirPollution:
    def test_current(self):
        payload = owm_list((1760000000, {"co": 201.94, "no": 0.0, "no2": 0.77, "o3": 68.66, "so2": 0.64, "pm2_5": 0.5, "pm10": 0.54, "nh3": 0.12}))
        client, session = client_with({"/data/2.5/air_pollution": FakeResponse(payload)})
        sample = client.get_air_pollution(50.0, 50.0)
        assert sample.components["co"] == 201.94
        assert sample.measured_at == datetime.fromtimestamp(1760000000, tz=timezone.utc)
        assert session.paths() == ["/data/2.5/air_pollution"]

    def test_current_empty_list(self):
        client, _ = client_with({"/data/2.5/air_pollution": FakeResponse({"list": []})})
        with pytest.raises(ProviderError):
            client.get_air_pollution(0, 0)

    def test_history_params(self):
        client, session = client_with({"/data/2.5/air_pollution/history": FakeResponse(owm_list())})
        assert client.get_air_pollution_history(1, 2, 1000, 2000.7) == []
        params = session.calls[0][1]
        assert params["start"] == 1000
        assert params["end"] == 2000

    def test_forecast(self):
        payload = owm_list((1, {"pm2_5": 3.0}), (3601, {"pm2_5": 4.0}))
        client, _ = client_with({"/data/2.5/air_pollution/forecast": FakeResponse(payload)})
        assert [s.components["pm2_5"] for s in client.get_air_pollution_forecast(0, 0)] == [3.0, 4.0]

    def test_malformed_payload(self):
        client, _ = client_with({"/data/2.5/air_pollution": FakeResponse({"unexpected": True})})
        with pytest.raises(ProviderError):
            client.get_air_pollution(0, 0)


class TestErrors:
    def test_http_error_keeps_status(self):
        client, _ = client_with({"/geo/1.0/direct": FakeResponse({"cod": 401}, status_code=401)})
        with pytest.raises(ProviderError) as exc:
            client.search_cities("Delhi")
        assert exc.value.status_code == 401

    def test_connection_error(self):
        client, _ = client_with({"/data/2.5/air_pollution": requests.ConnectionError("boom")})
        with pytest.raises(ProviderError) as exc:
            client.get_air_pollution(0, 0)
        assert exc.value.status_code is None

    def test_invalid_json(self):
        client, _ = client_with({"/geo/1.0/direct": FakeResponse(raw="<html>")})
        with pytest.raises(ProviderError):
            client.search_cities("Delhi")
