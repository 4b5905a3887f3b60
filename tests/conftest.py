"""Shared test helpers: an in-memory stand-in for requests.Session."""

from urllib.parse import urlparse

import requests


class FakeResponse:
    def __init__(self, payload=None, status_code=200, raw=None):
        self.payload = payload
        self.status_code = status_code
        self.raw = raw

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error", response=self)

    def json(self):
        if self.raw is not None:
            raise ValueError("not json")
        return self.payload


class FakeSession:
    """
    Routes GET requests by URL path. A route is a FakeResponse, an exception
    instance (raised), or a callable taking the query params.
    """

    def __init__(self, routes=None):
        self.routes = dict(routes or {})
        self.calls = []

    def get(self, url, params=None, timeout=None):
        path = urlparse(url).path
        self.calls.append((path, dict(params or {}), timeout))
        route = self.routes.get(path)
        if route is None:
            return FakeResponse({"message": "not found"}, status_code=404)
        if callable(route) and not isinstance(route, FakeResponse):
            route = route(params or {})
        if isinstance(route, Exception):
            raise route
        return route

    def paths(self):
        return [c[0] for c in self.calls]


def owm_list(*items):
    """OpenWeatherMap air pollution payload from (dt, components) pairs."""
    return {"coord": {"lon": 0, "lat": 0}, "list": [{"dt": dt, "main": {"aqi": 1}, "components": comp} for dt, comp in items]}
