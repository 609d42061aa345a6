"""
Location search clients.

The search core only needs two capabilities:
- search locations by free-text query
- fetch the forecast for a location id

Anything that implements LocationSearchClient can be plugged in.
Clients raise WeatherError for every failure the user should see;
the core turns that into a failed response and never inspects it further.
"""

from __future__ import annotations

import asyncio
import datetime
import logging
from abc import ABC, abstractmethod
from typing import Any, List

import httpx

from .schemas import DailyWeather, Location, LocationWeather

logger = logging.getLogger(__name__)


class WeatherError(RuntimeError):
    """Raised for user-facing location/weather lookup failures."""


class LocationSearchClient(ABC):
    """Abstract location search + weather capability."""

    @abstractmethod
    async def search_locations(self, query: str) -> List[Location]:
        """Return locations matching `query`, best match first."""

    @abstractmethod
    async def fetch_weather(self, location_id: int) -> LocationWeather:
        """Return the consolidated forecast for `location_id`."""


class MetaWeatherClient(LocationSearchClient):
    """
    MetaWeather API wrapper.

    Endpoints used:
    - Location search:
        /api/location/search/?query=...
    - Location forecast:
        /api/location/{woeid}/

    `transport` lets tests swap the network for an httpx.MockTransport.
    """

    def __init__(
        self,
        base_url: str = "https://www.metaweather.com",
        timeout_s: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base = base_url.rstrip("/")
        self.timeout_s = timeout_s
        self.transport = transport

    async def _get_json(self, path: str, what: str, params: dict | None = None) -> Any:
        try:
            async with httpx.AsyncClient(timeout=self.timeout_s, transport=self.transport) as client:
                r = await client.get(f"{self.base}{path}", params=params)
        except httpx.HTTPError as e:
            raise WeatherError(f"{what} failed: {e}") from e

        if r.status_code != 200:
            raise WeatherError(f"{what} failed ({r.status_code}): {r.text}")

        try:
            return r.json()
        except ValueError as e:
            raise WeatherError(f"{what} returned invalid JSON.") from e

    async def search_locations(self, query: str) -> List[Location]:
        logger.debug("Searching locations for %r", query)
        results = await self._get_json(
            "/api/location/search/", "Location search", params={"query": query}
        )
        try:
            return [Location.model_validate(item) for item in results or []]
        except (TypeError, ValueError) as e:
            raise WeatherError("Location search returned an unexpected payload.") from e

    async def fetch_weather(self, location_id: int) -> LocationWeather:
        logger.debug("Fetching weather for location %s", location_id)
        data = await self._get_json(f"/api/location/{location_id}/", "Weather lookup")
        try:
            return LocationWeather.model_validate(data)
        except ValueError as e:
            raise WeatherError("Weather lookup returned an unexpected payload.") from e


DEMO_LOCATIONS = (
    Location(id=1, title="Brooklyn"),
    Location(id=2, title="Los Angeles"),
    Location(id=3, title="San Francisco"),
)


def _demo_forecast() -> tuple[DailyWeather, ...]:
    epoch = datetime.date(1970, 1, 1)
    rows = [
        (90, 70, 80, "Clear"),
        (70, 50, 60, "Rain"),
        (100, 80, 90, "Cloudy"),
    ]
    return tuple(
        DailyWeather(
            date=epoch + datetime.timedelta(days=i),
            max_temp=tmax,
            min_temp=tmin,
            current_temp=temp,
            weather_state_name=name,
        )
        for i, (tmax, tmin, temp, name) in enumerate(rows)
    )


class MockWeatherClient(LocationSearchClient):
    """
    Offline client serving fixed demo data.

    Useful for local runs without network access, and for tests.
    `latency_s` delays every call to make debounce/cancel behaviour visible.
    """

    def __init__(self, latency_s: float = 0.0):
        self.latency_s = latency_s

    async def _pause(self) -> None:
        if self.latency_s > 0:
            await asyncio.sleep(self.latency_s)

    async def search_locations(self, query: str) -> List[Location]:
        await self._pause()
        needle = query.strip().lower()
        return [loc for loc in DEMO_LOCATIONS if needle in loc.title.lower()]

    async def fetch_weather(self, location_id: int) -> LocationWeather:
        await self._pause()
        if location_id not in {loc.id for loc in DEMO_LOCATIONS}:
            raise WeatherError(f"Unknown location id {location_id}.")
        return LocationWeather(id=location_id, consolidated_weather=_demo_forecast())
