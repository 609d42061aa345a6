"""Pytest configuration and fixtures."""

import asyncio
import datetime
import os
from typing import Dict, List

import pytest

# Set environment before the app module reads settings
os.environ["USE_MOCK_CLIENT"] = "true"
os.environ["SEARCH_DEBOUNCE_MS"] = "20"
os.environ["MOCK_LATENCY_MS"] = "20"

from weather_search.schemas import DailyWeather, Location, LocationWeather
from weather_search.weather_clients import LocationSearchClient, WeatherError


def make_weather(location_id: int, temp: float = 20.0, name: str = "Clear") -> LocationWeather:
    return LocationWeather(
        id=location_id,
        consolidated_weather=[
            DailyWeather(
                date=datetime.date(2022, 3, 18),
                max_temp=temp + 5,
                min_temp=temp - 5,
                current_temp=temp,
                weather_state_name=name,
            )
        ],
    )


class GatedClient(LocationSearchClient):
    """
    Scripted client whose weather responses are held until released.

    release(id) lets the pending fetch for that id return;
    fail(id) makes it raise WeatherError instead.
    """

    def __init__(self, locations: Dict[str, List[Location]] | None = None):
        self.locations = locations or {}
        self.search_calls: List[str] = []
        self.weather_calls: List[int] = []
        self.started: Dict[int, asyncio.Event] = {}
        self._gates: Dict[int, asyncio.Event] = {}
        self._failures: set = set()

    def _gate(self, location_id: int) -> asyncio.Event:
        return self._gates.setdefault(location_id, asyncio.Event())

    async def wait_started(self, location_id: int) -> None:
        await self.started.setdefault(location_id, asyncio.Event()).wait()

    def release(self, location_id: int) -> None:
        self._gate(location_id).set()

    def fail(self, location_id: int) -> None:
        self._failures.add(location_id)
        self.release(location_id)

    async def search_locations(self, query: str) -> List[Location]:
        self.search_calls.append(query)
        if query not in self.locations:
            raise WeatherError(f"no results for {query}")
        return self.locations[query]

    async def fetch_weather(self, location_id: int) -> LocationWeather:
        self.weather_calls.append(location_id)
        self.started.setdefault(location_id, asyncio.Event()).set()
        await self._gate(location_id).wait()
        if location_id in self._failures:
            raise WeatherError(f"weather unavailable for {location_id}")
        return make_weather(location_id)


@pytest.fixture
def san_francisco() -> Location:
    return Location(id=3, title="San Francisco")


@pytest.fixture
def brooklyn() -> Location:
    return Location(id=1, title="Brooklyn")


@pytest.fixture
def gated_client(san_francisco: Location) -> GatedClient:
    return GatedClient(locations={"sf": [san_francisco]})
