"""
Effects as plain data.

The reducer never performs I/O. It returns descriptors saying which
lookup to run, under which task slot, and with what scheduling rule.
The store interprets them against an EffectScheduler.

Lookups are data too (SearchLocations, FetchWeather): calling one with a
client performs the request and returns the completion event, with
any client error translated into a Failure.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Union

from .actions import LocationsResponse, LocationWeatherResponse
from .results import Failure, Success
from .weather_clients import LocationSearchClient, WeatherError

logger = logging.getLogger(__name__)


def _log_unexpected(error: Exception, what: str) -> None:
    # WeatherError is an expected, user-facing failure; anything else is a client bug
    if not isinstance(error, WeatherError):
        logger.error("%s raised %s", what, type(error).__name__, exc_info=error)


class EffectId(str, enum.Enum):
    """Task slots. At most one lookup of each kind is outstanding."""
    SEARCH = "search_task"
    WEATHER = "weather_task"


@dataclass(frozen=True)
class SearchLocations:
    query: str

    async def __call__(self, client: LocationSearchClient) -> LocationsResponse:
        try:
            locations = await client.search_locations(self.query)
        except Exception as e:
            _log_unexpected(e, "Location search")
            return LocationsResponse(Failure(e))
        return LocationsResponse(Success(tuple(locations)))


@dataclass(frozen=True)
class FetchWeather:
    location_id: int

    async def __call__(self, client: LocationSearchClient) -> LocationWeatherResponse:
        try:
            weather = await client.fetch_weather(self.location_id)
        except Exception as e:
            _log_unexpected(e, "Weather lookup")
            return LocationWeatherResponse(Failure(e))
        return LocationWeatherResponse(Success(weather))


Operation = Union[SearchLocations, FetchWeather]


@dataclass(frozen=True)
class StartDebouncedTask:
    """Start `operation` once `delay` seconds pass without another call for the slot."""
    effect_id: EffectId
    delay: float
    operation: Operation


@dataclass(frozen=True)
class StartCancelingTask:
    """Cancel whatever holds the slot, then start `operation`."""
    effect_id: EffectId
    operation: Operation


@dataclass(frozen=True)
class CancelTask:
    effect_id: EffectId


Effect = Union[StartDebouncedTask, StartCancelingTask, CancelTask]
