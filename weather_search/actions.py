"""
Events accepted by the search session.

Two come from the user (typing, tapping a location) and two are
completions of lookups started by earlier events.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Union

from .results import Result
from .schemas import Location, LocationWeather


@dataclass(frozen=True)
class SearchQueryChanged:
    query: str


@dataclass(frozen=True)
class LocationsResponse:
    result: Result[List[Location]]


@dataclass(frozen=True)
class LocationTapped:
    location: Location


@dataclass(frozen=True)
class LocationWeatherResponse:
    result: Result[LocationWeather]


SearchAction = Union[
    SearchQueryChanged,
    LocationsResponse,
    LocationTapped,
    LocationWeatherResponse,
]
