"""
Search session state.

Owned by the dispatch loop; every transition produces a new snapshot
instead of mutating the old one, so observers can keep what they receive.
"""

from __future__ import annotations

from dataclasses import dataclass

from .schemas import Location, LocationWeather


@dataclass(frozen=True)
class SearchState:
    # Current search results; empty when there are none or the query is empty
    locations: tuple[Location, ...] = ()
    # Weather for the most recently resolved tap
    location_weather: LocationWeather | None = None
    # Location whose weather fetch is outstanding
    location_weather_request_in_flight: Location | None = None
    search_query: str = ""
