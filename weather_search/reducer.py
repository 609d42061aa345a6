"""
Search state machine.

search_reducer(state, action) -> (next_state, effects)

Pure and synchronous: no I/O, no clock, no randomness. Everything that
has to happen later is returned as effect descriptors.
"""

from __future__ import annotations

import dataclasses
from typing import List, Tuple

from .actions import (
    LocationsResponse,
    LocationTapped,
    LocationWeatherResponse,
    SearchAction,
    SearchQueryChanged,
)
from .effects import (
    CancelTask,
    Effect,
    EffectId,
    FetchWeather,
    SearchLocations,
    StartCancelingTask,
    StartDebouncedTask,
)
from .results import Success
from .state import SearchState

# Seconds of typing silence before a search request goes out
SEARCH_DEBOUNCE = 0.3


def search_reducer(
    state: SearchState,
    action: SearchAction,
    *,
    debounce: float = SEARCH_DEBOUNCE,
) -> Tuple[SearchState, List[Effect]]:
    if isinstance(action, SearchQueryChanged):
        query = action.query
        if query == "":
            # Drop results and any search still pending so nothing stale shows up later.
            # An outstanding weather fetch is left alone.
            next_state = dataclasses.replace(
                state, search_query=query, locations=(), location_weather=None
            )
            return next_state, [CancelTask(EffectId.SEARCH)]

        next_state = dataclasses.replace(state, search_query=query)
        return next_state, [
            StartDebouncedTask(EffectId.SEARCH, debounce, SearchLocations(query))
        ]

    if isinstance(action, LocationsResponse):
        if isinstance(action.result, Success):
            return dataclasses.replace(state, locations=tuple(action.result.value)), []
        return dataclasses.replace(state, locations=()), []

    if isinstance(action, LocationTapped):
        next_state = dataclasses.replace(
            state, location_weather_request_in_flight=action.location
        )
        return next_state, [
            StartCancelingTask(EffectId.WEATHER, FetchWeather(action.location.id))
        ]

    if isinstance(action, LocationWeatherResponse):
        weather = action.result.value if isinstance(action.result, Success) else None
        next_state = dataclasses.replace(
            state,
            location_weather=weather,
            location_weather_request_in_flight=None,
        )
        return next_state, []

    raise TypeError(f"Unknown search action: {action!r}")
