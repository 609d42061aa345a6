"""
FastAPI entrypoint.

This file focuses on:
- wiring settings + client + search session
- translating HTTP requests into search events
- serializing state snapshots

One search session lives for the life of the process.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request

from .actions import LocationTapped, SearchQueryChanged
from .formatting import format_location_weather
from .schemas import Location, SearchQueryIn, SearchStateOut
from .settings import settings
from .state import SearchState
from .store import SearchEnvironment, SearchStore
from .weather_clients import LocationSearchClient, MetaWeatherClient, MockWeatherClient

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def build_client() -> LocationSearchClient:
    """Pick the demo client or the real API client based on settings."""
    if settings.use_mock_client:
        logger.info("Using mock weather client")
        return MockWeatherClient(latency_s=settings.mock_latency_ms / 1000)
    return MetaWeatherClient(settings.weather_api_base, timeout_s=settings.request_timeout_s)


def state_to_out(state: SearchState) -> SearchStateOut:
    """Convert a state snapshot -> API schema."""
    return SearchStateOut(
        locations=list(state.locations),
        location_weather=state.location_weather,
        location_weather_request_in_flight=state.location_weather_request_in_flight,
        search_query=state.search_query,
        forecast=format_location_weather(state.location_weather),
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    env = SearchEnvironment(
        client=build_client(),
        search_debounce=settings.search_debounce_ms / 1000,
    )
    async with SearchStore(env) as store:
        app.state.store = store
        yield


app = FastAPI(title=settings.app_name, lifespan=lifespan)


def get_store(request: Request) -> SearchStore:
    return request.app.state.store


# -------------------------
# Search session APIs
# -------------------------

@app.get("/api/search", response_model=SearchStateOut)
async def api_search_state(request: Request):
    """Current state of the search session."""
    return state_to_out(get_store(request).state)


@app.post("/api/search/query", response_model=SearchStateOut, status_code=202)
async def api_search_query(payload: SearchQueryIn, request: Request):
    """
    Search box text changed.
    Results arrive later (after the debounce window); poll GET /api/search.
    """
    store = get_store(request)
    store.dispatch(SearchQueryChanged(payload.query))
    await store.drain()
    return state_to_out(store.state)


@app.post("/api/search/tap", response_model=SearchStateOut, status_code=202)
async def api_search_tap(location: Location, request: Request):
    """Location tapped: load its weather, superseding any earlier tap."""
    store = get_store(request)
    store.dispatch(LocationTapped(location))
    await store.drain()
    return state_to_out(store.state)


@app.get("/health")
def health():
    return {"ok": True}
