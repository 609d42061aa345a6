"""
Pydantic schemas.

Domain values produced by the location search client, plus the
shapes returned by the HTTP API.

Incoming payloads use MetaWeather field names (woeid, the_temp, ...);
validation accepts either those or our own field names, and output
always uses our field names.
"""

import datetime
from typing import List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class Location(BaseModel):
    """A place returned by location search. Identity is `id`."""
    model_config = ConfigDict(frozen=True)

    id: int = Field(validation_alias=AliasChoices("id", "woeid"))
    title: str


class DailyWeather(BaseModel):
    """One day of a consolidated forecast."""
    model_config = ConfigDict(frozen=True)

    date: datetime.date = Field(validation_alias=AliasChoices("date", "applicable_date"))
    max_temp: float
    min_temp: float
    current_temp: float = Field(validation_alias=AliasChoices("current_temp", "the_temp"))
    weather_state_name: str


class LocationWeather(BaseModel):
    """Forecast for one location, ordered by day."""
    model_config = ConfigDict(frozen=True)

    id: int = Field(validation_alias=AliasChoices("id", "woeid"))
    consolidated_weather: tuple[DailyWeather, ...] = ()


class SearchQueryIn(BaseModel):
    """Payload for a change of the search box text."""
    query: str = Field("", max_length=255)


class SearchStateOut(BaseModel):
    """
    Snapshot of the search session.

    `forecast` holds display lines for `location_weather`,
    empty when no weather is loaded.
    """
    locations: List[Location]
    location_weather: Optional[LocationWeather] = None
    location_weather_request_in_flight: Optional[Location] = None
    search_query: str
    forecast: List[str] = []
