"""
Display helpers for forecasts.

Kept free of any UI technology; callers get plain strings.
"""

from __future__ import annotations

from typing import List

from .schemas import DailyWeather, LocationWeather


def format_weather_day(day: DailyWeather, is_today: bool) -> str:
    """
    One forecast line, e.g. "Today, 80℃, Clear" or "Friday, 60℃, Rain".
    """
    label = "Today" if is_today else day.date.strftime("%A")
    return ", ".join([label, f"{round(day.current_temp)}℃", day.weather_state_name])


def format_location_weather(weather: LocationWeather | None) -> List[str]:
    """Lines for every day of the forecast; the first day is labelled "Today"."""
    if weather is None:
        return []
    return [
        format_weather_day(day, is_today=(idx == 0))
        for idx, day in enumerate(weather.consolidated_weather)
    ]
