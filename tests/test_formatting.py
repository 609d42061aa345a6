"""Test suite for forecast display helpers."""

import datetime

from weather_search.formatting import format_location_weather, format_weather_day
from weather_search.schemas import DailyWeather, LocationWeather


def day(date: datetime.date, temp: float, name: str) -> DailyWeather:
    return DailyWeather(date=date, max_temp=temp + 5, min_temp=temp - 5, current_temp=temp, weather_state_name=name)


def test_today_label():
    assert format_weather_day(day(datetime.date(2022, 3, 18), 80, "Clear"), is_today=True) == "Today, 80℃, Clear"


def test_weekday_label_and_rounding():
    # 2022-03-18 was a Friday
    line = format_weather_day(day(datetime.date(2022, 3, 18), 15.6, "Light Cloud"), is_today=False)

    assert line == "Friday, 16℃, Light Cloud"


def test_location_weather_lines():
    weather = LocationWeather(
        id=1,
        consolidated_weather=[
            day(datetime.date(1970, 1, 1), 80, "Clear"),
            day(datetime.date(1970, 1, 2), 60, "Rain"),
        ],
    )

    assert format_location_weather(weather) == ["Today, 80℃, Clear", "Friday, 60℃, Rain"]


def test_no_weather_no_lines():
    assert format_location_weather(None) == []
