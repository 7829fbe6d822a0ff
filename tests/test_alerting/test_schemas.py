"""Tests for WeatherReading parsing and result models."""

import math

import pytest
from pydantic import ValidationError

from weatheralert.alerting.schemas import (
    Alert,
    AlertKind,
    Channel,
    EvaluationResult,
    WeatherReading,
)


class TestFromCurrentWeather:
    def test_all_fields(self):
        reading = WeatherReading.from_current_weather(
            {"temperature": 21.5, "wind_speed": 12, "humidity": 64}
        )
        assert reading == WeatherReading(temperature=21.5, wind_speed=12.0, humidity=64.0)

    def test_open_meteo_windspeed_alias(self):
        reading = WeatherReading.from_current_weather(
            {"temperature": 13.4, "windspeed": 9.7, "winddirection": 250, "weathercode": 3}
        )
        assert reading.wind_speed == 9.7
        assert reading.humidity is None

    def test_missing_fields_are_absent(self):
        reading = WeatherReading.from_current_weather({})
        assert reading.is_empty

    @pytest.mark.parametrize(
        "raw", ["hot", None, True, [1], {"v": 1}, math.nan, math.inf, 10**400, -(10**400)]
    )
    def test_unusable_values_are_absent(self, raw):
        reading = WeatherReading.from_current_weather({"temperature": raw, "humidity": 50})
        assert reading.temperature is None
        assert reading.humidity == 50.0
        assert not reading.is_empty


class TestReading:
    def test_frozen(self):
        reading = WeatherReading(temperature=10)
        with pytest.raises(ValidationError):
            reading.temperature = 11

    def test_value_of(self):
        reading = WeatherReading(temperature=10, humidity=40)
        assert reading.value_of("temperature") == 10.0
        assert reading.value_of("wind_speed") is None
        assert reading.value_of("pressure") is None


def test_channel_names():
    assert Channel.ALERTS == "weather_alerts"
    assert Channel.UPDATES == "weather_updates"


def test_triggered_follows_alerts():
    assert EvaluationResult().triggered is False
    alert = Alert(
        kind=AlertKind.CUSTOM,
        condition="humidity",
        threshold=80,
        value=90,
        message="Custom alert: humidity exceeds 80.00! Current value: 90.00",
    )
    assert EvaluationResult(alerts=[alert]).triggered is True
