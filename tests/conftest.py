"""
Test fixtures for the weather alert service.

Provides:
- Stub weather client returning a fixed reading or raising FetchError
- Recording publisher that captures (channel, message) pairs
- Empty threshold store
"""

from typing import Optional

import pytest

from weatheralert.alerting.schemas import WeatherReading
from weatheralert.alerting.thresholds import ThresholdStore
from weatheralert.errors import FetchError


class StubWeatherClient:
    """Returns a fixed reading, or raises FetchError when `reading` is None."""

    def __init__(self, reading: Optional[WeatherReading] = None):
        self.reading = reading
        self.calls = 0

    async def fetch(self) -> WeatherReading:
        self.calls += 1
        if self.reading is None:
            raise FetchError("connection refused")
        return self.reading


class RecordingPublisher:
    """Captures published messages; `fail=True` simulates a dead transport."""

    def __init__(self, fail: bool = False):
        self.fail = fail
        self.messages: list[tuple[str, str]] = []

    async def publish(self, channel: str, message: str) -> bool:
        if self.fail:
            return False
        self.messages.append((str(channel), message))
        return True

    def on(self, channel: str) -> list[str]:
        return [m for c, m in self.messages if c == str(channel)]


@pytest.fixture
def store() -> ThresholdStore:
    return ThresholdStore()


@pytest.fixture
def publisher() -> RecordingPublisher:
    return RecordingPublisher()


@pytest.fixture
def make_weather_client():
    """Factory: make_weather_client(reading) → stub; None reading means fetch fails."""
    return StubWeatherClient


@pytest.fixture
def make_publisher():
    return RecordingPublisher
