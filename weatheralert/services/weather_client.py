"""
Weather Client — HTTP client for the current-weather API (Open-Meteo by default).

Response shape:
    {"current_weather": {"temperature": 21.3, "windspeed": 9.7, ...}, ...}

Missing or non-numeric fields become None. A body that is not JSON or has
no `current_weather` object yields an empty reading. Transport problems
(timeout, connection error, non-2xx) raise FetchError so the caller decides
how to degrade.
"""

import json
from pathlib import Path
from typing import Optional

import httpx
import structlog

from weatheralert.alerting.schemas import WeatherReading
from weatheralert.errors import FetchError, ParseError

logger = structlog.get_logger(__name__)


def parse_weather_payload(body: str | bytes) -> WeatherReading:
    """Map a raw API body to a reading. Raises ParseError on unusable payloads."""
    try:
        data = json.loads(body)
    except (TypeError, ValueError) as exc:
        raise ParseError(f"invalid JSON: {exc}") from exc

    if not isinstance(data, dict):
        raise ParseError(f"expected JSON object, got {type(data).__name__}")

    current = data.get("current_weather")
    if not isinstance(current, dict):
        raise ParseError("missing 'current_weather' object")

    return WeatherReading.from_current_weather(current)


class WeatherClient:
    """
    Fetches the current weather from a fixed endpoint.

    When `mock_file` is set the client reads that JSON file instead of
    calling the API, for running without network access. An unreadable
    file is logged and the live API is used instead.
    """

    def __init__(
        self,
        url: str,
        timeout: float = 10.0,
        mock_file: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.url = url
        self.timeout = timeout
        self.mock_file = Path(mock_file) if mock_file else None
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=self.timeout,
            follow_redirects=True,
            transport=self._transport,
        )

    async def fetch(self) -> WeatherReading:
        """
        Current reading.

        Raises:
            FetchError: network failure, timeout, or non-2xx
        """
        body = await self._read_body()
        try:
            reading = parse_weather_payload(body)
        except ParseError as e:
            logger.warning("weather_parse_failed", error=str(e))
            return WeatherReading.empty()

        logger.debug(
            "weather_fetched",
            temperature=reading.temperature,
            wind_speed=reading.wind_speed,
            humidity=reading.humidity,
        )
        return reading

    async def _read_body(self) -> bytes:
        if self.mock_file is not None:
            try:
                return self.mock_file.read_bytes()
            except OSError as e:
                logger.warning(
                    "mock_data_unreadable",
                    path=str(self.mock_file),
                    error=str(e),
                )

        try:
            async with self._client() as client:
                resp = await client.get(self.url)
                resp.raise_for_status()
                return resp.content
        except httpx.TimeoutException as e:
            raise FetchError(f"timed out after {self.timeout}s") from e
        except httpx.HTTPStatusError as e:
            raise FetchError(f"HTTP {e.response.status_code}") from e
        except httpx.HTTPError as e:
            raise FetchError(str(e) or type(e).__name__) from e
