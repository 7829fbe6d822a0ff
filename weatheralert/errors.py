"""Exceptions raised inside the fetch pipeline."""


class WeatherAlertError(Exception):
    """Base class for weather alert service errors."""


class FetchError(WeatherAlertError):
    """Weather source unreachable, timed out, or answered with a non-2xx status."""


class ParseError(WeatherAlertError):
    """Weather payload is not JSON or lacks the expected shape."""
