"""
Alert Schemas.

Defines weather readings, fired alerts, evaluation results and pub/sub channels.
"""

import math
from enum import StrEnum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


# ── Enums ──────────────────────────────────────────────────────────────


class Channel(StrEnum):
    """Pub/sub channel names. Subscribers depend on these exact strings."""
    ALERTS = "weather_alerts"
    UPDATES = "weather_updates"


class AlertKind(StrEnum):
    FIXED = "fixed"         # Built-in extreme temperature rule
    CUSTOM = "custom"       # User-registered threshold


# Conditions checked against user thresholds, in evaluation order
OBSERVED_CONDITIONS: tuple[str, ...] = ("temperature", "wind_speed", "humidity")

# Alternate keys some providers use for the same condition
_FIELD_ALIASES: dict[str, tuple[str, ...]] = {
    "temperature": ("temperature",),
    "wind_speed": ("wind_speed", "windspeed"),
    "humidity": ("humidity", "relative_humidity", "relativehumidity_2m"),
}


def _as_number(raw: Any) -> Optional[float]:
    """Coerce a JSON value to a finite float, or None."""
    if isinstance(raw, bool) or not isinstance(raw, (int, float)):
        return None
    try:
        value = float(raw)
    except OverflowError:
        return None
    if not math.isfinite(value):
        return None
    return value


# ── Weather Reading ────────────────────────────────────────────────────


class WeatherReading(BaseModel):
    """
    One snapshot of observable weather values.

    Every field is optional: None means the source did not report it.
    NaN or infinite values never reach this model.
    """
    model_config = ConfigDict(frozen=True)

    temperature: Optional[float] = None     # °C
    wind_speed: Optional[float] = None      # km/h
    humidity: Optional[float] = None        # %

    @classmethod
    def empty(cls) -> "WeatherReading":
        return cls()

    @classmethod
    def from_current_weather(cls, data: dict) -> "WeatherReading":
        """Build a reading from a `current_weather` object; bad fields become None."""
        values: dict[str, Optional[float]] = {}
        for name, keys in _FIELD_ALIASES.items():
            values[name] = None
            for key in keys:
                if key in data:
                    values[name] = _as_number(data[key])
                    break
        return cls(**values)

    @property
    def is_empty(self) -> bool:
        return all(getattr(self, name) is None for name in OBSERVED_CONDITIONS)

    def value_of(self, condition: str) -> Optional[float]:
        if condition not in OBSERVED_CONDITIONS:
            return None
        return getattr(self, condition)


# ── Alert ──────────────────────────────────────────────────────────────


class Alert(BaseModel):
    """A triggered rule. Built by the engine, published once, then dropped."""
    model_config = ConfigDict(frozen=True)

    kind: AlertKind
    condition: str
    threshold: float
    value: float
    message: str


class EvaluationResult(BaseModel):
    """Outcome of running every rule against one reading."""
    alerts: list[Alert] = Field(default_factory=list)

    @property
    def triggered(self) -> bool:
        return bool(self.alerts)
