"""
Alert Engine — fixed and user-configurable weather rules.

Two rule families run against every reading:
1. Fixed extreme-temperature rule: fires above 30°C or below 5°C
2. Custom rules: fire when an observed condition strictly exceeds
   the threshold registered for it

Both `evaluate` and `summarize` are pure. Publishing is the scheduler's job.
"""

from typing import Mapping, Optional

import structlog

from weatheralert.alerting.schemas import (
    OBSERVED_CONDITIONS,
    Alert,
    AlertKind,
    EvaluationResult,
    WeatherReading,
)
from weatheralert.alerting.thresholds import ThresholdStore

logger = structlog.get_logger(__name__)

HOT_LIMIT_C = 30.0
COLD_LIMIT_C = 5.0

EXTREME_TEMPERATURE_MESSAGE = "Extreme temperature alert! Take precautions."
UNAVAILABLE_UPDATE_MESSAGE = "Unable to fetch weather update at this time."


def format_custom_alert(condition: str, threshold: float, value: float) -> str:
    return (
        f"Custom alert: {condition} exceeds {threshold:.2f}! "
        f"Current value: {value:.2f}"
    )


def check_extreme_temperature(reading: WeatherReading) -> Optional[Alert]:
    """Fixed rule. Absent temperature never fires."""
    temperature = reading.temperature
    if temperature is None:
        return None

    if temperature > HOT_LIMIT_C:
        bound = HOT_LIMIT_C
    elif temperature < COLD_LIMIT_C:
        bound = COLD_LIMIT_C
    else:
        return None

    return Alert(
        kind=AlertKind.FIXED,
        condition="temperature",
        threshold=bound,
        value=temperature,
        message=EXTREME_TEMPERATURE_MESSAGE,
    )


def check_custom_thresholds(
    reading: WeatherReading,
    thresholds: Mapping[str, float],
) -> list[Alert]:
    """Custom rules, one per observed condition. Equality does not fire."""
    fired: list[Alert] = []
    for condition in OBSERVED_CONDITIONS:
        value = reading.value_of(condition)
        threshold = thresholds.get(condition)
        if value is None or threshold is None:
            continue
        if value > threshold:
            fired.append(
                Alert(
                    kind=AlertKind.CUSTOM,
                    condition=condition,
                    threshold=threshold,
                    value=value,
                    message=format_custom_alert(condition, threshold, value),
                )
            )
    return fired


def evaluate(reading: WeatherReading, store: ThresholdStore) -> EvaluationResult:
    """
    Run every rule against a reading.

    Args:
        reading: Current weather snapshot (fields may be None)
        store: User thresholds; read once via an atomic snapshot

    Returns:
        EvaluationResult with the fixed alert first (if any), then
        custom alerts in condition order
    """
    alerts: list[Alert] = []

    extreme = check_extreme_temperature(reading)
    if extreme is not None:
        alerts.append(extreme)

    alerts.extend(check_custom_thresholds(reading, store.snapshot()))

    if alerts:
        logger.info(
            "alerts_evaluated",
            triggered=True,
            count=len(alerts),
            conditions=[a.condition for a in alerts],
        )
    else:
        logger.debug("alerts_evaluated", triggered=False, temperature=reading.temperature)

    return EvaluationResult(alerts=alerts)


def summarize(reading: WeatherReading) -> str:
    """Human-readable status line. Never raises."""
    temperature = reading.temperature
    if temperature is None:
        return UNAVAILABLE_UPDATE_MESSAGE

    if temperature > HOT_LIMIT_C:
        comment = "You can wear a T-shirt today!"
    elif temperature < COLD_LIMIT_C:
        comment = "Don't forget your jacket!"
    else:
        comment = "Weather is moderate. Dress comfortably!"

    return f"Current temperature: {float(temperature)}°C. {comment}"
