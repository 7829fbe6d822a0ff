"""
Threshold Store — user-defined upper bounds per weather condition.

Condition names are lower-cased on every write and lookup, so
"Wind_Speed" and "wind_speed" refer to the same threshold.
Thread-safe: an operator may update thresholds while a cycle reads them.
"""

import math
import threading
from typing import Optional

import structlog

logger = structlog.get_logger(__name__)


class ThresholdStore:
    """In-memory map of condition → threshold. Lives for the process lifetime."""

    def __init__(self, initial: Optional[dict[str, float]] = None):
        self._lock = threading.Lock()
        self._thresholds: dict[str, float] = {}
        for condition, threshold in (initial or {}).items():
            self.set(condition, threshold)

    @staticmethod
    def _normalize(condition: str) -> str:
        return condition.lower()

    @staticmethod
    def _is_valid_threshold(threshold: object) -> bool:
        if isinstance(threshold, bool) or not isinstance(threshold, (int, float)):
            return False
        try:
            return math.isfinite(threshold)
        except OverflowError:
            return False

    def set(self, condition: str, threshold: float) -> None:
        """Store or overwrite a threshold. Bad names and non-finite values are ignored."""
        if not isinstance(condition, str) or not self._is_valid_threshold(threshold):
            logger.warning(
                "threshold_rejected",
                condition=repr(condition),
                threshold=repr(threshold),
            )
            return

        key = self._normalize(condition)
        with self._lock:
            self._thresholds[key] = float(threshold)
        logger.info("threshold_set", condition=key, threshold=float(threshold))

    def get(self, condition: str) -> Optional[float]:
        """Threshold for a condition, or None if never set."""
        if not isinstance(condition, str):
            return None
        key = self._normalize(condition)
        with self._lock:
            return self._thresholds.get(key)

    def snapshot(self) -> dict[str, float]:
        """Consistent copy of all thresholds."""
        with self._lock:
            return dict(self._thresholds)

    def __contains__(self, condition: object) -> bool:
        if not isinstance(condition, str):
            return False
        return self.get(condition) is not None

    def __len__(self) -> int:
        with self._lock:
            return len(self._thresholds)
