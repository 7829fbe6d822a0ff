"""
Weather Alert Scheduler — two independent periodic cycles.

Jobs:
1. Alert cycle (every ALERT_INTERVAL_SECONDS) — fetch, evaluate rules,
   publish one message per triggered alert to `weather_alerts`
2. Update cycle (every UPDATE_INTERVAL_SECONDS) — fetch, summarize,
   publish one status line to `weather_updates`

Both jobs run on one asyncio loop and await all I/O, so neither blocks the
other. Scheduling is fixed-rate with max_instances=1 and coalesce=True: a
tick that would overlap a still-running instance of the same job is skipped
instead of queued.

Each cycle fetches on its own; the two fetches per interval are redundant
but keep the cycles fully independent.
"""

import asyncio
from datetime import datetime
from typing import Optional

import structlog
from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger

from weatheralert.alerting.engine import evaluate, summarize
from weatheralert.alerting.schemas import Channel, WeatherReading
from weatheralert.alerting.thresholds import ThresholdStore
from weatheralert.errors import FetchError
from weatheralert.services.publisher import RedisPublisher
from weatheralert.services.weather_client import WeatherClient

logger = structlog.get_logger(__name__)


class WeatherAlertScheduler:
    """Drives the alert and update cycles. Dependencies are passed in."""

    def __init__(
        self,
        weather_client: WeatherClient,
        publisher: RedisPublisher,
        thresholds: Optional[ThresholdStore] = None,
        alert_interval_seconds: int = 60,
        update_interval_seconds: int = 60,
    ):
        self.weather_client = weather_client
        self.publisher = publisher
        self.thresholds = thresholds if thresholds is not None else ThresholdStore()
        self.alert_interval_seconds = alert_interval_seconds
        self.update_interval_seconds = update_interval_seconds
        self.scheduler = AsyncIOScheduler()

    def start(self):
        """Register both cycles and start the scheduler. Must run inside an event loop."""
        now = datetime.now()
        self.scheduler.add_job(
            self.run_alert_cycle,
            IntervalTrigger(seconds=self.alert_interval_seconds),
            id="alert_cycle",
            next_run_time=now,
            max_instances=1,
            coalesce=True,
            replace_existing=True,
        )
        self.scheduler.add_job(
            self.run_update_cycle,
            IntervalTrigger(seconds=self.update_interval_seconds),
            id="update_cycle",
            next_run_time=now,
            max_instances=1,
            coalesce=True,
            replace_existing=True,
        )
        self.scheduler.start()
        logger.info(
            "weather_scheduler_started",
            alert_interval=self.alert_interval_seconds,
            update_interval=self.update_interval_seconds,
        )

    async def stop(self):
        """Cancel both cycles and wait until the scheduler has shut down."""
        if self.scheduler.running:
            self.scheduler.shutdown(wait=False)
            # AsyncIOScheduler may defer the shutdown to the event loop
            while self.scheduler.running:
                await asyncio.sleep(0)
        logger.info("weather_scheduler_stopped")

    def set_threshold(self, condition: str, threshold: float) -> None:
        """Register a custom alert threshold at runtime."""
        self.thresholds.set(condition, threshold)

    async def _fetch_reading(self, cycle: str) -> WeatherReading:
        """Current reading, or an empty one if the source failed."""
        try:
            return await self.weather_client.fetch()
        except FetchError as e:
            logger.warning("weather_fetch_failed", cycle=cycle, error=str(e))
            return WeatherReading.empty()
        except Exception as e:
            logger.error("weather_fetch_crashed", cycle=cycle, error=str(e), exc_info=True)
            return WeatherReading.empty()

    async def run_alert_cycle(self) -> int:
        """
        One alert tick.

        Returns:
            Number of alert messages published successfully
        """
        try:
            reading = await self._fetch_reading("alert")
            result = evaluate(reading, self.thresholds)
            if not result.triggered:
                return 0

            published = 0
            for alert in result.alerts:
                if await self.publisher.publish(Channel.ALERTS, alert.message):
                    published += 1
            logger.info(
                "alert_cycle_completed",
                alerts=len(result.alerts),
                published=published,
            )
            return published
        except Exception as e:
            logger.error("alert_cycle_failed", error=str(e), exc_info=True)
            return 0

    async def run_update_cycle(self) -> bool:
        """One update tick. Publishes exactly one status line."""
        try:
            reading = await self._fetch_reading("update")
            message = summarize(reading)
            return await self.publisher.publish(Channel.UPDATES, message)
        except Exception as e:
            logger.error("update_cycle_failed", error=str(e), exc_info=True)
            return False
