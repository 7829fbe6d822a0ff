"""
Publisher Entry Point.

Usage:
    python -m weatheralert.scheduler_main

Runs the alert and update cycles until SIGINT/SIGTERM.
"""

import asyncio
import signal

import structlog

from weatheralert.alerting.thresholds import ThresholdStore
from weatheralert.config import settings
from weatheralert.logging_config import configure_logging
from weatheralert.services.publisher import RedisPublisher
from weatheralert.services.scheduler import WeatherAlertScheduler
from weatheralert.services.weather_client import WeatherClient

logger = structlog.get_logger(__name__)


async def main():
    """Wire dependencies and run the scheduler."""
    configure_logging(settings.log_level, settings.log_format)
    logger.info("weather_service_starting", version=settings.app_version)

    # Unreachable Redis at startup is fatal
    publisher = RedisPublisher(
        redis_url=settings.redis_url,
        connect_timeout=settings.redis_connect_timeout_seconds,
    )
    await publisher.connect()

    weather_client = WeatherClient(
        url=settings.weather_api_url,
        timeout=settings.weather_timeout_seconds,
        mock_file=settings.weather_mock_file,
    )

    scheduler = WeatherAlertScheduler(
        weather_client=weather_client,
        publisher=publisher,
        thresholds=ThresholdStore(settings.alert_thresholds),
        alert_interval_seconds=settings.alert_interval_seconds,
        update_interval_seconds=settings.update_interval_seconds,
    )
    scheduler.start()

    stop_event = asyncio.Event()

    def _handle_signal(signum):
        logger.info("shutdown_signal_received", signal=signum)
        stop_event.set()

    loop = asyncio.get_running_loop()
    for signum in (signal.SIGINT, signal.SIGTERM):
        loop.add_signal_handler(signum, _handle_signal, signum)

    await stop_event.wait()

    await scheduler.stop()
    await publisher.close()
    logger.info("weather_service_shutdown_complete")


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        pass
