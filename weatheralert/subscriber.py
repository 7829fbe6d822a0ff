"""
Weather Subscriber — prints every message on the weather channels.

Usage:
    python -m weatheralert.subscriber
"""

import asyncio
import signal
from typing import Callable, Iterable, Optional

import redis.asyncio as aioredis
import structlog

from weatheralert.alerting.schemas import Channel
from weatheralert.config import settings
from weatheralert.logging_config import configure_logging

logger = structlog.get_logger(__name__)


def format_received(channel: str, message: str) -> str:
    return f"Received message from {channel}: {message}"


class WeatherSubscriber:
    """Listens on the alert and update channels until stopped."""

    def __init__(
        self,
        client: aioredis.Redis,
        channels: Iterable[str] = (Channel.ALERTS, Channel.UPDATES),
        output: Callable[[str], None] = print,
    ):
        self._redis = client
        self._channels = [str(c) for c in channels]
        self._output = output
        self._pubsub = None

    async def start(self) -> None:
        self._pubsub = self._redis.pubsub()
        await self._pubsub.subscribe(*self._channels)
        logger.info("subscribed", channels=self._channels)

    def handle(self, message: Optional[dict]) -> bool:
        """Print a pub/sub message. Returns False for non-message frames."""
        if not message or message.get("type") != "message":
            return False

        channel = message["channel"]
        data = message["data"]
        if isinstance(channel, bytes):
            channel = channel.decode()
        if isinstance(data, bytes):
            data = data.decode("utf-8", errors="replace")

        self._output(format_received(channel, data))
        return True

    async def run(self, stop_event: asyncio.Event) -> None:
        """Poll for messages until `stop_event` is set."""
        if self._pubsub is None:
            await self.start()

        while not stop_event.is_set():
            try:
                message = await self._pubsub.get_message(
                    ignore_subscribe_messages=True,
                    timeout=1.0,
                )
                self.handle(message)
            except Exception as e:
                logger.error("subscriber_listen_error", error=str(e))
                await asyncio.sleep(1)

    async def stop(self) -> None:
        if self._pubsub is not None:
            await self._pubsub.unsubscribe()
            await self._pubsub.aclose()
            self._pubsub = None
        await self._redis.aclose()
        logger.info("subscriber_stopped")


async def main():
    configure_logging(settings.log_level, settings.log_format)
    client = aioredis.from_url(settings.redis_url, decode_responses=True)
    subscriber = WeatherSubscriber(client)
    await subscriber.start()

    stop_event = asyncio.Event()
    loop = asyncio.get_running_loop()
    for signum in (signal.SIGINT, signal.SIGTERM):
        loop.add_signal_handler(signum, stop_event.set)

    await subscriber.run(stop_event)
    await subscriber.stop()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        pass
