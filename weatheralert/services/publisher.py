"""
Redis Publisher — fire-and-forget PUBLISH to the weather channels.

One shared client handle; publishes are serialized through an asyncio.Lock
so the alert and update cycles never interleave on the connection.
Delivery is best effort: a failed publish is logged and reported as False.
"""

import asyncio
from typing import Optional

import redis.asyncio as aioredis
import structlog
from redis.exceptions import RedisError

logger = structlog.get_logger(__name__)


class RedisPublisher:
    """Publishes plain-text messages to Redis pub/sub channels."""

    def __init__(
        self,
        redis_url: str = "redis://localhost:6379/0",
        connect_timeout: float = 3.0,
        client: Optional[aioredis.Redis] = None,
    ):
        if client is None:
            client = aioredis.from_url(
                redis_url,
                decode_responses=True,
                socket_connect_timeout=connect_timeout,
            )
        self._redis = client
        self._lock = asyncio.Lock()

    async def connect(self) -> None:
        """Verify the connection. Raises if Redis is unreachable."""
        await self._redis.ping()
        logger.info("redis_connected")

    async def publish(self, channel: str, message: str) -> bool:
        """Publish one message. Returns False if the transport failed."""
        try:
            async with self._lock:
                receivers = await self._redis.publish(str(channel), message)
        except (RedisError, OSError) as e:
            logger.error("publish_failed", channel=str(channel), error=str(e))
            return False

        logger.info(
            "message_published",
            channel=str(channel),
            receivers=receivers,
            message=message,
        )
        return True

    async def close(self) -> None:
        await self._redis.aclose()
        logger.info("redis_closed")
