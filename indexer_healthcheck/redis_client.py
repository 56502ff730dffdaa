import asyncio
from logging import getLogger
from typing import Optional

import redis.asyncio as aioredis
from redis.asyncio.retry import Retry
from redis.backoff import NoBackoff
from redis.exceptions import RedisError

from indexer_healthcheck.config import Settings
from indexer_healthcheck.errors import ConnectivityError, NotFoundError

logger = getLogger(__name__)

CLOSE_TIMEOUT_SECONDS = 1.0


class StateReader:
    """
    Single-use Redis reader for the indexer state key.
    The client is never retried: one GET either answers or the check fails.
    """

    def __init__(self, settings: Settings):
        self.addr = settings.redis_addr
        self.client = aioredis.Redis(
            host=settings.redis_host,
            port=settings.redis_port,
            socket_connect_timeout=settings.timeout,
            socket_timeout=settings.timeout,
            retry=Retry(NoBackoff(), 0),
            retry_on_timeout=False,
        )

    async def __aenter__(self) -> "StateReader":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    async def fetch(self, key: str, timeout: float) -> bytes:
        """
        Read the raw value stored under ``key``.
        :param key: The Redis key holding the indexer state.
        :param timeout: Seconds left for connecting and reading.
        :return: The stored value as bytes.
        :raises NotFoundError: If the key does not exist.
        :raises ConnectivityError: If Redis cannot be reached in time.
        """
        if timeout <= 0:
            raise ConnectivityError(
                f"Cannot get state from Redis at {self.addr}: deadline exceeded before request"
            )

        logger.debug(f"Fetching '{key}' from Redis at {self.addr}")
        try:
            value: Optional[bytes] = await asyncio.wait_for(
                self.client.get(key), timeout=timeout
            )
        except asyncio.TimeoutError:
            raise ConnectivityError(
                f"Cannot get state from Redis at {self.addr}: timed out after {timeout:.1f}s"
            ) from None
        except (RedisError, OSError) as e:
            raise ConnectivityError(
                f"Cannot get state from Redis at {self.addr}: {e}"
            ) from e

        if value is None:
            raise NotFoundError(f"State key '{key}' not found in Redis.")

        logger.debug(f"Fetched {len(value)} bytes from '{key}'")
        return value

    async def close(self):
        """
        Close the Redis client connection.
        Waits at most ``CLOSE_TIMEOUT_SECONDS``.
        Failures are logged at debug level and never change the outcome.
        """
        try:
            await asyncio.wait_for(self.client.aclose(), timeout=CLOSE_TIMEOUT_SECONDS)
        except asyncio.TimeoutError:
            logger.debug(f"Closing Redis connection timed out after {CLOSE_TIMEOUT_SECONDS}s")
        except Exception:
            logger.debug("Error while closing Redis connection.", exc_info=True)
