import asyncio
import logging

import pytest

from indexer_healthcheck import redis_client


class FakeRedis:
    """
    Stand-in for ``redis.asyncio.Redis`` that serves values from a dict.
    """

    instances = []

    def __init__(self, **kwargs):
        self.kwargs = kwargs
        self.store = {}
        self.error = None
        self.get_delay = 0.0
        self.close_delay = 0.0
        self.requested = []
        self.closed = False
        FakeRedis.instances.append(self)

    async def get(self, key):
        self.requested.append(key)
        if self.get_delay:
            await asyncio.sleep(self.get_delay)
        if self.error is not None:
            raise self.error
        return self.store.get(key)

    async def aclose(self):
        if self.close_delay:
            await asyncio.sleep(self.close_delay)
        self.closed = True


@pytest.fixture
def fake_redis(monkeypatch):
    """
    Patch the Redis client class and return a factory configuring the next instance.
    """
    FakeRedis.instances = []
    settings = {}

    class ConfiguredFakeRedis(FakeRedis):
        def __init__(self, **kwargs):
            super().__init__(**kwargs)
            self.store.update(settings.get("store", {}))
            self.error = settings.get("error")
            self.get_delay = settings.get("get_delay", 0.0)
            self.close_delay = settings.get("close_delay", 0.0)

    def configure(store=None, error=None, get_delay=0.0, close_delay=0.0):
        settings["store"] = store or {}
        settings["error"] = error
        settings["get_delay"] = get_delay
        settings["close_delay"] = close_delay
        return FakeRedis.instances

    monkeypatch.setattr(redis_client.aioredis, "Redis", ConfiguredFakeRedis)
    return configure


@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
