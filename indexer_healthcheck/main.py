"""
Entry point for the indexer health check.
Resolves settings, reads the state record once and exits 0 (healthy) or 1.
"""

import asyncio
import sys
import time
from logging import getLogger
from typing import Callable, Mapping, Optional

from indexer_healthcheck.config import Settings, load_settings
from indexer_healthcheck.errors import ConfigError, HealthCheckError
from indexer_healthcheck.freshness import evaluate_delay
from indexer_healthcheck.outcome import Outcome, report
from indexer_healthcheck.redis_client import StateReader
from indexer_healthcheck.state import parse_state
from indexer_healthcheck.utils import init_logging

logger = getLogger(__name__)


async def run_check(
    settings: Settings,
    started: float,
    clock: Callable[[], float] = time.time,
) -> Outcome:
    """
    Fetch, validate and evaluate the indexer state.
    :param settings: Resolved configuration.
    :param started: ``time.monotonic()`` reading at process start; the deadline counts from it.
    :param clock: Wall clock returning Unix time in seconds.
    :return: A healthy outcome carrying the observed delay.
    :raises HealthCheckError: On any failed gate.
    """
    async with StateReader(settings) as reader:
        remaining = settings.timeout - (time.monotonic() - started)
        raw = await reader.fetch(settings.state_key, remaining)

    state = parse_state(raw, settings.state_key)

    now = int(clock())
    delay = evaluate_delay(now, state.gen_utime, settings.max_delay)
    logger.info(f"Indexer delay is {delay}s (limit {settings.max_delay}s)")
    return Outcome.ok(delay)


def main(
    environ: Optional[Mapping[str, str]] = None,
    clock: Callable[[], float] = time.time,
) -> int:
    started = time.monotonic()

    try:
        settings = load_settings(environ)
    except ConfigError as e:
        return report(Outcome.fail(str(e)))

    init_logging(settings.log_level)
    logger.debug(
        f"Checking '{settings.state_key}' at {settings.redis_addr} "
        f"(max delay {settings.max_delay}s, timeout {settings.timeout}s)"
    )

    try:
        outcome = asyncio.run(run_check(settings, started, clock))
    except HealthCheckError as e:
        outcome = Outcome.fail(str(e))
    except Exception as e:
        logger.exception("Unexpected error during health check")
        outcome = Outcome.fail(f"Unexpected error: {e}")

    return report(outcome)


if __name__ == "__main__":
    sys.exit(main())
