import logging
import os
import re
from dataclasses import dataclass
from typing import Mapping, Optional

from indexer_healthcheck.errors import ConfigError
from indexer_healthcheck.limits import INT64_MAX, INT64_MIN

DEFAULT_REDIS_HOST = "event-cache"
DEFAULT_REDIS_PORT = "6379"
DEFAULT_STATE_KEY = "last_mc_seqno"
DEFAULT_MAX_DELAY_SECONDS = "300"
DEFAULT_CHECK_TIMEOUT_SECONDS = "10"
DEFAULT_LOG_LEVEL = "WARNING"

_BASE10_INT = re.compile(r"[+-]?[0-9]+")


@dataclass(frozen=True)
class Settings:
    redis_host: str = DEFAULT_REDIS_HOST
    redis_port: int = int(DEFAULT_REDIS_PORT)
    state_key: str = DEFAULT_STATE_KEY
    max_delay: int = int(DEFAULT_MAX_DELAY_SECONDS)
    timeout: float = float(DEFAULT_CHECK_TIMEOUT_SECONDS)
    log_level: int = logging.WARNING

    @property
    def redis_addr(self) -> str:
        return f"{self.redis_host}:{self.redis_port}"


def _getenv(environ: Mapping[str, str], name: str, fallback: str) -> str:
    """
    Read a setting from the environment. Unset and empty values both
    resolve to the fallback.
    """
    value = environ.get(name)
    if not value:
        return fallback
    return value


def _parse_int(name: str, raw: str) -> int:
    # int() also accepts surrounding whitespace and underscores; only plain
    # base-10 digits are valid here.
    if not _BASE10_INT.fullmatch(raw):
        raise ConfigError(f"Invalid {name} value: {raw!r} is not a base-10 integer")

    value = int(raw)
    if not INT64_MIN <= value <= INT64_MAX:
        raise ConfigError(f"Invalid {name} value: {raw!r} is out of range")

    return value


def _parse_log_level(raw: str) -> int:
    level = logging.getLevelName(raw.upper())
    if isinstance(level, int):
        return level
    return logging.WARNING


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """
    Build the settings from environment variables.
    :param environ: Mapping to read from, ``os.environ`` when omitted.
    :return: The resolved, immutable settings.
    :raises ConfigError: If a numeric setting cannot be parsed or is out of bounds.
    """
    if environ is None:
        environ = os.environ

    max_delay = _parse_int(
        "MAX_DELAY_SECONDS",
        _getenv(environ, "MAX_DELAY_SECONDS", DEFAULT_MAX_DELAY_SECONDS),
    )
    if max_delay < 0:
        raise ConfigError(
            f"Invalid MAX_DELAY_SECONDS value: {max_delay} must not be negative"
        )

    redis_port = _parse_int(
        "REDIS_PORT", _getenv(environ, "REDIS_PORT", DEFAULT_REDIS_PORT)
    )
    if not 1 <= redis_port <= 65535:
        raise ConfigError(f"Invalid REDIS_PORT value: {redis_port} is not a TCP port")

    raw_timeout = _getenv(environ, "CHECK_TIMEOUT_SECONDS", DEFAULT_CHECK_TIMEOUT_SECONDS)
    try:
        timeout = float(raw_timeout)
    except ValueError:
        raise ConfigError(
            f"Invalid CHECK_TIMEOUT_SECONDS value: {raw_timeout!r} is not a number"
        ) from None
    # NaN fails this comparison too
    if not timeout > 0 or timeout == float("inf"):
        raise ConfigError(
            f"Invalid CHECK_TIMEOUT_SECONDS value: {raw_timeout!r} must be a positive number"
        )

    return Settings(
        redis_host=_getenv(environ, "REDIS_HOST", DEFAULT_REDIS_HOST),
        redis_port=redis_port,
        state_key=_getenv(environ, "REDIS_STATE_KEY", DEFAULT_STATE_KEY),
        max_delay=max_delay,
        timeout=timeout,
        log_level=_parse_log_level(_getenv(environ, "LOG_LEVEL", DEFAULT_LOG_LEVEL)),
    )
