import json
from dataclasses import dataclass
from logging import getLogger
from typing import Union

from indexer_healthcheck.errors import ParseError, ValidationError
from indexer_healthcheck.limits import INT64_MAX, INT64_MIN

logger = getLogger(__name__)


@dataclass(frozen=True)
class IndexerState:
    """
    State record published by the indexer.
    Only ``gen_utime`` is read; any other field in the stored object is ignored.
    """

    gen_utime: int = 0


def _decode(raw: Union[bytes, str], key: str) -> dict:
    # invalid UTF-8 is replaced with U+FFFD rather than rejected
    text = raw.decode("utf-8", errors="replace") if isinstance(raw, bytes) else raw
    try:
        data = json.loads(text)
    except (ValueError, RecursionError) as e:
        raise ParseError(f"Cannot parse JSON state from key '{key}': {e}") from e

    # a bare null leaves every field at its zero value
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ParseError(
            f"Cannot parse JSON state from key '{key}': "
            f"expected a JSON object, got {type(data).__name__}"
        )
    return data


def parse_state(raw: Union[bytes, str], key: str) -> IndexerState:
    """
    Decode and validate the state record read from Redis.
    :param raw: The value stored under ``key`` (UTF-8 JSON, bytes or already decoded).
    :param key: The key it was read from, used in error messages.
    :return: The decoded state with a positive ``gen_utime``.
    :raises ParseError: If the value is not a JSON object of the expected shape.
    :raises ValidationError: If ``gen_utime`` is missing, zero or negative.
    """
    data = _decode(raw, key)

    gen_utime = data.get("gen_utime")
    if gen_utime is None:
        gen_utime = 0
    # bool is an int subclass but never a valid timestamp
    if isinstance(gen_utime, bool) or not isinstance(gen_utime, int):
        raise ParseError(
            f"Cannot parse JSON state from key '{key}': "
            f"'gen_utime' must be an integer, got {json.dumps(gen_utime)}"
        )
    if not INT64_MIN <= gen_utime <= INT64_MAX:
        raise ParseError(
            f"Cannot parse JSON state from key '{key}': "
            f"'gen_utime' value {gen_utime} overflows a 64-bit integer"
        )

    if gen_utime == 0:
        raise ValidationError(f"'gen_utime' is missing or zero in state from key '{key}'.")
    if gen_utime < 0:
        raise ValidationError(
            f"'gen_utime' must be positive in state from key '{key}' (got {gen_utime})."
        )

    state = IndexerState(gen_utime=gen_utime)
    logger.debug(f"Parsed state from '{key}': gen_utime={state.gen_utime}")
    return state
