from indexer_healthcheck.errors import ClockSkewError, ThresholdExceededError


def evaluate_delay(now: int, gen_utime: int, max_delay: int) -> int:
    """
    Classify how stale the indexer state is.
    :param now: Current Unix time in whole seconds.
    :param gen_utime: Generation time of the state record.
    :param max_delay: Largest delay still considered healthy (inclusive).
    :return: The delay in seconds when it is within the limit.
    :raises ClockSkewError: If the state appears to come from the future.
    :raises ThresholdExceededError: If the delay is above ``max_delay``.
    """
    delay = now - gen_utime
    if delay < 0:
        raise ClockSkewError(delay)
    if delay > max_delay:
        raise ThresholdExceededError(delay, max_delay)
    return delay
