class HealthCheckError(Exception):
    """
    Base class for every condition that turns the check into a failure.
    The string form of the exception is the reason reported after ``FAIL:``.
    """


class ConfigError(HealthCheckError):
    pass


class ConnectivityError(HealthCheckError):
    pass


class NotFoundError(HealthCheckError):
    pass


class ParseError(HealthCheckError):
    pass


class ValidationError(HealthCheckError):
    pass


class ClockSkewError(HealthCheckError):
    def __init__(self, delay: int):
        self.delay = delay
        super().__init__(
            f"System clock seems to be behind the indexer's clock (delay: {delay}). "
            "Check time synchronization."
        )


class ThresholdExceededError(HealthCheckError):
    def __init__(self, delay: int, max_delay: int):
        self.delay = delay
        self.max_delay = max_delay
        super().__init__(f"Indexer delay is {delay} seconds (limit {max_delay}).")
