import sys
from dataclasses import dataclass
from typing import Optional, TextIO

EXIT_OK = 0
EXIT_FAIL = 1


@dataclass(frozen=True)
class Outcome:
    """
    Verdict of a single check run.
    """

    healthy: bool
    detail: str
    delay: Optional[int] = None

    @classmethod
    def ok(cls, delay: int) -> "Outcome":
        return cls(healthy=True, detail=f"Indexer delay is {delay} seconds.", delay=delay)

    @classmethod
    def fail(cls, reason: str) -> "Outcome":
        return cls(healthy=False, detail=reason)

    @property
    def exit_code(self) -> int:
        return EXIT_OK if self.healthy else EXIT_FAIL

    @property
    def message(self) -> str:
        prefix = "OK" if self.healthy else "FAIL"
        return f"{prefix}: {self.detail}"


def report(
    outcome: Outcome,
    stdout: Optional[TextIO] = None,
    stderr: Optional[TextIO] = None,
) -> int:
    """
    Write the single verdict line and return the process exit code.
    Success goes to stdout, failure to stderr.
    """
    stream = (stdout or sys.stdout) if outcome.healthy else (stderr or sys.stderr)
    print(outcome.message, file=stream, flush=True)
    return outcome.exit_code
