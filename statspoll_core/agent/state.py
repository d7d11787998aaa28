"""
Consecutive-failure bookkeeping for the poll loop.

PollState is a value: each cycle receives the current state and returns the
next one, so nothing is kept in module globals.
"""
from dataclasses import dataclass, replace


@dataclass(frozen=True)
class PollState:
    failures: int = 0
    terminated: bool = False

    def record_success(self) -> "PollState":
        return replace(self, failures=0)

    def record_failure(self, ceiling: int) -> "PollState":
        failures = self.failures + 1
        return replace(self, failures=failures, terminated=failures >= ceiling)
