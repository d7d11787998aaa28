"""
Main orchestration loop:
- fetches the stats line from the endpoint
- parses and validates it into a StatsRecord
- runs the threshold checks and prints their warnings
- waits the poll interval and starts over

Any fetch, parse or validation failure prints one diagnostic line and counts
against the failure ceiling. Reaching the ceiling prints the fatal line and
stops the loop for good.
"""
import sys
import time
from typing import Callable, Optional, TextIO

from statspoll_core.agent.policies import evaluate
from statspoll_core.agent.state import PollState
from statspoll_core.config import PollConfig
from statspoll_core.logger_config import setup_logger
from statspoll_core.models.errors import StatsPollError
from statspoll_core.telemetry.fetcher import Fetcher
from statspoll_core.telemetry.parser import parse_stats, validate_stats

logger = setup_logger()

FATAL_MESSAGE = "Unable to fetch server statistic."


class PollLoop:
    def __init__(self, config: PollConfig, fetcher: Optional[Fetcher] = None,
                 sleep: Callable[[float], None] = time.sleep, out: Optional[TextIO] = None):
        self.config = config
        self.fetcher = fetcher or Fetcher(config.endpoint, timeout=config.request_timeout)
        self.sleep = sleep
        self.out = out

    def emit(self, line: str):
        print(line, file=self.out or sys.stdout, flush=True)

    def run_cycle(self, state: PollState) -> PollState:
        """ Fetch, parse and evaluate once; return the state for the next cycle. """
        try:
            record = validate_stats(parse_stats(self.fetcher.fetch()))
        except StatsPollError as e:
            self.emit(str(e))
            state = state.record_failure(self.config.failure_ceiling)
            logger.warning(f"Poll failed ({type(e).__name__}), "
                           f"{state.failures}/{self.config.failure_ceiling} consecutive failures.")
            return state

        warnings = evaluate(record, self.config.thresholds)
        for warning in warnings:
            self.emit(warning)
        logger.info(f"Poll ok: load={record.load_average} mem={record.memory_usage:.2%} "
                    f"disk={record.disk_usage:.2%} net={record.network_usage:.2%}, "
                    f"{len(warnings)} warning(s).")
        return state.record_success()

    def run(self, max_cycles: Optional[int] = None, state: Optional[PollState] = None) -> PollState:
        """ Poll until the failure ceiling is reached or max_cycles have run. """
        state = state or PollState()
        logger.info(f"Polling {self.config.endpoint} every {self.config.poll_interval}s.")

        cycles = 0
        while True:
            state = self.run_cycle(state)
            cycles += 1

            if state.terminated:
                self.emit(FATAL_MESSAGE)
                logger.error(f"Giving up after {state.failures} consecutive failures.")
                return state
            if max_cycles is not None and cycles >= max_cycles:
                return state

            self.sleep(self.config.poll_interval)
