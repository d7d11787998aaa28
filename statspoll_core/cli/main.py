"""
Entry point for the statspoll command.

Builds a PollConfig from defaults, STATSPOLL_* environment variables and
flags (in increasing priority), then runs the poll loop until the failure
ceiling is hit.
"""
import argparse
import sys

from statspoll_core.agent.engine import PollLoop
from statspoll_core.config import PollConfig, parse_log_level
from statspoll_core.logger_config import setup_logger
from statspoll_core.telemetry.fetcher import Fetcher


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="statspoll",
        description="Poll a server stats endpoint and warn when load, memory, disk or network run hot.",
    )
    parser.add_argument("--endpoint", help="stats URL to poll")
    parser.add_argument("--interval", type=float, dest="poll_interval",
                        help="seconds between polls")
    parser.add_argument("--failure-ceiling", type=int,
                        help="consecutive failures before giving up")
    parser.add_argument("--timeout", type=float, dest="request_timeout",
                        help="HTTP request timeout in seconds")
    parser.add_argument("--max-load", type=float, dest="load", help="load average limit")
    parser.add_argument("--max-memory", type=float, dest="memory", help="memory usage ratio limit")
    parser.add_argument("--max-disk", type=float, dest="disk", help="disk usage ratio limit")
    parser.add_argument("--max-network", type=float, dest="network", help="network usage ratio limit")
    parser.add_argument("--log-file", help="also write logs to this file")
    parser.add_argument("--log-level", type=parse_log_level, help="DEBUG, INFO, WARNING, ...")

    cycles = parser.add_mutually_exclusive_group()
    cycles.add_argument("--once", action="store_const", const=1, dest="max_cycles",
                        help="poll a single time and exit")
    cycles.add_argument("--max-cycles", type=int, help="stop after this many polls")
    return parser


def load_config(args: argparse.Namespace, environ=None) -> PollConfig:
    overrides = vars(args).copy()
    overrides.pop("max_cycles", None)
    return PollConfig.from_env(environ).with_overrides(**overrides).validate()


def main(argv=None, environ=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.max_cycles is not None and args.max_cycles < 1:
        parser.error("--max-cycles must be at least 1")

    try:
        config = load_config(args, environ)
    except ValueError as e:
        print(f"statspoll: {e}", file=sys.stderr)
        return 2

    logger = setup_logger(log_file=config.log_file, level=config.log_level)

    with Fetcher(config.endpoint, timeout=config.request_timeout) as fetcher:
        loop = PollLoop(config, fetcher=fetcher)
        try:
            state = loop.run(max_cycles=args.max_cycles)
        except KeyboardInterrupt:
            logger.info("Interrupted, stopping.")
            return 130

    return 1 if state.terminated else 0


if __name__ == "__main__":
    sys.exit(main())
