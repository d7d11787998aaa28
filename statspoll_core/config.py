"""
Runtime configuration for the poller.

Defaults match the production stats endpoint. Values can be overridden from
the environment (STATSPOLL_*) and then from command line flags.
"""
import logging
import math
import os
from dataclasses import dataclass, field, replace
from typing import Mapping, Optional
from urllib.parse import urlparse

# CONFIG
DEFAULT_ENDPOINT = "http://srv.msk01.gigacorp.local/_stats"
DEFAULT_POLL_INTERVAL = 30.0  # seconds
DEFAULT_FAILURE_CEILING = 3
DEFAULT_REQUEST_TIMEOUT = 10.0  # seconds

MAX_LOAD_AVERAGE = 30.0
MAX_MEMORY_USAGE = 0.8
MAX_DISK_USAGE = 0.9
MAX_NETWORK_USAGE = 0.9

ENV_PREFIX = "STATSPOLL_"


@dataclass(frozen=True)
class Thresholds:
    load: float = MAX_LOAD_AVERAGE
    memory: float = MAX_MEMORY_USAGE
    disk: float = MAX_DISK_USAGE
    network: float = MAX_NETWORK_USAGE

    def validate(self) -> "Thresholds":
        if not math.isfinite(self.load) or self.load < 0:
            raise ValueError(f"Load threshold must be a finite non-negative number, got {self.load}")
        for name in ("memory", "disk", "network"):
            value = getattr(self, name)
            if not (math.isfinite(value) and 0 < value <= 1):
                raise ValueError(f"{name.capitalize()} threshold must be in (0, 1], got {value}")
        return self


@dataclass(frozen=True)
class PollConfig:
    endpoint: str = DEFAULT_ENDPOINT
    poll_interval: float = DEFAULT_POLL_INTERVAL
    failure_ceiling: int = DEFAULT_FAILURE_CEILING
    thresholds: Thresholds = field(default_factory=Thresholds)
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    log_file: Optional[str] = None
    log_level: int = logging.INFO

    def validate(self) -> "PollConfig":
        url = urlparse(self.endpoint)
        if url.scheme not in ("http", "https") or not url.netloc:
            raise ValueError(f"Endpoint must be an http(s) URL, got {self.endpoint!r}")
        if not math.isfinite(self.poll_interval) or self.poll_interval < 0:
            raise ValueError(f"Poll interval must be a finite non-negative number, got {self.poll_interval}")
        if self.failure_ceiling < 1:
            raise ValueError(f"Failure ceiling must be at least 1, got {self.failure_ceiling}")
        if not math.isfinite(self.request_timeout) or self.request_timeout <= 0:
            raise ValueError(f"Request timeout must be a finite positive number, got {self.request_timeout}")
        self.thresholds.validate()
        return self

    def with_overrides(self, **overrides) -> "PollConfig":
        """ Return a copy with every non-None override applied. """
        threshold_keys = ("load", "memory", "disk", "network")
        threshold_overrides = {k: overrides.pop(k) for k in threshold_keys
                               if overrides.get(k) is not None}
        overrides = {k: v for k, v in overrides.items() if v is not None}
        if threshold_overrides:
            overrides["thresholds"] = replace(self.thresholds, **threshold_overrides)
        return replace(self, **overrides)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "PollConfig":
        """ Build a config from STATSPOLL_* variables, falling back to defaults. """
        if environ is None:
            environ = os.environ

        def get(name, cast):
            raw = environ.get(ENV_PREFIX + name)
            if raw is None or raw.strip() == "":
                return None
            try:
                return cast(raw.strip())
            except ValueError:
                raise ValueError(f"Invalid value for {ENV_PREFIX}{name}: {raw!r}") from None

        return cls().with_overrides(
            endpoint=get("ENDPOINT", str),
            poll_interval=get("INTERVAL", float),
            failure_ceiling=get("FAILURE_CEILING", int),
            request_timeout=get("TIMEOUT", float),
            load=get("MAX_LOAD", float),
            memory=get("MAX_MEMORY", float),
            disk=get("MAX_DISK", float),
            network=get("MAX_NETWORK", float),
            log_file=get("LOG_FILE", str),
            log_level=get("LOG_LEVEL", parse_log_level),
        )


def parse_log_level(value: str) -> int:
    level = logging.getLevelName(value.upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {value!r}")
    return level
