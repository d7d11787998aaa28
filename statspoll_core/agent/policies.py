"""
Threshold checks applied to every successfully parsed record.

Four fixed rules, evaluated in this order:
- load average above the load limit
- memory usage ratio above the memory limit
- disk usage ratio above the disk limit (reports free megabytes)
- network usage ratio above the network limit (reports free Mbit/s)

Comparisons are strictly greater-than: a value equal to its limit is fine.
Evaluation is pure; the poll loop prints what it returns.
"""
from typing import List

from statspoll_core.config import Thresholds
from statspoll_core.models.stats import StatsRecord

BYTES_PER_MB = 1024 * 1024
# Network totals are bytes per second; free bandwidth is reported in Mbit/s.
NETWORK_MBIT_FACTOR = 8 / (1024 * 1024)


def check_load(record: StatsRecord, thresholds: Thresholds):
    if record.load_average > thresholds.load:
        return f"Load Average is too high: {record.load_average:.2f}"
    return None


def check_memory(record: StatsRecord, thresholds: Thresholds):
    usage = record.memory_usage
    if usage > thresholds.memory:
        return f"Memory usage too high: {round(usage * 100)}%"
    return None


def check_disk(record: StatsRecord, thresholds: Thresholds):
    if record.disk_usage > thresholds.disk:
        free_mb = record.free_disk // BYTES_PER_MB
        return f"Free disk space is too low: {free_mb} Mb left"
    return None


def check_network(record: StatsRecord, thresholds: Thresholds):
    if record.network_usage > thresholds.network:
        free_mbit = record.free_network * NETWORK_MBIT_FACTOR
        return f"Network bandwidth usage high: {free_mbit:.2f} Mbit/s available"
    return None


CHECKS = [check_load, check_memory, check_disk, check_network]


def evaluate(record: StatsRecord, thresholds: Thresholds = Thresholds()) -> List[str]:
    """ Run every check against the record and collect the warnings it raises. """
    warnings = []
    for check in CHECKS:
        warning = check(record, thresholds)
        if warning is not None:
            warnings.append(warning)
    return warnings
