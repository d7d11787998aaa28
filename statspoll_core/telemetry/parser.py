"""
Turns the raw stats line into a StatsRecord.

Wire format (no surrounding whitespace):
    <loadAvg>,<totalMem>,<usedMem>,<totalDisk>,<usedDisk>,<totalNet>,<usedNet>

Parsing is purely syntactic and stops at the first bad field. Range and
cross-field checks live in validate_stats.
"""
import math
import re
from typing import Union

from statspoll_core.logger_config import setup_logger
from statspoll_core.models.errors import FieldParseError, FormatError, ValidationError
from statspoll_core.models.stats import StatsRecord

logger = setup_logger()

FIELD_SEPARATOR = ","

FLOAT_RE = re.compile(r"[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")
INT_RE = re.compile(r"[+-]?[0-9]+")

# Integer fields are 64-bit signed on the server side.
INT64_MIN = -2 ** 63
INT64_MAX = 2 ** 63 - 1
INT64_MAX_DIGITS = len(str(INT64_MAX))

# (semantic name, record attribute, converter) in wire order
FIELDS = [
    ("load average", "load_average", float),
    ("total memory", "total_memory", int),
    ("used memory", "used_memory", int),
    ("total disk", "total_disk", int),
    ("used disk", "used_disk", int),
    ("total network bandwidth", "total_network", int),
    ("used network bandwidth", "used_network", int),
]


def parse_field(name: str, raw: str, kind: type) -> Union[int, float]:
    pattern = FLOAT_RE if kind is float else INT_RE
    if not pattern.fullmatch(raw):
        raise FieldParseError(name, raw)
    if kind is int and len(raw.lstrip("+-").lstrip("0")) > INT64_MAX_DIGITS:
        raise FieldParseError(name, raw)

    try:
        value = kind(raw)
    except (ValueError, OverflowError):
        raise FieldParseError(name, raw) from None

    if kind is float and not math.isfinite(value):
        raise FieldParseError(name, raw)
    if kind is int and not INT64_MIN <= value <= INT64_MAX:
        raise FieldParseError(name, raw)
    return value


def parse_stats(raw: Union[bytes, str]) -> StatsRecord:
    """ Parse one stats line, raising FormatError or FieldParseError. """
    if isinstance(raw, bytes):
        raw = raw.decode("ascii", errors="replace")

    parts = raw.split(FIELD_SEPARATOR)
    if len(parts) != len(FIELDS):
        raise FormatError(len(parts), expected=len(FIELDS))

    values = {}
    for (name, attr, kind), part in zip(FIELDS, parts):
        values[attr] = parse_field(name, part, kind)

    record = StatsRecord(**values)
    logger.debug(f"Parsed {record}.")
    return record


def validate_stats(record: StatsRecord) -> StatsRecord:
    """ Reject records the threshold checks cannot evaluate meaningfully. """
    if record.load_average < 0:
        raise ValidationError(f"negative load average {record.load_average}")

    for label, total, used in (
        ("memory", record.total_memory, record.used_memory),
        ("disk", record.total_disk, record.used_disk),
        ("network", record.total_network, record.used_network),
    ):
        if total < 0 or used < 0:
            raise ValidationError(f"negative {label} value")
        if total == 0:
            raise ValidationError(f"total {label} is zero")
        if used > total:
            raise ValidationError(f"used {label} {used} exceeds total {total}")

    return record
