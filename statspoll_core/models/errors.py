"""
Failure kinds a poll cycle can end with.

Fetch errors come from talking to the stats endpoint, parse errors from
turning its body into a StatsRecord. Each error renders the single
diagnostic line printed by the poll loop.
"""

# Longer field values are cut in diagnostics.
MAX_SHOWN_VALUE = 40


class StatsPollError(Exception):
    """Base class for every failure that counts against the retry budget."""


class FetchError(StatsPollError):
    pass


class TransportError(FetchError):
    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Error fetching server statistic: {reason}")


class StatusError(FetchError):
    def __init__(self, status_code: int):
        self.status_code = status_code
        super().__init__(f"Error fetching server statistic: unexpected status code {status_code}")


class BodyReadError(FetchError):
    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Error reading response body: {reason}")


class ParseError(StatsPollError):
    pass


class FormatError(ParseError):
    def __init__(self, field_count: int, expected: int = 7):
        self.field_count = field_count
        self.expected = expected
        super().__init__(f"Invalid data format: expected {expected} fields, got {field_count}")


class FieldParseError(ParseError):
    def __init__(self, field_name: str, value: str):
        self.field_name = field_name
        self.value = value
        shown = value if len(value) <= MAX_SHOWN_VALUE else value[:MAX_SHOWN_VALUE] + "..."
        super().__init__(f"Error parsing {field_name}: invalid value {shown!r}")


class ValidationError(ParseError):
    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Invalid server statistic: {reason}")
