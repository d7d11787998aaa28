import pytest
import requests

from statspoll_core.config import PollConfig

GOOD_LINE = b"10.5,1000000,500000,2000000,1900000,1000000,950000"


class FakeResponse:
    def __init__(self, *, status_code=200, content=b"", read_error=None):
        self.status_code = status_code
        self._content = content
        self._read_error = read_error
        self.closed = False
        self.content_read = False

    @property
    def content(self):
        self.content_read = True
        if self._read_error is not None:
            raise self._read_error
        return self._content

    def close(self):
        self.closed = True

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()


class FakeSession:
    """Returns queued responses (or raises queued exceptions) in order."""

    def __init__(self, *items):
        self.queue = list(items)
        self.calls = []
        self.closed = False

    def get(self, url, *, timeout=None, headers=None, stream=False):
        self.calls.append({"url": url, "timeout": timeout, "headers": headers, "stream": stream})
        item = self.queue.pop(0)
        if isinstance(item, Exception):
            raise item
        return item

    def close(self):
        self.closed = True


class RecordingSleep:
    def __init__(self):
        self.calls = []

    def __call__(self, seconds):
        self.calls.append(seconds)


class ScriptedFetcher:
    """Stands in for Fetcher: each fetch returns bytes or raises the next scripted error."""

    def __init__(self, *items):
        self.queue = list(items)
        self.calls = 0

    def fetch(self):
        self.calls += 1
        item = self.queue.pop(0)
        if isinstance(item, Exception):
            raise item
        return item


@pytest.fixture
def config():
    return PollConfig(endpoint="http://stats.test/_stats", poll_interval=5.0)


@pytest.fixture
def sleep():
    return RecordingSleep()


@pytest.fixture
def connection_error():
    return requests.ConnectionError("connection refused")
