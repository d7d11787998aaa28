"""
Retrieves the raw statistics line from the stats endpoint.

One blocking GET per call. Only a 200 answer yields a body; anything else is
reported as a FetchError subtype so the poll loop can count it. The response
is always closed before returning, whatever the outcome.
"""
from typing import Optional

import requests

from statspoll_core.config import DEFAULT_REQUEST_TIMEOUT
from statspoll_core.logger_config import setup_logger
from statspoll_core.models.errors import BodyReadError, StatusError, TransportError

logger = setup_logger()

USER_AGENT = "statspoll/1.0"


class Fetcher:
    def __init__(self, endpoint: str, timeout: float = DEFAULT_REQUEST_TIMEOUT,
                 session: Optional[requests.Session] = None):
        self.endpoint = endpoint
        self.timeout = timeout
        self.session = session or requests.Session()
        self._owns_session = session is None

    def fetch(self) -> bytes:
        """ GET the endpoint and return the response body. """
        try:
            response = self.session.get(
                self.endpoint,
                timeout=self.timeout,
                headers={"User-Agent": USER_AGENT},
                stream=True,
            )
        except requests.RequestException as e:
            raise TransportError(str(e)) from e

        with response:
            if response.status_code != requests.codes.ok:
                raise StatusError(response.status_code)
            try:
                body = response.content
            except (requests.RequestException, OSError) as e:
                raise BodyReadError(str(e)) from e

        logger.debug(f"Fetched {len(body)} bytes from {self.endpoint}.")
        return body

    def close(self):
        if self._owns_session:
            self.session.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()
