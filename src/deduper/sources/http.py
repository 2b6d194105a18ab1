import logging
from typing import Dict, Iterator, Optional

import requests

from deduper.sources.base import LineSource
from deduper.utils.exceptions import NetworkError
from deduper.utils.retry import is_transient, retry_with_backoff

logger = logging.getLogger(__name__)

HEADERS_TEXT = {
    "User-Agent": "deduper/0.1",
    "Accept": "text/plain,text/*;q=0.9,*/*;q=0.8",
}


class HttpLineSource(LineSource):
    """Streams lines from an HTTP response body.

    Opening the connection is retried with backoff on connection errors,
    HTTP 429 and 5xx; other client errors fail at once. Errors after
    streaming has started propagate to the caller.
    """

    def __init__(
        self,
        url: str,
        timeout: int = 30,
        encoding: str = "utf-8",
        session: Optional[requests.Session] = None,
        headers: Optional[Dict[str, str]] = None,
    ):
        self.url = url
        self.timeout = timeout
        self.encoding = encoding
        self.session = session or requests.Session()
        self.headers = {**HEADERS_TEXT, **(headers or {})}

    @property
    def name(self) -> str:
        return self.url

    @retry_with_backoff(max_retries=3, base_delay=1.0, should_retry=is_transient)
    def _open(self) -> requests.Response:
        try:
            response = self.session.get(
                self.url, headers=self.headers, timeout=self.timeout, stream=True
            )
        except requests.RequestException as e:
            raise NetworkError(self.url, f"Request failed: {e}") from e

        if response.status_code >= 400:
            response.close()
            raise NetworkError(
                self.url, f"HTTP {response.status_code}", status_code=response.status_code
            )
        return response

    def __iter__(self) -> Iterator[str]:
        response = self._open()
        logger.info(f"Streaming lines from {self.url}")
        # requests assumes ISO-8859-1 for text/* without a charset
        content_type = response.headers.get("Content-Type", "")
        if "charset=" not in content_type.lower():
            response.encoding = self.encoding
        try:
            for line in response.iter_lines(decode_unicode=True):
                yield line
        except requests.RequestException as e:
            raise NetworkError(self.url, f"Stream interrupted: {e}") from e
        finally:
            response.close()
