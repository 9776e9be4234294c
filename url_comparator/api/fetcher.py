"""
JSON Fetcher

Retrieves a JSON document from a URL over a shared requests.Session.
Every failure (network error, timeout, non-2xx status, undecodable body)
comes back as a failed FetchResult; nothing raises past ``fetch``.
"""

import time
from typing import Any, Dict, Optional

import requests
from requests.adapters import HTTPAdapter

from url_comparator.domain.comparison import FetchResult
from url_comparator.exceptions import FetchError
from url_comparator.utils.logger import get_logger, mask_url

logger = get_logger(__name__)


def build_session(
    pool_size: int = 10,
    headers: Optional[Dict[str, str]] = None,
) -> requests.Session:
    """
    Create a session whose connection pool can serve ``pool_size`` concurrent fetches.

    Args:
        pool_size: Maximum simultaneous connections kept per host
        headers: Extra headers sent with every request (e.g. Authorization)

    Returns:
        Configured requests.Session
    """
    session = requests.Session()
    adapter = HTTPAdapter(pool_connections=pool_size, pool_maxsize=pool_size)
    session.mount("http://", adapter)
    session.mount("https://", adapter)
    session.headers.update({"Accept": "application/json"})
    if headers:
        session.headers.update(headers)
    return session


class JsonFetcher:
    """
    Fetch and decode JSON documents.

    No retries and no response size limit; an optional timeout is applied
    per request.
    """

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = None,
    ):
        """
        Initialize fetcher.

        Args:
            session: Shared requests.Session (a default one is built if omitted)
            timeout: Per-request timeout in seconds, None for no timeout
        """
        self.session = session if session is not None else build_session()
        self.timeout = timeout

    def fetch_document(self, url: str) -> Any:
        """
        Fetch ``url`` and return the decoded JSON body.

        Raises:
            FetchError: On network error, timeout, non-success status or
                a body that is not JSON
        """
        try:
            response = self.session.get(url, timeout=self.timeout)
        except requests.Timeout as e:
            raise FetchError(url, f"timed out: {e}") from e
        except requests.RequestException as e:
            raise FetchError(url, str(e)) from e

        status_code = getattr(response, "status_code", None)
        try:
            response.raise_for_status()
        except requests.HTTPError as e:
            raise FetchError(url, str(e), status_code=status_code) from e

        try:
            return response.json()
        except (ValueError, RecursionError) as e:
            # RecursionError: nesting deeper than the decoder can follow
            raise FetchError(
                url, f"response is not valid JSON: {e}", status_code=status_code
            ) from e

    def fetch(self, url: str) -> FetchResult:
        """
        Fetch ``url`` and report the outcome as data.

        Args:
            url: Opaque URL string from the input list

        Returns:
            FetchResult with ``ok`` set and either ``document`` or ``error_message``
        """
        start_time = time.time()
        try:
            document = self.fetch_document(url)
        except FetchError as e:
            logger.warning(
                "Fetch failed",
                operation="fetch",
                context={"url": mask_url(url), "status_code": e.status_code},
                error=e.reason,
            )
            return FetchResult.failure(url, str(e), status_code=e.status_code)

        logger.debug(
            "Fetched document",
            operation="fetch",
            context={
                "url": mask_url(url),
                "elapsed_ms": round((time.time() - start_time) * 1000, 2),
            },
        )
        return FetchResult.success(url, document)
