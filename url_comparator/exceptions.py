"""
Custom exception hierarchy for the URL comparator.

Only configuration-level problems are allowed to abort a run. Fetch failures
and crashes inside an isolated comparison task are contained at the pair
level and reported as data.
"""

from typing import Optional


class ComparatorException(Exception):
    """
    Base exception for all comparator errors.
    """

    pass


class ConfigurationError(ComparatorException):
    """
    Raised when the run cannot start: mismatched URL list lengths, a
    non-positive limit or batch size, or an invalid configuration file.

    Fatal. Raised before any fetch is made and never retried.
    """

    pass


class InputFileError(ComparatorException):
    """
    Raised when a URL list file is missing or cannot be parsed.
    """

    pass


class ReportWriteError(ComparatorException):
    """
    Raised when a report file cannot be written.

    The comparison itself completed; only its output was lost.
    """

    pass


class FetchError(ComparatorException):
    """
    Raised when a document cannot be retrieved or decoded as JSON.

    Only ``JsonFetcher.fetch_document`` lets this escape; ``JsonFetcher.fetch``
    converts it into a failed ``FetchResult``.
    """

    def __init__(
        self,
        url: str,
        reason: str,
        status_code: Optional[int] = None,
    ) -> None:
        status_fragment = f" (HTTP {status_code})" if status_code is not None else ""
        super().__init__(f"Error fetching {url}{status_fragment}: {reason}")
        self.url = url
        self.reason = reason
        self.status_code = status_code


class ExecutionCrash(ComparatorException):
    """
    Wraps an unexpected exception raised inside an isolated comparison task.

    Recorded in the failure reason and the log; never propagated past the
    task runner.
    """

    def __init__(self, pair_index: int, cause: BaseException) -> None:
        super().__init__(
            f"Comparison task for pair {pair_index} crashed: "
            f"{type(cause).__name__}: {cause}"
        )
        self.pair_index = pair_index
        self.cause = cause
