"""
Exception hierarchy for the HIFLD pipeline.

Fatal errors end the acquisition run (the CLI exits non-zero):
- NoEndpointAvailableError
- EmptyDatasetError

Recoverable errors are handled at candidate or batch granularity:
- MalformedResponseError: the candidate is skipped or paging stops
- BatchFetchError: paging stops, partial results are kept
"""

from typing import Any


class HIFLDError(Exception):
    """Base error carrying a message and structured details for logging."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class NoEndpointAvailableError(HIFLDError):
    """Raised when every primary candidate and the mirror were rejected."""

    def __init__(self, tried: list[str]):
        super().__init__(
            f"No feature service endpoint available ({len(tried)} candidates tried)",
            details={"tried": tried},
        )
        self.tried = tried


class EmptyDatasetError(HIFLDError):
    """Raised when the declared record count of a resolved endpoint is zero."""

    def __init__(self, base_url: str, reason: str = "count query returned 0"):
        super().__init__(
            f"No records available at {base_url}: {reason}",
            details={"base_url": base_url, "reason": reason},
        )
        self.base_url = base_url


class MalformedResponseError(HIFLDError):
    """Response body was not a JSON object."""

    def __init__(self, url: str, reason: str, status_code: int | None = None):
        super().__init__(
            f"Malformed response from {url}: {reason}",
            details={"url": url, "reason": reason, "status_code": status_code},
        )
        self.url = url
        self.status_code = status_code


class BatchFetchError(HIFLDError):
    """A page query failed; the fetcher stops paging at this offset."""

    def __init__(self, offset: int, reason: str):
        super().__init__(
            f"Batch at offset {offset} failed: {reason}",
            details={"offset": offset, "reason": reason},
        )
        self.offset = offset
        self.reason = reason
