"""
Exception hierarchy for the feedback classifier.

``ConfigError`` is fatal and only raised at start-up.  The remaining
errors are per-request: the interactive loop reports them and keeps
prompting.
"""

from __future__ import annotations


class FeedbackClassifierError(Exception):
    """Base class for every error raised by this package."""


class ConfigError(FeedbackClassifierError):
    """Required configuration is missing or invalid."""


class TransportError(FeedbackClassifierError):
    """The remote endpoint could not be reached.

    Args:
        url: Endpoint that was being called.
        cause: The underlying transport exception.
    """

    def __init__(self, url: str, cause: BaseException) -> None:
        self.url = url
        self.cause = cause
        super().__init__(f"request to {url} failed: {cause!r}")


class RemoteCallError(FeedbackClassifierError):
    """The remote endpoint answered with a non-2xx status.

    Args:
        status_code: HTTP status code of the response.
        body: Raw response body text.
    """

    def __init__(self, status_code: int, body: str) -> None:
        self.status_code = status_code
        self.body = body
        super().__init__(f"HTTP {status_code}: {body}")


class MalformedResponseError(FeedbackClassifierError):
    """The response JSON does not have the shape the caller expects."""
