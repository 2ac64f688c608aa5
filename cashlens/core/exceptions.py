"""
Cashlens Exceptions
Custom exceptions raised by report fetching, metrics building and insights.
"""

from typing import Optional


class CashlensError(Exception):
    """Base exception for all cashlens errors."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)


class ReportFetchError(CashlensError):
    """Exception for report or account listing fetch errors."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        endpoint: Optional[str] = None
    ):
        self.status_code = status_code
        self.endpoint = endpoint
        super().__init__(message)


class SourceDataUnavailableError(CashlensError):
    """
    Source data for a canonical metrics build could not be fetched.

    Raised when any of the concurrent fetches feeding one build fails.
    No partial metrics record is produced.
    """

    def __init__(self, message: str, provider: Optional[str] = None):
        self.provider = provider
        super().__init__(message)


class InvalidInsightRequestError(CashlensError):
    """Exception for insight requests missing required parameters."""

    def __init__(self, message: str, field: Optional[str] = None):
        self.field = field
        super().__init__(message)
