"""Custom exceptions for the UniProt query client."""
from typing import Optional


class UniProtClientError(Exception):
    """Base exception for UniProt client errors."""
    pass


class APIError(UniProtClientError):
    """Raised when a request to UniProt fails."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message)


class ServiceUnavailableError(APIError):
    """Raised when the UniProt server errors (5XX) or cannot be reached."""
    pass


class ProtocolError(UniProtClientError):
    """Raised when a response is missing an expected token or header."""
    pass


class JobTimeoutError(UniProtClientError):
    """Raised when an ID mapping job does not finish in time."""
    pass


class BatchRetrievalError(UniProtClientError):
    """Raised when a batch of TrEMBL accessions cannot be retrieved."""
    pass
