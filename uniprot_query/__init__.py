"""Client for the UniProt ID mapping and TrEMBL listing services."""

from .client import UniProtClient
from .exceptions import (
    UniProtClientError,
    APIError,
    ServiceUnavailableError,
    ProtocolError,
    JobTimeoutError,
    BatchRetrievalError,
)

__version__ = "0.1.0"
