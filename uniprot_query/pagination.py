"""
Paginated retrieval of TrEMBL (unreviewed) accessions from UniProt.

The listing endpoint returns a gzip-compressed page of accessions, one per
line, and points at the following page through its ``link`` header::

    link: <https://rest.uniprot.org/uniprotkb/search?cursor=...>; rel="next"

The last page carries no ``link`` header.
"""

import gzip
import logging
import re
import zlib
from typing import Callable, List, Optional

import requests

from .exceptions import APIError, BatchRetrievalError, ProtocolError
from .models import IdentifierPage

logger = logging.getLogger(__name__)

NEXT_URL_PATTERN = re.compile(r"<(.*?)>")
GZIP_MAGIC = b"\x1f\x8b"


def parse_next_url(link_header: Optional[str]) -> Optional[str]:
    """
    Extract the next page URL from a ``link`` header value.

    Returns None when the header is absent or empty. A header that does not
    contain a bracketed URL means the service changed its contract, so it
    raises ProtocolError.
    """
    if not link_header:
        return None

    match = NEXT_URL_PATTERN.search(link_header)
    if match is None:
        raise ProtocolError(f"Unable to match next TrEMBL query URL from {link_header}")

    return match.group(1)


def parse_identifier_batch(content: bytes) -> List[str]:
    """Decompress (if needed) a listing body and split it into accessions."""
    if content.startswith(GZIP_MAGIC):
        content = gzip.decompress(content)
    return content.decode("utf-8").splitlines()


def page_from_response(response: requests.Response) -> IdentifierPage:
    """Build an IdentifierPage from a listing response."""
    next_url = parse_next_url(response.headers.get("link"))
    return IdentifierPage(ids=parse_identifier_batch(response.content), next_url=next_url)


class TrEMBLBatchIterator:
    """
    Lazy, forward-only iterator over batches of TrEMBL accessions.

    Each step fetches exactly one page: the initial query URL first, then the
    URL taken from the previous page's ``link`` header. Iteration stops once
    a page arrives without a next link; no request is made past it.

    Example:
        >>> batches = TrEMBLBatchIterator(client._fetch_identifier_page, url)
        >>> while batches.has_next():
        ...     ids = next(batches)
    """

    def __init__(
        self,
        fetch_page: Callable[[str], IdentifierPage],
        initial_url: str,
    ):
        """
        Args:
            fetch_page: Callable retrieving and parsing the page at a URL
            initial_url: URL of the first page of the listing
        """
        self._fetch_page = fetch_page
        self.initial_url = initial_url
        self._current_page: Optional[IdentifierPage] = None
        self.pages_fetched = 0

    def has_next(self) -> bool:
        """Check if another batch can be fetched."""
        if self._current_page is None:
            return True
        return self._current_page.has_next

    def __iter__(self):
        return self

    def __next__(self) -> List[str]:
        if not self.has_next():
            raise StopIteration

        if self._current_page is None:
            url = self.initial_url
        else:
            url = self._current_page.next_url

        try:
            self._current_page = self._fetch_page(url)
        except APIError as e:
            raise BatchRetrievalError(
                f"Unable to query next batch of TrEMBL IDs: {e}"
            ) from e
        except (OSError, EOFError, zlib.error, UnicodeDecodeError) as e:
            raise BatchRetrievalError(
                f"Unable to read batch of TrEMBL IDs from {url}: {e}"
            ) from e

        self.pages_fetched += 1
        logger.debug(f"Page {self.pages_fetched}: {self._current_page.summary()}")

        return self._current_page.ids
