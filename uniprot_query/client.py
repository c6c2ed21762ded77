import re
import time
import logging
from logging import Logger
from urllib.parse import quote
from pathlib import Path
from typing import Callable, Dict, Iterable, List, Optional, Union

import requests
from tenacity import (
    RetryCallState,
    RetryError,
    Retrying,
    before_sleep_log,
    retry_if_result,
    wait_fixed,
)
from tenacity.stop import stop_base

from .config import (
    UNIPROT_REST_URL,
    TREMBL_ID_BATCH_SIZE,
    POLL_INTERVAL,
    MAX_WAIT_TIME,
    JOB_FINISHED_MARKER,
    REQUEST_TIMEOUT,
    USER_AGENT,
)
from .exceptions import (
    APIError,
    JobTimeoutError,
    ProtocolError,
    ServiceUnavailableError,
)
from .models import IdentifierPage, MappingRequest
from .pagination import TrEMBLBatchIterator, page_from_response

logger: Logger = logging.getLogger(__name__)

JOB_ID_PATTERN = re.compile(r'"jobId":"(.*?)"')
MAPPING_PAIR_PATTERN = re.compile(r'"from":"(\w+)","to":"(.*?)"')
TREMBL_RECORD_PATTERN = re.compile(r"Unreviewed|TrEMBL")


class stop_after_idle_time(stop_base):
    """Stop once the total time spent sleeping between attempts reaches a limit."""

    def __init__(self, max_idle_time: float) -> None:
        self.max_idle_time = max_idle_time

    def __call__(self, retry_state: RetryCallState) -> bool:
        return retry_state.idle_for >= self.max_idle_time


class UniProtClient:
    """
    Client for the UniProt REST API: ID mapping jobs, the TrEMBL accession
    listing and TrEMBL classification of single accessions.
    """

    def __init__(
        self,
        base_url: str = UNIPROT_REST_URL,
        timeout: float = REQUEST_TIMEOUT,
        poll_interval: float = POLL_INTERVAL,
        max_wait_time: float = MAX_WAIT_TIME,
        sleep: Optional[Callable[[float], None]] = None,
    ):
        """
        Initialize UniProt client.

        Args:
            base_url: Root of the UniProt REST API
            timeout: Timeout in seconds for each HTTP request
            poll_interval: Seconds to sleep between job status checks
            max_wait_time: Total seconds of sleeping before a job times out
            sleep: Optional sleep function used while polling (default: time.sleep)
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.poll_interval = poll_interval
        self.max_wait_time = max_wait_time
        self._sleep = sleep or time.sleep

        self.session = requests.Session()
        self.session.headers.update({"User-Agent": USER_AGENT})

        logger.info(
            f"Initialized UniProt client (base_url={self.base_url}, "
            f"poll_interval={self.poll_interval}s, max_wait_time={self.max_wait_time}s)"
        )

    @property
    def mapping_url(self) -> str:
        return f"{self.base_url}/idmapping"

    def trembl_query_url(self, batch_size: int = TREMBL_ID_BATCH_SIZE) -> str:
        """URL of the first page of the TrEMBL accession listing."""
        return (
            f"{self.base_url}/uniprotkb/search?format=list&compressed=true"
            f"&query=(reviewed%3Afalse)&size={batch_size}"
        )

    def _make_request(self, method: str, url: str, **kwargs) -> requests.Response:
        """
        Make HTTP request to UniProt.

        Failures to reach the server and 5XX answers raise
        ServiceUnavailableError; every other failure raises APIError.
        """
        kwargs.setdefault("timeout", self.timeout)

        try:
            logger.debug(f"Request: {method} {url}")
            response = self.session.request(method, url, **kwargs)

            if response.status_code >= 400:
                response.close()
            response.raise_for_status()
            return response

        except requests.ConnectionError as e:
            logger.error(f"Unable to connect to UniProt: {e}")
            raise ServiceUnavailableError(f"Unable to connect to UniProt RESTful server: {e}")
        except requests.RequestException as e:
            status_code = getattr(e.response, "status_code", None)
            logger.error(f"Request failed: {e}")
            if status_code is not None and status_code >= 500:
                raise ServiceUnavailableError(
                    f"UniProt server error for {url}: {e}",
                    status_code=status_code,
                )
            raise APIError(
                f"UniProt API request failed: {e}",
                status_code=status_code,
            )

    def submit_query(self, ids: Iterable[str], target_database: str) -> str:
        """
        Submit an ID mapping job.

        Returns:
            The job id assigned by UniProt

        Raises:
            ValueError: If no ids are given or the target database is blank
            ProtocolError: If the response carries no job id
        """
        request = MappingRequest(ids=list(ids), target_database=target_database)
        files = {name: (None, value) for name, value in request.form_fields.items()}

        response = self._make_request("POST", f"{self.mapping_url}/run", files=files)

        for line in response.text.splitlines():
            match = JOB_ID_PATTERN.search(line)
            if match:
                job_id = match.group(1)
                logger.info(
                    f"Submitted mapping job {job_id}: {len(request.ids)} ids "
                    f"from {request.source_database} to {request.target_database}"
                )
                return job_id

        raise ProtocolError(f"Could not get job id from response: {response.text!r}")

    def is_job_finished(self, job_id: str) -> bool:
        """Check once whether a mapping job has finished."""
        # A finished job answers with a redirect to its results; the status
        # is in the redirect body itself.
        response = self._make_request(
            "GET",
            f"{self.mapping_url}/status/{job_id}",
            allow_redirects=False,
        )
        return any(JOB_FINISHED_MARKER in line for line in response.text.splitlines())

    def wait_for_job(
        self,
        job_id: str,
        id_count: Optional[int] = None,
        target_database: Optional[str] = None,
    ) -> None:
        """
        Poll a job until it finishes.

        The status is checked, then the client sleeps poll_interval seconds
        while less than max_wait_time seconds have been slept in total.

        Raises:
            JobTimeoutError: If the job is still pending once the wait budget is spent
        """
        retryer = Retrying(
            retry=retry_if_result(lambda finished: not finished),
            wait=wait_fixed(self.poll_interval),
            stop=stop_after_idle_time(self.max_wait_time),
            sleep=self._sleep,
            before_sleep=before_sleep_log(logger, logging.DEBUG),
        )

        try:
            retryer(self.is_job_finished, job_id)
        except RetryError as e:
            raise JobTimeoutError(
                f"Waited {self.max_wait_time}s but job {job_id} not finished"
                f"{self._job_description(id_count, target_database)}"
            ) from e

    @staticmethod
    def _job_description(id_count: Optional[int], target_database: Optional[str]) -> str:
        if id_count is None or target_database is None:
            return ""
        return f" for {id_count} identifiers mapping to {target_database}"

    def get_job_results(self, job_id: str) -> Dict[str, List[str]]:
        """
        Stream the results of a finished job into a mapping.

        Returns:
            Dict of source accession to target ids, in the order encountered
        """
        mapping: Dict[str, List[str]] = {}

        try:
            with self._make_request(
                "GET", f"{self.mapping_url}/stream/{job_id}", stream=True
            ) as response:
                if response.encoding is None:
                    response.encoding = "utf-8"
                for line in response.iter_lines(decode_unicode=True):
                    for match in MAPPING_PAIR_PATTERN.finditer(line):
                        mapping.setdefault(match.group(1), []).append(match.group(2))
        except requests.RequestException as e:
            logger.error(f"Reading results for job {job_id} failed: {e}")
            raise APIError(f"Unable to read results for job {job_id}: {e}")

        return mapping

    def get_mapping(
        self,
        ids: Iterable[str],
        target_database: str,
    ) -> Dict[str, List[str]]:
        """
        Map UniProt accessions to identifiers of a target database.

        Submits the job, waits for it to finish and returns its results.

        Example:
            >>> with UniProtClient() as client:
            ...     client.get_mapping(["P21802", "P12345"], "KEGG")
        """
        ids = list(ids)
        job_id = self.submit_query(ids, target_database)

        self.wait_for_job(job_id, id_count=len(ids), target_database=target_database)

        mapping = self.get_job_results(job_id)

        logger.info(
            f"Mapping job {job_id}: mapped {len(mapping)} of {len(ids)} ids "
            f"to {target_database}"
        )
        return mapping

    def is_trembl_id(self, accession: str) -> bool:
        """
        Check whether an accession is a TrEMBL (unreviewed) entry.

        Accessions that are empty, malformed or unknown to UniProt are not
        TrEMBL ids and return False.

        Raises:
            ServiceUnavailableError: If the server cannot be reached or answers 5XX
        """
        url = f"{self.base_url}/uniprotkb/{quote(accession, safe='')}.txt"

        try:
            response = self._make_request("GET", url)
        except ServiceUnavailableError:
            raise
        except APIError as e:
            logger.warning(f"Unable to get content from {url}: {e}")
            return False

        return any(
            TREMBL_RECORD_PATTERN.search(line) for line in response.text.splitlines()
        )

    def _fetch_identifier_page(self, url: str) -> IdentifierPage:
        response = self._make_request("GET", url)
        return page_from_response(response)

    def iter_trembl_batches(
        self,
        batch_size: int = TREMBL_ID_BATCH_SIZE,
    ) -> TrEMBLBatchIterator:
        """Start a new iteration over all TrEMBL accessions, one page at a time."""
        return TrEMBLBatchIterator(
            self._fetch_identifier_page,
            self.trembl_query_url(batch_size),
        )

    def write_trembl_ids_to_file(
        self,
        path: Union[str, Path],
        batch_size: int = TREMBL_ID_BATCH_SIZE,
        progress_callback: Optional[Callable[[int, int], None]] = None,
    ) -> int:
        """
        Append every TrEMBL accession to a file, one per line.

        The file is created if it does not exist.

        Args:
            path: File to append accessions to
            batch_size: Accessions requested per page
            progress_callback: Called with (pages fetched, ids written) after each page

        Returns:
            Number of accessions written
        """
        path = Path(path)
        batches = self.iter_trembl_batches(batch_size)
        written = 0

        with path.open("a") as handle:
            for batch in batches:
                for trembl_id in batch:
                    handle.write(f"{trembl_id}\n")
                handle.flush()
                written += len(batch)

                if progress_callback:
                    progress_callback(batches.pages_fetched, written)

        logger.info(
            f"Wrote {written} TrEMBL ids from {batches.pages_fetched} pages to {path}"
        )
        return written

    def close(self):
        """Close the HTTP session."""
        self.session.close()
        logger.info("Closed UniProt client session")

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()
