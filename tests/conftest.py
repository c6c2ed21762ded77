"""Shared fixtures for UniProt client tests."""

import gzip

import pytest
import requests
from requests.structures import CaseInsensitiveDict

from uniprot_query.client import UniProtClient

BASE_URL = "https://rest.uniprot.org"


def make_response(body=b"", status_code=200, headers=None, url=BASE_URL):
    """Build a real requests.Response with a preloaded body."""
    if isinstance(body, str):
        body = body.encode("utf-8")

    response = requests.Response()
    response.status_code = status_code
    response._content = body
    response._content_consumed = True
    response.headers = CaseInsensitiveDict(headers or {})
    response.encoding = "utf-8"
    response.url = url
    return response


def make_page(ids, next_url=None):
    """Build a gzip-compressed TrEMBL listing page."""
    headers = {}
    if next_url:
        headers["link"] = f'<{next_url}>; rel="next"'
    body = gzip.compress("".join(f"{id_}\n" for id_ in ids).encode("utf-8"))
    return make_response(body, headers=headers)


@pytest.fixture
def sleeps():
    """Records every sleep requested while polling."""
    return []


@pytest.fixture
def client(sleeps):
    """Client whose polling sleeps are recorded instead of performed."""
    with UniProtClient(base_url=BASE_URL, sleep=sleeps.append) as client:
        yield client
