"""Tests for Pydantic models."""

import pytest
from uniprot_query.models import MappingRequest, IdentifierPage


def test_mapping_request_form_fields():
    """Test MappingRequest builds the multipart form fields."""
    request = MappingRequest(ids=["P21802", "P12345"], target_database="KEGG")

    assert request.source_database == "UniProtKB_AC-ID"
    assert request.form_fields == {
        "ids": "P21802,P12345",
        "from": "UniProtKB_AC-ID",
        "to": "KEGG",
    }


def test_mapping_request_strips_target_database():
    request = MappingRequest(ids=["P12345"], target_database="  Ensembl ")
    assert request.target_database == "Ensembl"


def test_mapping_request_rejects_empty_ids():
    """Test MappingRequest rejects an empty id list."""
    with pytest.raises(ValueError):
        MappingRequest(ids=[], target_database="KEGG")


def test_mapping_request_rejects_blank_target():
    """Test MappingRequest rejects a blank target database."""
    with pytest.raises(ValueError):
        MappingRequest(ids=["P12345"], target_database="   ")


def test_identifier_page_with_next():
    page = IdentifierPage(ids=["A0A024QZQ1"], next_url="https://rest.uniprot.org/next")
    assert page.has_next is True
    assert "1 ids in batch" in page.summary()


def test_identifier_page_last():
    """Test a page without a next URL is the last one."""
    assert IdentifierPage(ids=["A0A024QZQ1"]).has_next is False
    assert IdentifierPage(ids=[], next_url="").has_next is False
