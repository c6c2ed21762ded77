"""Tests for the command line interface."""

from unittest.mock import patch

from click.testing import CliRunner

from uniprot_query.cli import main
from uniprot_query.client import UniProtClient
from uniprot_query.exceptions import JobTimeoutError, ServiceUnavailableError


def test_map_prints_targets():
    """Test mapped ids are printed one per line with their targets."""
    mapping = {"P21802": ["hsa:2263", "hsa:2263b"], "P12345": ["ocu:100009301"]}
    runner = CliRunner()

    with patch.object(UniProtClient, "get_mapping", return_value=mapping) as mock_mapping:
        result = runner.invoke(main, ["map", "P21802", "P12345", "--to", "KEGG"])

    assert result.exit_code == 0
    assert result.output.splitlines() == [
        "P21802\thsa:2263,hsa:2263b",
        "P12345\tocu:100009301",
    ]
    mock_mapping.assert_called_once_with(["P21802", "P12345"], "KEGG")


def test_map_requires_ids():
    result = CliRunner().invoke(main, ["map", "--to", "KEGG"])
    assert result.exit_code != 0


def test_map_reports_timeout():
    """Test library errors become a clean command failure."""
    with patch.object(
        UniProtClient, "get_mapping", side_effect=JobTimeoutError("Waited 300s")
    ):
        result = CliRunner().invoke(main, ["map", "P12345", "--to", "KEGG"])

    assert result.exit_code == 1
    assert "Waited 300s" in result.output


def test_is_trembl():
    runner = CliRunner()
    with patch.object(UniProtClient, "is_trembl_id", return_value=True):
        result = runner.invoke(main, ["is-trembl", "A0A024QZQ1"])

    assert result.exit_code == 0
    assert result.output.strip() == "true"


def test_is_trembl_server_unavailable():
    with patch.object(
        UniProtClient,
        "is_trembl_id",
        side_effect=ServiceUnavailableError("Unable to connect", status_code=503),
    ):
        result = CliRunner().invoke(main, ["is-trembl", "A0A024QZQ1"])

    assert result.exit_code == 1
    assert "Unable to connect" in result.output


def test_trembl_ids(tmp_path):
    output = tmp_path / "trembl.txt"
    with patch.object(
        UniProtClient, "write_trembl_ids_to_file", return_value=1500
    ) as mock_write:
        result = CliRunner().invoke(
            main, ["--base-url", "https://example.org", "trembl-ids", str(output)]
        )

    assert result.exit_code == 0
    assert "Wrote 1500 TrEMBL ids" in result.output
    mock_write.assert_called_once_with(output, batch_size=500)
