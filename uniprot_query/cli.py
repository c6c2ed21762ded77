from pathlib import Path
from typing import Tuple

import click

from .client import UniProtClient
from .config import UNIPROT_REST_URL, REQUEST_TIMEOUT, TREMBL_ID_BATCH_SIZE
from .exceptions import UniProtClientError


@click.group()
@click.option(
    "--base-url",
    envvar="UNIPROT_REST_URL",
    default=UNIPROT_REST_URL,
    show_default=True,
    help="UniProt REST API root (or set UNIPROT_REST_URL).",
)
@click.option(
    "--timeout",
    type=float,
    default=REQUEST_TIMEOUT,
    show_default=True,
    help="Timeout in seconds for each HTTP request.",
)
@click.pass_context
def main(ctx: click.Context, base_url: str, timeout: float) -> None:
    """UniProt ID mapping and TrEMBL query client."""
    client = UniProtClient(base_url=base_url, timeout=timeout)
    ctx.call_on_close(client.close)
    ctx.obj = {"client": client}


@main.command("map")
@click.argument("ids", nargs=-1, required=True)
@click.option(
    "--to",
    "target_database",
    required=True,
    help="Target database to map the accessions into (e.g. KEGG).",
)
@click.pass_context
def map_ids(ctx: click.Context, ids: Tuple[str, ...], target_database: str) -> None:
    """Map UniProt accessions to TARGET database identifiers."""
    client: UniProtClient = ctx.obj["client"]
    try:
        mapping = client.get_mapping(list(ids), target_database)
    except (UniProtClientError, ValueError) as e:
        raise click.ClickException(str(e))

    for source_id, target_ids in mapping.items():
        click.echo(f"{source_id}\t{','.join(target_ids)}")


@main.command("is-trembl")
@click.argument("accession")
@click.pass_context
def is_trembl(ctx: click.Context, accession: str) -> None:
    """Print whether ACCESSION is an unreviewed (TrEMBL) entry."""
    client: UniProtClient = ctx.obj["client"]
    try:
        result = client.is_trembl_id(accession)
    except UniProtClientError as e:
        raise click.ClickException(str(e))

    click.echo("true" if result else "false")


@main.command("trembl-ids")
@click.argument("output", type=click.Path(dir_okay=False, path_type=Path))
@click.option(
    "--batch-size",
    type=int,
    default=TREMBL_ID_BATCH_SIZE,
    show_default=True,
    help="Accessions requested per page.",
)
@click.pass_context
def trembl_ids(ctx: click.Context, output: Path, batch_size: int) -> None:
    """Append every TrEMBL accession to OUTPUT, one per line."""
    client: UniProtClient = ctx.obj["client"]
    try:
        written = client.write_trembl_ids_to_file(output, batch_size=batch_size)
    except UniProtClientError as e:
        raise click.ClickException(str(e))

    click.echo(f"Wrote {written} TrEMBL ids to {output}")


if __name__ == "__main__":
    main()
