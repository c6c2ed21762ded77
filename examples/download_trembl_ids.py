#!/usr/bin/env python3
"""
Example: Download every TrEMBL accession to a text file.

The listing holds hundreds of millions of accessions; interrupt it at any
point and the file keeps the pages written so far.

Usage:
    python download_trembl_ids.py trembl_ids.txt
"""

import logging
import sys
from uniprot_query.client import UniProtClient

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(levelname)s - %(message)s"
)


def progress_callback(pages, written):
    print(f"\r{pages:,} pages, {written:,} accessions written", end="", flush=True)


def main():
    output = sys.argv[1] if len(sys.argv) > 1 else "trembl_ids.txt"

    with UniProtClient() as client:
        written = client.write_trembl_ids_to_file(output, progress_callback=progress_callback)

    print(f"\n\nDone: {written:,} TrEMBL accessions in {output}")


if __name__ == "__main__":
    main()
