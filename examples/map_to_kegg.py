#!/usr/bin/env python3
"""
Example: Map UniProt accessions to KEGG gene identifiers.

Submits an ID mapping job, waits for UniProt to finish it and prints the
KEGG ids found for each accession.

Usage:
    python map_to_kegg.py
"""

import logging
from uniprot_query.client import UniProtClient

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(levelname)s - %(message)s"
)


def main():
    accessions = ["P21802", "P12345", "P04637"]

    with UniProtClient() as client:
        print(f"Mapping {len(accessions)} accessions to KEGG...")
        mapping = client.get_mapping(accessions, "KEGG")

        for accession in accessions:
            targets = mapping.get(accession, [])
            print(f"  {accession}: {', '.join(targets) or '(no mapping)'}")

        print("\nChecking which accessions are unreviewed (TrEMBL):")
        for accession in accessions + ["A0A024QZQ1"]:
            print(f"  {accession}: {client.is_trembl_id(accession)}")


if __name__ == "__main__":
    main()
