"""Configuration for the UniProt REST API client."""

# UniProt REST base URL
UNIPROT_REST_URL = "https://rest.uniprot.org"

# ID mapping source namespace for UniProtKB accessions
SOURCE_DATABASE = "UniProtKB_AC-ID"

# Page size for the TrEMBL accession listing
TREMBL_ID_BATCH_SIZE = 500

# Job polling: check every 10 seconds, give up after 5 minutes of waiting
POLL_INTERVAL = 10  # seconds
MAX_WAIT_TIME = 5 * 60  # seconds

# Marker the status endpoint returns once a mapping job has completed
JOB_FINISHED_MARKER = '{"jobStatus":"FINISHED"}'

# Request timeout
REQUEST_TIMEOUT = 30  # seconds

USER_AGENT = "UniProt-Query-Client/0.1.0 (Research)"
