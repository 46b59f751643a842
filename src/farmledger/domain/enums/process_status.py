from enum import Enum


class ProcessStatus(str, Enum):
    """Outcome of processing one raw log in an ingestion pipeline."""

    SAVED = "SAVED"
    DUPLICATE = "DUPLICATE"
    SKIPPED = "SKIPPED"
    FAILED = "FAILED"
