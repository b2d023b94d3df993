"""Submission loading service for offline exports"""
import logging
from collections.abc import Mapping
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from src.ingestion.base_parser import BaseParser, ParsedSubmissions
from src.ingestion.csv_parser import CSVParser
from src.ingestion.exceptions import UnsupportedFileTypeError
from src.ingestion.json_parser import JSONParser

logger = logging.getLogger(__name__)

SYSTEM_FIELD = "__system"
SUBMISSION_DATE_FIELD = "submissionDate"


class SubmissionLoader:
    """Loads submission exports into an in-memory batch"""

    def load(self, file_path: str) -> List[Dict[str, Any]]:
        """
        Load submission records from an export file

        Args:
            file_path: Path to a .csv or .json export

        Returns:
            Submission records in file order
        """
        return self.load_with_metadata(file_path).records

    def load_with_metadata(self, file_path: str) -> ParsedSubmissions:
        """Load submission records together with parser metadata"""
        file_type = Path(file_path).suffix.lstrip(".")
        logger.info(f"Loading submissions: {file_path} (type: {file_type})")

        parser = self.get_parser(file_type)
        parsed = parser.parse(file_path)

        logger.info(f"Loaded {len(parsed.records)} submissions from {Path(file_path).name}")
        return parsed

    def get_parser(self, file_type: str) -> BaseParser:
        """Factory method to get appropriate parser"""
        file_type = file_type.lower()

        parsers = {
            "csv": CSVParser,
            "json": JSONParser,
        }

        parser_class = parsers.get(file_type)
        if not parser_class:
            raise UnsupportedFileTypeError(
                f"File type '{file_type}' is not supported. "
                f"Supported types: {', '.join(parsers.keys())}"
            )

        return parser_class()


def parse_timestamp(value: Any) -> Optional[datetime]:
    """Parse an ISO 8601 timestamp, naive values are taken as UTC"""
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str):
        try:
            parsed = datetime.fromisoformat(value)
        except ValueError:
            return None
    else:
        return None

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def submission_date(record: Mapping) -> Optional[datetime]:
    """
    Submission timestamp of a record

    Reads ``__system.submissionDate`` from JSON exports and the flattened
    ``__system/submissionDate`` column from CSV exports.
    """
    system = record.get(SYSTEM_FIELD)
    if isinstance(system, Mapping) and SUBMISSION_DATE_FIELD in system:
        return parse_timestamp(system[SUBMISSION_DATE_FIELD])
    return parse_timestamp(record.get(f"{SYSTEM_FIELD}/{SUBMISSION_DATE_FIELD}"))


def filter_since(
    records: List[Mapping],
    last_sync: Union[str, datetime, None]
) -> List[Mapping]:
    """
    Keep submissions received after the last sync

    Args:
        records: Submission records
        last_sync: Cursor from the previous sync, None keeps everything

    Returns:
        Records submitted strictly after last_sync, in input order. Records
        without a readable submission date are kept.

    Raises:
        ValueError: If last_sync is not a valid timestamp
    """
    if last_sync is None:
        return list(records)

    cursor = parse_timestamp(last_sync)
    if cursor is None:
        raise ValueError(f"Invalid lastSync timestamp: {last_sync!r}")

    kept = []
    for record in records:
        submitted = submission_date(record)
        if submitted is None or submitted > cursor:
            kept.append(record)

    logger.info(f"Incremental filter kept {len(kept)} of {len(records)} submissions since {cursor.isoformat()}")
    return kept
