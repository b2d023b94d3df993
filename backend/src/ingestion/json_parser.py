"""JSON export parser"""
import json
import logging
from pathlib import Path

from src.ingestion.base_parser import BaseParser, ParsedSubmissions
from src.ingestion.exceptions import EmptyFileError, MalformedJSONError, ParseError

logger = logging.getLogger(__name__)


class JSONParser(BaseParser):
    """Parser for JSON submission exports

    Accepts either a plain list of submissions or an OData envelope
    (``{"value": [...]}``) as returned by ODK Central.
    """

    def parse(self, file_path: str) -> ParsedSubmissions:
        """Parse JSON file into submission records"""
        logger.info(f"Parsing JSON file: {file_path}")

        if Path(file_path).stat().st_size == 0:
            raise EmptyFileError("JSON file is empty")

        try:
            with open(file_path, 'r', encoding='utf-8') as f:
                payload = json.load(f)
        except json.JSONDecodeError as e:
            raise ParseError(f"Failed to parse JSON: {str(e)}")
        except (OSError, UnicodeDecodeError) as e:
            raise ParseError(f"Failed to read file: {str(e)}")

        envelope = isinstance(payload, dict)
        if envelope:
            if "value" not in payload:
                raise MalformedJSONError("JSON object export must carry submissions under 'value'")
            payload = payload["value"]

        if not isinstance(payload, list):
            raise MalformedJSONError(
                f"Expected a list of submissions, got {type(payload).__name__}"
            )

        for position, record in enumerate(payload):
            if not isinstance(record, dict):
                raise MalformedJSONError(
                    f"Submission at position {position} is not an object"
                )

        metadata = {
            "filename": Path(file_path).name,
            "format": "json",
            "envelope": envelope,
            "rows": len(payload),
        }

        logger.info(f"Successfully parsed {metadata['rows']} submissions")

        return ParsedSubmissions(records=payload, metadata=metadata)
