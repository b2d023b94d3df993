"""Submission ingestion module for offline exports."""

from .base_parser import BaseParser, ParsedSubmissions
from .csv_parser import CSVParser
from .json_parser import JSONParser
from .service import SubmissionLoader, filter_since, submission_date
from .exceptions import (
    ParseError,
    EmptyFileError,
    MalformedCSVError,
    MalformedJSONError,
    UnsupportedFileTypeError,
)

__all__ = [
    'BaseParser',
    'ParsedSubmissions',
    'CSVParser',
    'JSONParser',
    'SubmissionLoader',
    'filter_since',
    'submission_date',
    'ParseError',
    'EmptyFileError',
    'MalformedCSVError',
    'MalformedJSONError',
    'UnsupportedFileTypeError',
]
