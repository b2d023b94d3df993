"""Tests for submission ingestion"""
import json
import tempfile
from datetime import datetime, timezone
from pathlib import Path

import pytest

from src.ingestion.csv_parser import CSVParser
from src.ingestion.exceptions import (
    EmptyFileError,
    MalformedJSONError,
    ParseError,
    UnsupportedFileTypeError,
)
from src.ingestion.json_parser import JSONParser
from src.ingestion.service import SubmissionLoader, filter_since, submission_date


def write_temp(content: str, suffix: str) -> str:
    """Write content to a temporary file and return its path"""
    with tempfile.NamedTemporaryFile(mode='w', suffix=suffix, delete=False) as tmp:
        tmp.write(content)
        return tmp.name


@pytest.fixture
def loader():
    """Create submission loader"""
    return SubmissionLoader()


class TestJSONParser:
    """Test suite for JSONParser"""

    def test_envelope(self, sample_json_envelope):
        """Test parsing an OData envelope"""
        result = JSONParser().parse(sample_json_envelope)
        assert len(result.records) == 2
        assert result.metadata["envelope"] is True
        assert result.records[0]["region"] == "Nairobi"

    def test_plain_list(self):
        """Test parsing a plain list of submissions"""
        path = write_temp(json.dumps([{"region": "A"}, {"region": "B"}]), ".json")
        try:
            result = JSONParser().parse(path)
            assert [r["region"] for r in result.records] == ["A", "B"]
            assert result.metadata["envelope"] is False
        finally:
            Path(path).unlink(missing_ok=True)

    @pytest.mark.parametrize("content", ['{"data": []}', '"text"', '[1, 2]', '{"value": {"a": 1}}'])
    def test_malformed_payload(self, content):
        """Test payloads that are not lists of submissions"""
        path = write_temp(content, ".json")
        try:
            with pytest.raises(MalformedJSONError):
                JSONParser().parse(path)
        finally:
            Path(path).unlink(missing_ok=True)

    def test_invalid_json(self):
        """Test broken JSON raises ParseError"""
        path = write_temp("[{broken", ".json")
        try:
            with pytest.raises(ParseError):
                JSONParser().parse(path)
        finally:
            Path(path).unlink(missing_ok=True)

    def test_empty_file(self):
        """Test empty file raises EmptyFileError"""
        path = write_temp("", ".json")
        try:
            with pytest.raises(EmptyFileError):
                JSONParser().parse(path)
        finally:
            Path(path).unlink(missing_ok=True)


class TestSubmissionLoader:
    """Test suite for SubmissionLoader"""

    def test_get_parser_csv(self, loader):
        """Test CSV parser selection"""
        assert isinstance(loader.get_parser("csv"), CSVParser)
        assert isinstance(loader.get_parser("CSV"), CSVParser)

    def test_get_parser_json(self, loader):
        """Test JSON parser selection"""
        assert isinstance(loader.get_parser("json"), JSONParser)

    def test_unsupported_type(self, loader):
        """Test unsupported file types"""
        with pytest.raises(UnsupportedFileTypeError):
            loader.get_parser("xlsx")

    def test_load_csv(self, loader, sample_csv_comma):
        """Test loading a CSV export"""
        records = loader.load(sample_csv_comma)
        assert len(records) == 2
        assert records[1]["household_size"] is None

    def test_load_semicolon_csv(self, loader, sample_csv_semicolon):
        """Test loading a semicolon separated export"""
        parsed = loader.load_with_metadata(sample_csv_semicolon)
        assert parsed.metadata["delimiter"] == ";"
        assert parsed.records[0]["region"] == "Nairobi"

    def test_load_json(self, loader, sample_json_envelope):
        """Test loading a JSON export"""
        records = loader.load(sample_json_envelope)
        assert [r["status"] for r in records] == ["complete", "incomplete"]


class TestIncrementalFilter:
    """Test suite for lastSync filtering"""

    def test_no_cursor_keeps_everything(self, loader, sample_json_envelope):
        """Test that a missing cursor keeps all submissions"""
        records = loader.load(sample_json_envelope)
        assert filter_since(records, None) == records

    def test_nested_system_date(self, loader, sample_json_envelope):
        """Test filtering on __system.submissionDate"""
        records = loader.load(sample_json_envelope)
        kept = filter_since(records, "2024-03-02T00:00:00Z")
        assert [r["region"] for r in kept] == ["Kisumu"]

    def test_cursor_is_exclusive(self, loader, sample_json_envelope):
        """Test that submissions exactly at the cursor are dropped"""
        records = loader.load(sample_json_envelope)
        kept = filter_since(records, "2024-03-05T09:00:00+00:00")
        assert kept == []

    def test_flat_csv_column(self):
        """Test filtering on the flattened CSV column"""
        records = [
            {"__system/submissionDate": "2024-03-01T09:00:00Z", "id": 1},
            {"__system/submissionDate": "2024-03-03T09:00:00Z", "id": 2},
        ]
        cursor = datetime(2024, 3, 2, tzinfo=timezone.utc)
        assert [r["id"] for r in filter_since(records, cursor)] == [2]

    def test_records_without_date_kept(self):
        """Test that undated submissions are not dropped"""
        records = [{"id": 1}, {"id": 2, "__system": {"submissionDate": "garbage"}}]
        assert filter_since(records, "2024-03-02") == records

    def test_naive_timestamps_are_utc(self):
        """Test that naive timestamps compare as UTC"""
        record = {"__system": {"submissionDate": "2024-03-01T09:00:00"}}
        assert submission_date(record) == datetime(2024, 3, 1, 9, tzinfo=timezone.utc)

    def test_invalid_cursor(self):
        """Test that an unreadable cursor is rejected"""
        with pytest.raises(ValueError):
            filter_since([], "last tuesday")
