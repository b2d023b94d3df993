"""CSV export parser with auto-detection capabilities"""
import logging
from pathlib import Path

import chardet
import polars as pl

from src.ingestion.base_parser import BaseParser, ParsedSubmissions
from src.ingestion.exceptions import EmptyFileError, MalformedCSVError, ParseError

logger = logging.getLogger(__name__)

NULL_VALUES = ["", "NULL", "null", "NA", "N/A", "n/a"]


class CSVParser(BaseParser):
    """Parser for CSV submission exports"""

    def parse(self, file_path: str) -> ParsedSubmissions:
        """
        Parse CSV file into submission records

        Every column is read as text so answers reach the validator exactly
        as they were typed. Empty cells become nulls.
        """
        logger.info(f"Parsing CSV file: {file_path}")

        if Path(file_path).stat().st_size == 0:
            raise EmptyFileError("CSV file is empty")

        encoding = self.detect_encoding(file_path)
        logger.info(f"Detected encoding: {encoding}")

        # Read sample for delimiter detection
        try:
            with open(file_path, 'r', encoding=encoding) as f:
                sample = ''.join([f.readline() for _ in range(5)])
        except (OSError, UnicodeDecodeError) as e:
            raise ParseError(f"Failed to read file: {str(e)}")

        if not sample.strip():
            raise EmptyFileError("CSV file contains no data")

        delimiter = self.detect_delimiter(sample)
        logger.info(f"Detected delimiter: {repr(delimiter)}")

        try:
            df = pl.read_csv(
                file_path,
                separator=delimiter,
                encoding="utf8" if encoding.lower().replace("-", "") == "utf8" else encoding,
                infer_schema_length=0,
                null_values=NULL_VALUES
            )
        except pl.exceptions.ComputeError as e:
            if "could not parse" in str(e).lower() or "found more fields" in str(e).lower():
                raise MalformedCSVError(f"Inconsistent column count in CSV: {str(e)}")
            raise ParseError(f"Failed to parse CSV: {str(e)}")

        df = self.clean_data(df)

        if df.height == 0:
            raise EmptyFileError("CSV file contains no valid data rows")

        metadata = {
            "filename": Path(file_path).name,
            "format": "csv",
            "encoding": encoding,
            "delimiter": delimiter,
            "rows": df.height,
            "columns": df.width,
            "headers": df.columns,
        }

        logger.info(f"Successfully parsed {metadata['rows']} rows, {metadata['columns']} columns")

        return ParsedSubmissions(records=df.to_dicts(), metadata=metadata)

    def detect_delimiter(self, sample: str) -> str:
        """Detect the most likely delimiter from sample text"""
        delimiters = {
            ',': 0,
            ';': 0,
            '\t': 0,
            '|': 0
        }

        lines = sample.strip().split('\n')
        if not lines:
            return ','

        # Count occurrences in each line
        for line in lines[:5]:
            for delim in delimiters:
                delimiters[delim] += line.count(delim)

        max_delim = max(delimiters, key=delimiters.get)

        # If no delimiter found, default to comma
        if delimiters[max_delim] == 0:
            logger.warning("No delimiter detected, defaulting to comma")
            return ','

        return max_delim

    def detect_encoding(self, file_path: str) -> str:
        """Detect file encoding using chardet"""
        try:
            with open(file_path, 'rb') as f:
                raw_data = f.read(10000)  # Read first 10KB
        except OSError as e:
            logger.warning(f"Encoding detection failed: {e}, defaulting to UTF-8")
            return 'utf-8'

        result = chardet.detect(raw_data)
        encoding = result['encoding']
        confidence = result['confidence']

        if not encoding:
            return 'utf-8'

        logger.info(f"Encoding detection: {encoding} (confidence: {confidence:.2f})")

        # ASCII is a subset of UTF-8, and low confidence guesses are not trusted
        if confidence < 0.7 or encoding.lower() == 'ascii':
            return 'utf-8'

        return encoding

    def clean_data(self, df: pl.DataFrame) -> pl.DataFrame:
        """Drop blank rows and strip whitespace around answers"""
        if df.width == 0:
            return df

        # Strip whitespace, answers left empty become nulls
        for col in df.columns:
            stripped = pl.col(col).str.strip_chars()
            df = df.with_columns(
                pl.when(stripped == "").then(None).otherwise(stripped).alias(col)
            )

        # Remove rows where all values are null
        df = df.filter(~pl.all_horizontal(pl.all().is_null()))

        logger.info(f"Cleaned data: {df.height} rows remaining")
        return df
