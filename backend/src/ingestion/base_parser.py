"""Base parser interface"""
from abc import ABC, abstractmethod
from typing import Any, Dict, List


class ParsedSubmissions:
    """Container for parsed submission records with metadata"""
    def __init__(self, records: List[Dict[str, Any]], metadata: Dict[str, Any]):
        self.records = records
        self.metadata = metadata


class BaseParser(ABC):
    """Abstract base class for submission export parsers"""

    @abstractmethod
    def parse(self, file_path: str) -> ParsedSubmissions:
        """Parse file and return submission records with metadata"""
        pass
