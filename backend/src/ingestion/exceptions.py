"""Custom exceptions for submission ingestion"""


class ParseError(Exception):
    """Base exception for parsing errors"""
    pass


class EmptyFileError(ParseError):
    """Raised when file is empty"""
    pass


class MalformedCSVError(ParseError):
    """Raised when CSV has inconsistent columns"""
    pass


class MalformedJSONError(ParseError):
    """Raised when a JSON export is not a list of submissions"""
    pass


class UnsupportedFileTypeError(ParseError):
    """Raised when file type is not supported"""
    pass
