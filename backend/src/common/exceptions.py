"""Custom exceptions for the validation and aggregation engines"""


class EngineError(Exception):
    """Base exception for engine errors"""
    pass


class InputShapeError(EngineError):
    """Raised when a batch or rule set does not have the expected shape"""
    pass
