"""Tathmini - Submission Validation Module"""

from .engine import (
    ValidationEngine,
    RuleSet,
    Verdict,
    AnnotatedRecord,
    ValidationSummary,
    is_number,
    is_date,
)
from .service import ValidationService, ValidationReport

__all__ = [
    "ValidationEngine",
    "RuleSet",
    "Verdict",
    "AnnotatedRecord",
    "ValidationSummary",
    "is_number",
    "is_date",
    "ValidationService",
    "ValidationReport"
]
