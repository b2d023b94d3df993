"""Validation Engine for survey submission quality control"""
import logging
import math
import re
from collections.abc import Mapping
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional, Tuple, Union

from pydantic import Field, ValidationError, field_validator

from src.common.exceptions import InputShapeError
from src.common.models import CamelModel
from src.common.records import Record, ensure_record_batch, is_missing

logger = logging.getLogger(__name__)

NUMBER_PATTERN = re.compile(r"[+-]?([0-9]+(\.[0-9]*)?|\.[0-9]+)([eE][+-]?[0-9]+)?")

MISSING_FIELD_MESSAGE = "Missing required field: {field}"
INVALID_NUMBER_MESSAGE = "Invalid number format in field: {field}"
INVALID_DATE_MESSAGE = "Invalid date format in field: {field}"


class RuleSet(CamelModel):
    """Schema for a declarative validation rule set"""
    required_fields: Optional[List[str]] = None
    data_types: Optional[Dict[str, str]] = None

    @field_validator("required_fields", mode="before")
    @classmethod
    def validate_required_fields(cls, v: Any) -> Any:
        """Accept any non-string sequence of names, keep first occurrences"""
        if v is None:
            return v
        if isinstance(v, (str, bytes, Mapping)) or not isinstance(v, (list, tuple, set, frozenset)):
            raise ValueError("requiredFields must be a list of field names")
        if not all(isinstance(field, str) for field in v):
            raise ValueError("requiredFields must only contain strings")
        if isinstance(v, (set, frozenset)):
            v = sorted(v)
        return list(dict.fromkeys(v))


class Verdict(CamelModel):
    """Pass/fail outcome for a single record"""
    is_valid: bool
    issues: List[str] = Field(default_factory=list)


class AnnotatedRecord(CamelModel):
    """A record paired with its verdict"""
    record: Record
    verdict: Verdict


class ValidationSummary(CamelModel):
    """Verdict counts over a batch"""
    total: int = 0
    valid: int = 0
    invalid: int = 0


def is_number(value: Any) -> bool:
    """
    Check whether a value is a numeric literal

    Numbers must be finite ints or floats (booleans are not numbers).
    Strings must match an optional sign, digits with an optional decimal
    point and an optional exponent, with no surrounding whitespace.
    """
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    if isinstance(value, float):
        return math.isfinite(value)
    if isinstance(value, str):
        return NUMBER_PATTERN.fullmatch(value) is not None
    return False


def is_date(value: Any) -> bool:
    """Check whether a value is an ISO 8601 calendar date or timestamp"""
    if not isinstance(value, str):
        return False
    try:
        datetime.fromisoformat(value)
    except ValueError:
        return False
    return True


class ValidationEngine:
    """Engine for validating submission records against a rule set"""

    def __init__(self):
        self.type_checks: Dict[str, Tuple[Callable[[Any], bool], str]] = {
            "number": (is_number, INVALID_NUMBER_MESSAGE),
            "date": (is_date, INVALID_DATE_MESSAGE),
        }

    def register_type(
        self,
        kind: str,
        check: Callable[[Any], bool],
        message: str
    ) -> None:
        """
        Register an additional data type kind

        Args:
            kind: Name used in the dataTypes part of a rule set
            check: Predicate returning True for acceptable values
            message: Issue template, formatted with ``field``
        """
        self.type_checks[kind] = (check, message)

    def supported_types(self) -> List[str]:
        """Data type kinds this engine understands"""
        return list(self.type_checks.keys())

    @staticmethod
    def parse_rules(rules: Union[RuleSet, Mapping, None]) -> RuleSet:
        """
        Coerce caller-supplied rules into a RuleSet

        Raises:
            InputShapeError: If a part of the rules has the wrong shape
        """
        if rules is None:
            return RuleSet()
        if isinstance(rules, RuleSet):
            return rules
        if not isinstance(rules, Mapping):
            raise InputShapeError(
                f"rules must be a mapping, got {type(rules).__name__}"
            )
        try:
            return RuleSet.model_validate(dict(rules), strict=False)
        except ValidationError as e:
            raise InputShapeError(f"Invalid validation rules: {e}") from e

    def validate(
        self,
        records: List[Record],
        rules: Union[RuleSet, Mapping, None] = None
    ) -> Tuple[List[AnnotatedRecord], ValidationSummary]:
        """
        Validate a batch of records

        Args:
            records: Submission records, in the order they should be reported
            rules: Rule set with optional requiredFields and dataTypes parts

        Returns:
            Annotated records in input order and the summary counts

        Raises:
            InputShapeError: If records or rules have the wrong shape
        """
        batch = ensure_record_batch(records)
        rule_set = self.parse_rules(rules)

        logger.info(
            f"Validating {len(batch)} records "
            f"({len(rule_set.required_fields or [])} required fields, "
            f"{len(rule_set.data_types or {})} typed fields)"
        )

        annotated = [self.validate_record(record, rule_set) for record in batch]
        summary = self.summarize(annotated)

        logger.info(f"Validation complete: {summary.valid} valid, {summary.invalid} invalid")
        return annotated, summary

    def validate_record(self, record: Mapping, rules: RuleSet) -> AnnotatedRecord:
        """
        Validate a single record

        Args:
            record: Submission record
            rules: Parsed rule set

        Returns:
            Shallow copy of the record paired with its verdict
        """
        issues: List[str] = []
        issues.extend(self.check_required_fields(record, rules.required_fields))
        issues.extend(self.check_data_types(record, rules.data_types))

        if issues:
            logger.debug(f"Record failed validation: {issues}")

        return AnnotatedRecord(
            record=dict(record),
            verdict=Verdict(is_valid=not issues, issues=issues)
        )

    def check_required_fields(
        self,
        record: Mapping,
        required_fields: Optional[List[str]]
    ) -> List[str]:
        """
        Check for required fields that are absent, null or empty

        Returns:
            One issue per missing field, in rule order
        """
        if not required_fields:
            return []

        return [
            MISSING_FIELD_MESSAGE.format(field=field)
            for field in required_fields
            if is_missing(record.get(field))
        ]

    def check_data_types(
        self,
        record: Mapping,
        data_types: Optional[Dict[str, str]]
    ) -> List[str]:
        """
        Check declared data types of present values

        Missing values are skipped. Kinds the engine does not know are ignored.

        Returns:
            One issue per badly formatted field, in rule order
        """
        if not data_types:
            return []

        issues: List[str] = []
        for field, kind in data_types.items():
            value = record.get(field)
            if value is None:
                continue

            type_check = self.type_checks.get(kind)
            if type_check is None:
                continue

            check, message = type_check
            if not check(value):
                issues.append(message.format(field=field))

        return issues

    @staticmethod
    def summarize(annotated: List[AnnotatedRecord]) -> ValidationSummary:
        """Count valid and invalid verdicts"""
        valid = sum(1 for item in annotated if item.verdict.is_valid)
        return ValidationSummary(
            total=len(annotated),
            valid=valid,
            invalid=len(annotated) - valid
        )
