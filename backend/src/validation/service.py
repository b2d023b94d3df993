"""Validation Service for submission data quality reporting"""
import logging
from collections import defaultdict
from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Dict, List, Optional, Tuple, Union

from pydantic import Field

from src.validation.engine import (
    AnnotatedRecord,
    RuleSet,
    ValidationEngine,
    ValidationSummary,
)
from src.common.models import CamelModel
from src.common.records import Record

logger = logging.getLogger(__name__)


class ValidationReport(CamelModel):
    """Validation report for a batch of submissions"""
    summary: ValidationSummary
    records: List[AnnotatedRecord] = Field(default_factory=list)
    validation_rate: float = 0.0  # Percentage of valid records
    issue_breakdown: Dict[str, int] = Field(default_factory=dict)  # issue → count
    issue_type_breakdown: Dict[str, int] = Field(default_factory=dict)  # issue kind → count
    recommendations: List[str] = Field(default_factory=list)
    generated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class ValidationService:
    """Service for validating submission batches and reporting on them"""

    def __init__(self, validation_engine: Optional[ValidationEngine] = None):
        """
        Initialize validation service

        Args:
            validation_engine: Engine to use, a default one is created if omitted
        """
        self.engine = validation_engine or ValidationEngine()

    def validate_submissions(
        self,
        records: List[Record],
        rules: Union[RuleSet, Mapping, None] = None
    ) -> ValidationReport:
        """
        Validate a batch and build a report

        Args:
            records: Submission records
            rules: Rule set with optional requiredFields and dataTypes parts

        Returns:
            ValidationReport with verdicts, breakdowns and recommendations

        Raises:
            InputShapeError: If records or rules have the wrong shape
        """
        annotated, summary = self.engine.validate(records, rules)

        issue_breakdown, issue_type_breakdown = self._generate_breakdowns(annotated)
        validation_rate = (
            round(summary.valid / summary.total * 100, 1)
            if summary.total > 0 else 0.0
        )

        report = ValidationReport(
            summary=summary,
            records=annotated,
            validation_rate=validation_rate,
            issue_breakdown=issue_breakdown,
            issue_type_breakdown=issue_type_breakdown,
        )
        report.recommendations = self._generate_recommendations(report)

        logger.info(
            f"Validation report ready: {summary.total} records, "
            f"{validation_rate}% valid, {len(issue_breakdown)} distinct issues"
        )
        return report

    def _generate_breakdowns(
        self,
        annotated: List[AnnotatedRecord]
    ) -> Tuple[Dict[str, int], Dict[str, int]]:
        """Count issues by message and by kind, in first-seen order"""
        issue_breakdown: Dict[str, int] = defaultdict(int)
        issue_type_breakdown: Dict[str, int] = defaultdict(int)

        for item in annotated:
            for issue in item.verdict.issues:
                issue_breakdown[issue] += 1
                issue_type_breakdown[issue.split(":", 1)[0]] += 1

        return dict(issue_breakdown), dict(issue_type_breakdown)

    def _generate_recommendations(self, report: ValidationReport) -> List[str]:
        """Generate actionable recommendations based on validation results"""
        recommendations = []
        summary = report.summary

        if summary.total == 0:
            return ["No submissions were provided for validation."]

        # High failure rate
        if report.validation_rate < 50:
            recommendations.append(
                "⚠️ Critical: Over 50% of submissions failed validation. "
                "Review the form design and data collection process."
            )

        # Common issue patterns
        if report.issue_breakdown:
            most_common_issue = max(
                report.issue_breakdown.items(),
                key=lambda x: x[1]
            )
            recommendations.append(
                f"🔍 Most common issue: '{most_common_issue[0]}' "
                f"({most_common_issue[1]} occurrences). "
                "Focus on fixing this issue first."
            )

        if "Missing required field" in report.issue_type_breakdown:
            recommendations.append(
                "📝 Required fields were left blank. "
                "Consider marking these questions as required in the form."
            )

        if "Invalid number format in field" in report.issue_type_breakdown:
            recommendations.append(
                "🔢 Non-numeric answers found in numeric fields. "
                "Add numeric constraints to the affected questions."
            )

        if "Invalid date format in field" in report.issue_type_breakdown:
            recommendations.append(
                "📅 Unparseable dates found. "
                "Use date widgets instead of free-text date entry."
            )

        if summary.invalid == 0:
            recommendations.append(
                "✅ Excellent! All submissions passed validation. "
                "Data is ready for analysis."
            )

        return recommendations
