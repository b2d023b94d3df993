"""Tests for Validation Service"""
import pytest

from src.common.exceptions import InputShapeError
from src.validation.engine import ValidationEngine
from src.validation.service import ValidationReport, ValidationService


@pytest.fixture
def validation_service():
    """Create validation service instance"""
    return ValidationService(ValidationEngine())


class TestValidationService:
    """Test suite for ValidationService"""

    def test_service_initialization(self):
        """Test service creates a default engine when none is given"""
        service = ValidationService()
        assert isinstance(service.engine, ValidationEngine)

    def test_report_summary(self, validation_service, survey_records, survey_rules):
        """Test report counts and validation rate"""
        report = validation_service.validate_submissions(survey_records, survey_rules)

        assert isinstance(report, ValidationReport)
        assert report.summary.total == 3
        assert report.summary.valid == 1
        assert report.summary.invalid == 2
        assert report.validation_rate == 33.3
        assert len(report.records) == 3

    def test_issue_breakdowns(self, validation_service, survey_records, survey_rules):
        """Test issue counts by message and by kind"""
        report = validation_service.validate_submissions(survey_records, survey_rules)

        assert report.issue_breakdown == {
            "Missing required field: respondent_name": 1,
            "Invalid number format in field: household_size": 1,
            "Invalid date format in field: interview_date": 1,
        }
        assert report.issue_type_breakdown == {
            "Missing required field": 1,
            "Invalid number format in field": 1,
            "Invalid date format in field": 1,
        }

    def test_recommendations_for_failures(self, validation_service, survey_records, survey_rules):
        """Test that recommendations name the problems found"""
        report = validation_service.validate_submissions(survey_records, survey_rules)

        text = " ".join(report.recommendations)
        assert "Critical" in text
        assert "Most common issue" in text
        assert "Required fields were left blank" in text
        assert "Non-numeric answers" in text
        assert "Unparseable dates" in text

    def test_recommendations_for_clean_batch(self, validation_service):
        """Test the all-clear recommendation"""
        report = validation_service.validate_submissions(
            [{"region": "Nairobi"}],
            {"requiredFields": ["region"]}
        )
        assert report.validation_rate == 100.0
        assert report.issue_breakdown == {}
        assert any("All submissions passed" in r for r in report.recommendations)

    def test_empty_batch(self, validation_service):
        """Test report for an empty batch"""
        report = validation_service.validate_submissions([], None)
        assert report.summary.total == 0
        assert report.validation_rate == 0.0
        assert report.recommendations == ["No submissions were provided for validation."]

    def test_bad_input_propagates(self, validation_service):
        """Test that shape errors reach the caller"""
        with pytest.raises(InputShapeError):
            validation_service.validate_submissions({"not": "a list"}, None)

    def test_report_serialization(self, validation_service, survey_records, survey_rules):
        """Test camelCase keys in the serialized report"""
        dumped = validation_service.validate_submissions(
            survey_records, survey_rules
        ).model_dump(by_alias=True)

        assert "validationRate" in dumped
        assert "issueBreakdown" in dumped
        assert "generatedAt" in dumped
        assert dumped["records"][0]["verdict"]["isValid"] is True
