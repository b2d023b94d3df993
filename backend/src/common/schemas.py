"""Pydantic schemas for API requests and responses"""
from typing import Any, Dict, List, Optional

from pydantic import Field

from src.aggregation.engine import DashboardSummary
from src.common.models import CamelModel
from src.validation.engine import AnnotatedRecord, ValidationSummary


# Request Schemas

class ValidateDataRequest(CamelModel):
    """Request body for submission validation"""
    submissions: List[Any]
    validation_rules: Optional[Dict[str, Any]] = None


class DashboardRequest(CamelModel):
    """Request body for dashboard generation"""
    raw_data: List[Any]
    objectives: List[Any] = Field(default_factory=list)


# Response Schemas

class ValidateDataResponse(CamelModel):
    """Validation response schema"""
    success: bool = True
    data: List[AnnotatedRecord] = Field(default_factory=list)
    summary: ValidationSummary


class DashboardResponse(CamelModel):
    """Dashboard response schema"""
    success: bool = True
    data: DashboardSummary


class ErrorResponse(CamelModel):
    """Error body returned with 4xx/5xx responses"""
    detail: str
