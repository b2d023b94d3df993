"""API endpoints for submission validation"""
import logging

from fastapi import APIRouter, HTTPException

from src.common.exceptions import InputShapeError
from src.common.schemas import ErrorResponse, ValidateDataRequest, ValidateDataResponse
from src.validation.engine import ValidationEngine
from src.validation.service import ValidationReport, ValidationService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/validation", tags=["validation"])

validation_engine = ValidationEngine()
validation_service = ValidationService(validation_engine)


@router.get("/types")
async def get_supported_types():
    """List data type kinds understood by the validator"""
    return {"types": validation_engine.supported_types()}


@router.post(
    "/validate",
    response_model=ValidateDataResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Malformed submissions or rules"},
        500: {"model": ErrorResponse, "description": "Validation failed"},
    },
)
async def validate_data(request: ValidateDataRequest):
    """
    Validate a batch of submissions against required fields and data types

    Args:
        request: Submissions and validation rules

    Returns:
        Submissions paired with their verdicts, plus summary counts

    Example:
        POST /api/v1/validation/validate
        {
          "submissions": [{"age": "abc", "region": "A"}],
          "validationRules": {"requiredFields": ["region"], "dataTypes": {"age": "number"}}
        }

    Response:
        {
          "success": true,
          "data": [
            {
              "record": {"age": "abc", "region": "A"},
              "verdict": {"isValid": false, "issues": ["Invalid number format in field: age"]}
            }
          ],
          "summary": {"total": 1, "valid": 0, "invalid": 1}
        }
    """
    try:
        annotated, summary = validation_engine.validate(
            request.submissions,
            request.validation_rules
        )
    except InputShapeError as e:
        logger.warning(f"Rejected validation request: {e}")
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.exception(f"Error validating submissions: {e}")
        raise HTTPException(status_code=500, detail=f"Validation error: {str(e)}")

    return ValidateDataResponse(data=annotated, summary=summary)


@router.post(
    "/report",
    response_model=ValidationReport,
    responses={
        400: {"model": ErrorResponse, "description": "Malformed submissions or rules"},
        500: {"model": ErrorResponse, "description": "Report generation failed"},
    },
)
async def validation_report(request: ValidateDataRequest):
    """Validate a batch and return breakdowns and recommendations"""
    try:
        return validation_service.validate_submissions(
            request.submissions,
            request.validation_rules
        )
    except InputShapeError as e:
        logger.warning(f"Rejected validation report request: {e}")
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.exception(f"Error building validation report: {e}")
        raise HTTPException(status_code=500, detail=f"Validation report error: {str(e)}")
