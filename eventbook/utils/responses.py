"""
Standardized response utilities
"""

from typing import Any, Optional
from fastapi import status
from fastapi.responses import JSONResponse

from eventbook.core.errors import (
    DomainError,
    EventReferenceCheckFailedError,
    EventReferenceNotFoundError,
    MediaUploadError,
    ValidationError,
)
from eventbook.schemas.common import StandardResponse, ErrorResponse

def success_response(
    message: str,
    data: Any = None,
    status_code: int = 200
) -> JSONResponse:
    """Create standardized success response"""
    response = StandardResponse(
        success=True,
        message=message,
        data=data
    )
    return JSONResponse(
        content=response.model_dump(mode="json"),
        status_code=status_code
    )

def error_response(
    message: str,
    error_code: Optional[str] = None,
    details: Any = None,
    status_code: int = 400
) -> JSONResponse:
    """Create standardized error response"""
    response = ErrorResponse(
        message=message,
        error_code=error_code,
        details=details
    )
    return JSONResponse(
        content=response.model_dump(mode="json"),
        status_code=status_code
    )

def domain_error_status(error: DomainError) -> int:
    """HTTP status for a domain error kind"""
    if isinstance(error, ValidationError):
        return status.HTTP_400_BAD_REQUEST
    if isinstance(error, EventReferenceNotFoundError):
        return status.HTTP_404_NOT_FOUND
    if isinstance(error, EventReferenceCheckFailedError):
        return status.HTTP_503_SERVICE_UNAVAILABLE
    if isinstance(error, MediaUploadError):
        return status.HTTP_502_BAD_GATEWAY
    return status.HTTP_500_INTERNAL_SERVER_ERROR

def domain_error_response(error: DomainError) -> JSONResponse:
    """Translate a domain error into an error response carrying its code"""
    return error_response(
        message=error.message,
        error_code=error.code.value,
        details=error.details(),
        status_code=domain_error_status(error)
    )
