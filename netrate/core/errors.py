from __future__ import annotations

from typing import Any, Dict, Optional

from pydantic import BaseModel, ValidationError


class ErrorDetail(BaseModel):
    code: str
    message: str
    details: Optional[Dict[str, Any]] = None


class AppError(Exception):
    def __init__(
        self,
        code: str,
        message: str,
        status_code: int = 400,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.status_code = status_code
        self.details = details


class NotFoundError(AppError):
    def __init__(self, message: str = "Resource not found") -> None:
        super().__init__(code="not_found", message=message, status_code=404)


class BadRequestError(AppError):
    def __init__(self, message: str = "Bad request", details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(code="bad_request", message=message, status_code=400, details=details)


class ErrorEnvelope(BaseModel):
    error: ErrorDetail


def app_error_envelope(exc: AppError) -> ErrorEnvelope:
    return ErrorEnvelope(error=ErrorDetail(code=exc.code, message=exc.message, details=exc.details))


def validation_error_envelope(exc: ValidationError) -> ErrorEnvelope:
    return ErrorEnvelope(
        error=ErrorDetail(
            code="validation_error",
            message="Validation error",
            details={"errors": exc.errors(include_url=False, include_context=False)},
        )
    )
