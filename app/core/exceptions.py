"""Custom exceptions for the application."""
from typing import Any

from fastapi import HTTPException, status


class AppException(HTTPException):
    """Base exception for application errors."""

    def __init__(
        self,
        status_code: int,
        detail: str,
        error_code: str | None = None,
        headers: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(status_code=status_code, detail=detail, headers=headers)
        self.error_code = error_code


class NotFoundException(AppException):
    """Resource not found exception."""

    def __init__(self, detail: str = "Resource not found") -> None:
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=detail,
            error_code="NOT_FOUND",
        )


class BadRequestException(AppException):
    """Bad request exception."""

    def __init__(self, detail: str = "Bad request") -> None:
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=detail,
            error_code="BAD_REQUEST",
        )


class UnauthorizedException(AppException):
    """Unauthorized exception."""

    def __init__(self, detail: str = "Unauthorized") -> None:
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            error_code="UNAUTHORIZED",
            headers={"WWW-Authenticate": "Bearer"},
        )


class ForbiddenException(AppException):
    """Forbidden exception."""

    def __init__(self, detail: str = "Forbidden") -> None:
        super().__init__(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=detail,
            error_code="FORBIDDEN",
        )


class ConflictException(AppException):
    """Conflicting resource state exception."""

    def __init__(self, detail: str = "Conflict") -> None:
        super().__init__(
            status_code=status.HTTP_409_CONFLICT,
            detail=detail,
            error_code="CONFLICT",
        )


class ValidationException(AppException):
    """Validation exception."""

    def __init__(self, detail: str = "Validation error") -> None:
        super().__init__(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=detail,
            error_code="VALIDATION_ERROR",
        )


class RateLimitExceededException(AppException):
    """Too many requests exception."""

    def __init__(
        self,
        detail: str = "Too many requests. Please wait a moment before trying again.",
        retry_after: float | None = None,
    ) -> None:
        headers = None
        if retry_after is not None:
            # Retry-After is whole seconds, never zero for a rejected request
            headers = {"Retry-After": str(max(1, int(retry_after + 0.999)))}
        super().__init__(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail=detail,
            error_code="RATE_LIMITED",
            headers=headers,
        )
        self.retry_after = retry_after


class TTSError(Exception):
    """TTS processing error."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class LLMError(Exception):
    """LLM processing error."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ScriptGenerationError(LLMError):
    """A generation attempt failed and was recorded on the script."""

    def __init__(self, message: str, script_id: str) -> None:
        super().__init__(message)
        self.script_id = script_id


class ScriptStateError(Exception):
    """Requested lifecycle change is not allowed from the script's status."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)
