"""Core module.

Dependencies live in app.core.deps, which imports the services layer.
"""
from app.core.exceptions import (
    AppException,
    BadRequestException,
    ConflictException,
    ForbiddenException,
    LLMError,
    NotFoundException,
    RateLimitExceededException,
    ScriptGenerationError,
    ScriptStateError,
    TTSError,
    UnauthorizedException,
    ValidationException,
)
from app.core.security import (
    create_access_token,
    decode_access_token,
    get_password_hash,
    verify_password,
)

__all__ = [
    "AppException",
    "NotFoundException",
    "BadRequestException",
    "UnauthorizedException",
    "ForbiddenException",
    "ConflictException",
    "ValidationException",
    "RateLimitExceededException",
    "TTSError",
    "LLMError",
    "ScriptGenerationError",
    "ScriptStateError",
    "create_access_token",
    "decode_access_token",
    "get_password_hash",
    "verify_password",
]
