"""Dependency injection utilities."""
from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.core.exceptions import ForbiddenException, RateLimitExceededException, UnauthorizedException
from app.core.rate_limit import FixedWindowRateLimiter, get_rate_limiter
from app.core.security import decode_access_token
from app.database import get_db
from app.models.user import User
from app.services.script_planner import generate_script
from app.services.script_workflow import ScriptGenerator
from app.services.tts_engine import TTSEngine, create_tts_engine

# auto_error=False: a missing token is a 401 from get_current_user, not FastAPI's 403
security = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> User:
    """Get current authenticated user.

    Args:
        credentials: HTTP authorization credentials (None if header missing)
        db: Database session

    Returns:
        User: Current user

    Raises:
        UnauthorizedException: If the token is missing, invalid or stale
    """
    if credentials is None:
        raise UnauthorizedException("Not authenticated")

    payload = decode_access_token(credentials.credentials)
    user_id = payload.get("sub") if payload else None
    if user_id is None:
        raise UnauthorizedException("Invalid or expired token")

    result = await db.execute(select(User).where(User.id == user_id))
    user = result.scalar_one_or_none()

    if user is None:
        raise UnauthorizedException("Invalid or expired token")

    return user


async def get_current_active_user(
    current_user: Annotated[User, Depends(get_current_user)],
) -> User:
    """Get current active user.

    Raises:
        ForbiddenException: If user is inactive
    """
    if not current_user.is_active:
        raise ForbiddenException("User account is disabled")
    return current_user


def get_script_generator() -> ScriptGenerator:
    """Planner used by the script workflow."""
    return generate_script


def get_tts_engine() -> TTSEngine:
    """Engine used to voice scripts."""
    return create_tts_engine()


def enforce_script_rate_limit(limiter: FixedWindowRateLimiter, user_id: str) -> None:
    """Reject a generation request over the per-user window.

    Called after the payload is validated and before any state is created.
    """
    result = limiter.check(
        f"scripts:{user_id}",
        settings.script_rate_limit,
        settings.script_rate_window_seconds,
    )
    if not result.allowed:
        raise RateLimitExceededException(retry_after=result.retry_after)


# Type aliases for dependency injection
CurrentUserDep = Annotated[User, Depends(get_current_active_user)]
DbDep = Annotated[AsyncSession, Depends(get_db)]
ScriptGeneratorDep = Annotated[ScriptGenerator, Depends(get_script_generator)]
TTSEngineDep = Annotated[TTSEngine, Depends(get_tts_engine)]
RateLimiterDep = Annotated[FixedWindowRateLimiter, Depends(get_rate_limiter)]
