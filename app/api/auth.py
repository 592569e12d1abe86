"""Authentication API routes."""
import logging
from datetime import timedelta

from fastapi import APIRouter, status
from sqlalchemy import select

from app.config import settings
from app.core.deps import CurrentUserDep, DbDep
from app.core.exceptions import ConflictException, UnauthorizedException
from app.core.security import create_access_token, get_password_hash, verify_password
from app.models.user import User as UserModel
from app.schemas.common import ApiResponse
from app.schemas.user import Token, User, UserCreate, UserLogin

logger = logging.getLogger(__name__)
router = APIRouter()


def _issue_token(user: UserModel) -> Token:
    access_token = create_access_token(
        subject=user.id,
        expires_delta=timedelta(minutes=settings.jwt_access_token_expire_minutes),
    )
    return Token(access_token=access_token, user=User.model_validate(user))


@router.post("/register", response_model=ApiResponse[Token], status_code=status.HTTP_201_CREATED)
async def register(user_data: UserCreate, db: DbDep):
    """Register a new user."""
    email = user_data.email.lower()

    result = await db.execute(select(UserModel).where(UserModel.email == email))
    if result.scalar_one_or_none():
        raise ConflictException("Account already exists")

    user = UserModel(
        email=email,
        name=user_data.name or "",
        password_hash=get_password_hash(user_data.password),
    )
    db.add(user)
    await db.commit()
    await db.refresh(user)

    logger.info(f"Registered user {user.id}")
    return ApiResponse(data=_issue_token(user))


@router.post("/login", response_model=ApiResponse[Token])
async def login(credentials: UserLogin, db: DbDep):
    """Login user."""
    result = await db.execute(
        select(UserModel).where(UserModel.email == credentials.email.lower())
    )
    user = result.scalar_one_or_none()

    if not user or not verify_password(credentials.password, user.password_hash):
        raise UnauthorizedException("Invalid email or password")

    if not user.is_active:
        raise UnauthorizedException("User account is disabled")

    return ApiResponse(data=_issue_token(user))


@router.get("/me", response_model=ApiResponse[User])
async def get_current_user_info(current_user: CurrentUserDep):
    """Get current user information."""
    return ApiResponse(data=User.model_validate(current_user))
