"""Pydantic schemas."""
from app.schemas.common import ApiResponse, ErrorDetail, PaginatedResponse
from app.schemas.project import Project, ProjectCreate, ProjectUpdate
from app.schemas.script import (
    EstimatePreviewRequest,
    PacingEstimateResponse,
    Script,
    ScriptBrief,
    ScriptCreate,
    ScriptUpdate,
)
from app.schemas.user import Token, User, UserCreate, UserLogin
from app.schemas.voice import ScriptVoiceRequest, Voice, VoiceTrack

__all__ = [
    "ApiResponse",
    "ErrorDetail",
    "PaginatedResponse",
    "User",
    "UserCreate",
    "UserLogin",
    "Token",
    "Project",
    "ProjectCreate",
    "ProjectUpdate",
    "Script",
    "ScriptBrief",
    "ScriptCreate",
    "ScriptUpdate",
    "PacingEstimateResponse",
    "EstimatePreviewRequest",
    "Voice",
    "ScriptVoiceRequest",
    "VoiceTrack",
]
