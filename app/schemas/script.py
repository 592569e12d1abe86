"""Script schemas."""
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, model_validator

from app.models.script import ScriptStatus, ScriptTone
from app.schemas.voice import VoiceTrack


class ScriptBrief(BaseModel):
    """Narration brief shared by creation and previews."""

    topic: str = Field(..., min_length=5, max_length=200)
    tone: ScriptTone
    style: str | None = Field(None, max_length=120)
    length_minutes: int = Field(..., ge=1, le=300)
    chapters: int = Field(..., ge=1, le=50)


class ScriptCreate(ScriptBrief):
    """Script creation schema."""

    project_id: str = Field(..., min_length=1)


class ScriptUpdate(BaseModel):
    """Script update schema. At least one field must be supplied."""

    topic: str | None = Field(None, min_length=5, max_length=200)
    tone: ScriptTone | None = None
    style: str | None = Field(None, max_length=120)
    length_minutes: int | None = Field(None, ge=1, le=300)
    chapters: int | None = Field(None, ge=1, le=50)
    content: str | None = Field(None, max_length=30_000)

    @model_validator(mode="after")
    def require_changes(self):
        if not self.changes():
            raise ValueError("No changes provided")
        return self

    def changes(self) -> dict:
        """Fields the client actually supplied, without nulls."""
        return self.model_dump(exclude_unset=True, exclude_none=True)


class Script(BaseModel):
    """Script response schema."""

    id: str
    project_id: str
    owner_id: str
    topic: str
    tone: ScriptTone
    style: str
    length_minutes: int
    chapters: int
    outline: list[str]
    content: str
    target_word_count: int
    actual_word_count: int
    status: ScriptStatus
    error: str
    created_at: datetime
    updated_at: datetime
    voice: VoiceTrack | None = None

    model_config = ConfigDict(from_attributes=True)


class PacingEstimateResponse(BaseModel):
    """Target versus actual word count."""

    words_per_minute: int
    target_word_count: int
    actual_word_count: int
    delta: int
    completion: float
    estimated_minutes: float


class EstimatePreviewRequest(BaseModel):
    """Unsaved brief and draft text to estimate while editing."""

    tone: ScriptTone
    style: str | None = Field(None, max_length=120)
    length_minutes: int = Field(..., ge=1, le=300)
    content: str | None = Field(None, max_length=30_000)
