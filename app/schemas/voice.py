"""Voice schemas."""
from datetime import datetime

from pydantic import BaseModel, Field


class Voice(BaseModel):
    """Catalog voice schema."""

    id: str
    title: str
    demo_url: str


class ScriptVoiceRequest(BaseModel):
    """Request to synthesize a script with a catalog voice."""

    voice_id: str = Field(..., min_length=1, max_length=50)


class VoiceTrack(BaseModel):
    """Voice track metadata; the audio itself is served separately."""

    provider: str
    voice_id: str
    voice_name: str
    audio_format: str
    duration_seconds: float | None = None
    created_at: datetime
    updated_at: datetime
    audio_url: str
