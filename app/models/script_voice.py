"""Synthesized voice track attached to a script."""
import uuid
from datetime import datetime

from sqlalchemy import Float, ForeignKey, LargeBinary, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base


class ScriptVoice(Base):
    """Opaque audio produced by the TTS provider for a script."""

    __tablename__ = "script_voices"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid.uuid4()),
    )
    script_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("scripts.id"),
        nullable=False,
        unique=True,
        index=True,
    )
    provider: Mapped[str] = mapped_column(String(50), nullable=False)
    voice_id: Mapped[str] = mapped_column(String(50), nullable=False)
    voice_name: Mapped[str] = mapped_column(String(100), nullable=False)
    audio_format: Mapped[str] = mapped_column(String(50), default="audio/mpeg", nullable=False)
    # Loaded on demand by the audio endpoint
    audio_data: Mapped[bytes] = mapped_column(
        LargeBinary,
        nullable=False,
        deferred=True,
        deferred_raiseload=True,
    )
    duration_seconds: Mapped[float | None] = mapped_column(Float, nullable=True)

    created_at: Mapped[datetime] = mapped_column(default=datetime.utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(default=datetime.utcnow, nullable=False)

    # Relationships
    script = relationship("Script", back_populates="voice")

    def __repr__(self) -> str:
        return f"<ScriptVoice {self.voice_id}: {self.audio_format}>"
