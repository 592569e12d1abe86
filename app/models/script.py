"""Script model."""
import uuid
from datetime import datetime
from enum import Enum

from sqlalchemy import ForeignKey, Index, Integer, JSON, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base


class ScriptTone(str, Enum):
    """Narration tone options."""
    EDUCATIONAL = "educational"
    BEDTIME = "bedtime"
    DOCUMENTARY = "documentary"
    CONVERSATIONAL = "conversational"
    DRAMATIC = "dramatic"
    CUSTOM = "custom"


class ScriptStatus(str, Enum):
    """Script lifecycle status."""
    DRAFT = "draft"
    GENERATING = "generating"
    READY = "ready"
    ERROR = "error"


class Script(Base):
    """LLM generated narration script."""

    __tablename__ = "scripts"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid.uuid4()),
    )
    project_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("projects.id"),
        nullable=False,
        unique=True,
        index=True,
    )
    owner_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("users.id"),
        nullable=False,
        index=True,
    )

    # Brief
    topic: Mapped[str] = mapped_column(String(200), nullable=False)
    tone: Mapped[str] = mapped_column(
        String(20),
        default=ScriptTone.EDUCATIONAL.value,
        nullable=False,
    )
    style: Mapped[str] = mapped_column(String(120), default="", nullable=False)
    length_minutes: Mapped[int] = mapped_column(Integer, nullable=False)
    chapters: Mapped[int] = mapped_column(Integer, nullable=False)

    # Generated / derived
    outline: Mapped[list] = mapped_column(JSON, default=list, nullable=False)
    content: Mapped[str] = mapped_column(Text, default="", nullable=False)
    target_word_count: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    actual_word_count: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    status: Mapped[str] = mapped_column(
        String(20),
        default=ScriptStatus.DRAFT.value,
        nullable=False,
    )  # draft, generating, ready, error
    error: Mapped[str] = mapped_column(Text, default="", nullable=False)

    created_at: Mapped[datetime] = mapped_column(default=datetime.utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        default=datetime.utcnow,
        onupdate=datetime.utcnow,
        nullable=False,
    )

    # Relationships
    project = relationship("Project", back_populates="script")
    voice = relationship(
        "ScriptVoice",
        back_populates="script",
        uselist=False,
        cascade="all, delete-orphan",
        lazy="selectin",
    )

    __table_args__ = (
        Index("ix_script_owner_project", "owner_id", "project_id"),
    )

    def __repr__(self) -> str:
        return f"<Script {self.project_id}: {self.status}>"
