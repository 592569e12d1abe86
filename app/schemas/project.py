"""Project schemas."""
from datetime import datetime
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, model_validator

ProjectTag = Annotated[str, Field(min_length=1, max_length=30)]


class ProjectCreate(BaseModel):
    """Project creation schema."""

    title: str = Field(..., min_length=3, max_length=120)
    description: str | None = Field(None, max_length=1000)
    tags: list[ProjectTag] | None = Field(None, max_length=10)


class ProjectUpdate(BaseModel):
    """Project update schema. At least one field must be supplied."""

    title: str | None = Field(None, min_length=3, max_length=120)
    description: str | None = Field(None, max_length=1000)
    tags: list[ProjectTag] | None = Field(None, max_length=10)

    @model_validator(mode="after")
    def require_changes(self):
        if not self.changes():
            raise ValueError("No changes provided")
        return self

    def changes(self) -> dict:
        """Fields the client actually supplied, without nulls."""
        return self.model_dump(exclude_unset=True, exclude_none=True)


class Project(BaseModel):
    """Project response schema."""

    id: str
    owner_id: str
    title: str
    description: str
    tags: list[str]
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
