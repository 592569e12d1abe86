"""Database models."""
from app.models.project import Project
from app.models.script import Script, ScriptStatus, ScriptTone
from app.models.script_voice import ScriptVoice
from app.models.user import User

__all__ = [
    "User",
    "Project",
    "Script",
    "ScriptStatus",
    "ScriptTone",
    "ScriptVoice",
]
