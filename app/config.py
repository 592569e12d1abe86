"""Application configuration."""
from pathlib import Path
from typing import List

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Resolve relative paths against the project root, not the cwd
_BASE_DIR = Path(__file__).resolve().parent.parent


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Application
    app_name: str = "ClipVox"
    app_version: str = "0.1.0"
    debug: bool = False

    # Server
    host: str = "0.0.0.0"
    port: int = 8000

    # Database
    database_url: str = "sqlite+aiosqlite:///./data/clipvox.db"

    # CORS
    cors_origins: List[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]

    # JWT
    jwt_secret_key: str = "clipvox-dev-secret"
    jwt_algorithm: str = "HS256"
    jwt_access_token_expire_minutes: int = 1440  # 24 hours

    # LLM (OpenAI-compatible chat completions)
    llm_base_url: str = "https://api.openai.com/v1"
    llm_api_key: str = ""
    llm_model: str = "gpt-4.1-mini"
    llm_temperature: float = 0.7
    llm_timeout: int = 300

    # TTS (OpenAI-compatible speech endpoint)
    tts_base_url: str = "https://api.openai.com/v1"
    tts_api_key: str = ""  # falls back to llm_api_key
    tts_model: str = "gpt-4o-mini-tts"
    tts_audio_format: str = "mp3"
    tts_timeout: int = 300

    # Script generation admission control
    script_rate_limit: int = 5
    script_rate_window_seconds: int = 60

    # Logging
    log_level: str = "INFO"
    log_dir: Path | None = None

    @model_validator(mode="after")
    def resolve_paths(self):
        """Resolve a relative log_dir against the project root."""
        if self.log_dir and not self.log_dir.is_absolute():
            self.log_dir = (_BASE_DIR / self.log_dir).resolve()
        return self

    @property
    def effective_tts_api_key(self) -> str:
        return self.tts_api_key or self.llm_api_key


settings = Settings()
