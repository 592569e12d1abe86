"""TTS engine service for voice synthesis."""
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass

import httpx

from app.config import settings
from app.core.exceptions import TTSError
from app.services.voices import VoiceOption

logger = logging.getLogger(__name__)


@dataclass
class SynthesisResult:
    """Synthesized audio and its MIME type."""

    audio: bytes
    format: str
    provider: str


class TTSEngine(ABC):
    """Abstract TTS engine."""

    provider: str = "unknown"

    @abstractmethod
    async def synthesize(self, text: str, voice: VoiceOption) -> SynthesisResult:
        """
        Synthesize speech for text.

        Args:
            text: Text to convert
            voice: Catalog voice to use

        Returns:
            SynthesisResult with opaque audio bytes

        Raises:
            TTSError: If text is blank or the provider fails
        """
        pass


class OpenAITTSEngine(TTSEngine):
    """OpenAI-compatible /audio/speech engine."""

    provider = "openai"

    def __init__(self, config: dict | None = None):
        config = config or {}
        self.base_url = config.get("base_url", settings.tts_base_url)
        self.api_key = config.get("api_key", settings.effective_tts_api_key)
        self.model = config.get("model", settings.tts_model)
        self.audio_format = config.get("audio_format", settings.tts_audio_format)
        self.timeout = config.get("timeout", settings.tts_timeout)

    async def synthesize(self, text: str, voice: VoiceOption) -> SynthesisResult:
        """Synthesize speech using the provider's speech endpoint."""
        if not text.strip():
            raise TTSError("Script has no content to synthesize.")
        if not self.api_key:
            raise TTSError("TTS API key is not configured")

        payload = {
            "model": voice.model or self.model,
            "voice": voice.provider_voice,
            "input": text,
            "response_format": self.audio_format,
        }

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(
                    f"{self.base_url}/audio/speech",
                    headers={"Authorization": f"Bearer {self.api_key}"},
                    json=payload,
                )
                response.raise_for_status()
                audio = response.content

        except httpx.HTTPError as e:
            raise TTSError(f"TTS request failed: {str(e)}") from e

        if not audio:
            raise TTSError("TTS provider returned no audio")

        logger.info(f"Synthesized {len(audio)} bytes with voice {voice.id}")
        return SynthesisResult(
            audio=audio,
            format=f"audio/{self.audio_format}",
            provider=self.provider,
        )


def create_tts_engine(config: dict | None = None) -> TTSEngine:
    """Create the configured TTS engine."""
    return OpenAITTSEngine(config)
