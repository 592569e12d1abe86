"""Narration voice catalog."""
from dataclasses import dataclass


@dataclass(frozen=True)
class VoiceOption:
    """A catalog voice and the provider voice it maps to."""

    id: str
    title: str
    demo_url: str
    provider_voice: str
    model: str | None = None  # provider default when None


VOICES: tuple[VoiceOption, ...] = (
    VoiceOption(
        id="aurora",
        title="Aurora (Warm Narrator)",
        demo_url="https://cdn.clipvox.app/demos/aurora.mp3",
        provider_voice="nova",
    ),
    VoiceOption(
        id="atlas",
        title="Atlas (Documentary)",
        demo_url="https://cdn.clipvox.app/demos/atlas.mp3",
        provider_voice="onyx",
    ),
    VoiceOption(
        id="ember",
        title="Ember (Bedtime)",
        demo_url="https://cdn.clipvox.app/demos/ember.mp3",
        provider_voice="shimmer",
    ),
)


def list_voices() -> list[VoiceOption]:
    return list(VOICES)


def get_voice_by_id(voice_id: str) -> VoiceOption | None:
    for voice in VOICES:
        if voice.id == voice_id:
            return voice
    return None
