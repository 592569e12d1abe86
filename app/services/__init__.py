"""Services module."""

# Lazy imports keep `import app.services` free of the HTTP client stack
__all__ = [
    "ScriptWorkflow",
    "generate_script",
    "estimate",
    "target_word_count",
    "words_per_minute",
    "TTSEngine",
    "create_tts_engine",
    "get_voice_by_id",
    "list_voices",
]


def __getattr__(name):
    """Lazy import services."""
    if name == "ScriptWorkflow":
        from app.services.script_workflow import ScriptWorkflow
        return ScriptWorkflow
    elif name == "generate_script":
        from app.services.script_planner import generate_script
        return generate_script
    elif name in ("estimate", "target_word_count", "words_per_minute"):
        from app.services import pacing
        return getattr(pacing, name)
    elif name in ("TTSEngine", "create_tts_engine"):
        from app.services import tts_engine
        return getattr(tts_engine, name)
    elif name in ("get_voice_by_id", "list_voices"):
        from app.services import voices
        return getattr(voices, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
