"""Script generation service using LLM."""
import logging

from pydantic import BaseModel

from app.core.exceptions import LLMError
from app.utils.llm import call_llm
from app.utils.text import count_words, extract_outline

logger = logging.getLogger(__name__)


class ScriptGenerationParams(BaseModel):
    """Inputs the planner needs to write a script."""

    topic: str
    tone: str
    style: str | None = None
    chapters: int
    target_word_count: int


class GeneratedScript(BaseModel):
    """Planner output."""

    content: str
    outline: list[str]
    actual_word_count: int


def build_system_prompt() -> str:
    """System prompt for the script planner."""
    return """You are ClipVox's ScriptPlanner. Produce accurate, well-structured long-form scripts with clear chapter headings.
- Respect targetWordCount within ±10%.
- Tone, style, and topic must be followed strictly.
- Write in fluent, natural English for spoken delivery."""


def build_user_prompt(params: ScriptGenerationParams) -> str:
    """User prompt describing the requested script."""
    return f"""Topic: {params.topic}
Tone: {params.tone}
Style: {params.style or 'default'}
Chapters: {params.chapters}
TargetWordCount: {params.target_word_count}

Output requirements:
- Start with a one-paragraph intro (50-120 words).
- Then {params.chapters} chapters, each with a Markdown H1 heading "Chapter N: <Title>" and 2-5 paragraphs of content.
- End with a brief closing paragraph suited to the tone.
- Avoid filler, avoid lists unless essential, write for spoken delivery."""


async def generate_script(params: ScriptGenerationParams) -> GeneratedScript:
    """Write a narration script for the brief.

    Raises:
        LLMError: If the model call fails or returns no content
    """
    messages = [
        {"role": "system", "content": build_system_prompt()},
        {"role": "user", "content": build_user_prompt(params)},
    ]

    content = (await call_llm(messages)).strip()
    if not content:
        raise LLMError("No content returned from the language model")

    result = GeneratedScript(
        content=content,
        outline=extract_outline(content),
        actual_word_count=count_words(content),
    )
    logger.info(
        f"Planner wrote {result.actual_word_count} words "
        f"(target {params.target_word_count}), {len(result.outline)} chapters"
    )
    return result
