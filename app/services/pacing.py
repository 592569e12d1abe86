"""Narration pacing estimator.

Maps a narration brief (tone, style, length) to a word budget and compares
it against the words actually written.
"""
import math
from dataclasses import dataclass

from app.utils.text import count_words

# Base narration speed per tone, in words per minute
TONE_WPM: dict[str, int] = {
    "bedtime": 125,
    "documentary": 150,
    "educational": 150,
    "conversational": 170,
    "dramatic": 140,
    "custom": 160,
}
DEFAULT_WPM = 160

STYLE_STEP_WPM = 10
MIN_WPM = 100
MAX_WPM = 220


@dataclass(frozen=True)
class PacingEstimate:
    """Target versus actual word count for a script."""

    words_per_minute: int
    target_word_count: int
    actual_word_count: int

    @property
    def delta(self) -> int:
        return self.actual_word_count - self.target_word_count

    @property
    def completion(self) -> float:
        if self.target_word_count <= 0:
            return 0.0
        return self.actual_word_count / self.target_word_count

    @property
    def estimated_minutes(self) -> float:
        return self.actual_word_count / self.words_per_minute

    def to_dict(self) -> dict:
        return {
            "words_per_minute": self.words_per_minute,
            "target_word_count": self.target_word_count,
            "actual_word_count": self.actual_word_count,
            "delta": self.delta,
            "completion": round(self.completion, 4),
            "estimated_minutes": round(self.estimated_minutes, 2),
        }


def _tone_key(tone) -> str:
    # Accept ScriptTone members as well as raw strings
    return getattr(tone, "value", tone)


def words_per_minute(tone, style: str | None = None) -> int:
    """Narration speed for a tone, nudged by the style text.

    A style mentioning "slow" lowers the rate and one mentioning "fast"
    raises it; both checks apply independently. Unknown tones use the
    default rate. The result is clamped to [MIN_WPM, MAX_WPM].
    """
    wpm = TONE_WPM.get(_tone_key(tone), DEFAULT_WPM)
    lower_style = (style or "").lower()

    if "slow" in lower_style:
        wpm -= STYLE_STEP_WPM
    if "fast" in lower_style:
        wpm += STYLE_STEP_WPM

    return max(MIN_WPM, min(MAX_WPM, wpm))


def target_word_count(length_minutes: float, tone, style: str | None = None) -> int:
    """Word budget for a narration of length_minutes.

    Halves round up. length_minutes is not validated here.
    """
    return int(math.floor(length_minutes * words_per_minute(tone, style) + 0.5))


def estimate(
    length_minutes: float,
    tone,
    style: str | None = None,
    content: str | None = None,
) -> PacingEstimate:
    """Compare the word budget of a brief with the words in content."""
    wpm = words_per_minute(tone, style)
    return PacingEstimate(
        words_per_minute=wpm,
        target_word_count=target_word_count(length_minutes, tone, style),
        actual_word_count=count_words(content),
    )
