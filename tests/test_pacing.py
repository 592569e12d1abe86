"""Pacing estimator tests."""
import pytest

from app.models.script import ScriptTone
from app.services.pacing import (
    DEFAULT_WPM,
    MAX_WPM,
    MIN_WPM,
    TONE_WPM,
    estimate,
    target_word_count,
    words_per_minute,
)


class TestWordsPerMinute:
    """Tone and style to speaking rate."""

    @pytest.mark.parametrize(
        "tone,expected",
        [
            ("bedtime", 125),
            ("documentary", 150),
            ("educational", 150),
            ("conversational", 170),
            ("dramatic", 140),
            ("custom", 160),
        ],
    )
    def test_tone_table(self, tone, expected):
        assert words_per_minute(tone) == expected

    def test_unknown_tone_uses_default(self):
        assert words_per_minute("whispered") == DEFAULT_WPM == 160

    def test_accepts_enum_members(self):
        assert words_per_minute(ScriptTone.BEDTIME) == 125

    def test_slow_style_lowers_rate(self):
        assert words_per_minute("dramatic", "slow and suspenseful") == 130

    def test_fast_style_raises_rate(self):
        assert words_per_minute("educational", "Fast-paced explainer") == 160

    def test_slow_and_fast_cancel_out(self):
        assert words_per_minute("conversational", "slow intro, fast finish") == 170

    def test_style_match_is_case_insensitive(self):
        assert words_per_minute("bedtime", "SLOW") == 115

    def test_rates_stay_within_bounds(self):
        styles = [None, "", "slow", "fast", "slow fast"]
        for tone in list(TONE_WPM) + ["unknown"]:
            for style in styles:
                assert MIN_WPM <= words_per_minute(tone, style) <= MAX_WPM


class TestTargetWordCount:
    """Length and rate to word budget."""

    def test_educational_five_minutes(self):
        assert target_word_count(5, "educational") == 750

    def test_bedtime_slow(self):
        assert target_word_count(10, "bedtime", "slow lullaby") == 1150

    def test_half_words_round_up(self):
        # 0.5 * 125 = 62.5
        assert target_word_count(0.5, "bedtime") == 63

    def test_monotonic_in_length(self):
        counts = [target_word_count(m, "documentary") for m in range(1, 60)]
        assert counts == sorted(counts)

    def test_zero_length_gives_zero(self):
        assert target_word_count(0, "educational") == 0


class TestEstimate:
    """Full estimate of a brief against content."""

    def test_counts_content_words(self):
        result = estimate(1, "educational", None, "one two three four")
        assert result.words_per_minute == 150
        assert result.target_word_count == 150
        assert result.actual_word_count == 4
        assert result.delta == -146

    def test_missing_content_counts_zero(self):
        result = estimate(2, "conversational")
        assert result.actual_word_count == 0
        assert result.completion == 0.0
        assert result.estimated_minutes == 0.0

    def test_completion_with_zero_target(self):
        result = estimate(0, "educational", None, "some words")
        assert result.completion == 0.0

    def test_to_dict_rounds(self):
        content = " ".join(["word"] * 100)
        data = estimate(1, "conversational", None, content).to_dict()
        assert data == {
            "words_per_minute": 170,
            "target_word_count": 170,
            "actual_word_count": 100,
            "delta": -70,
            "completion": 0.5882,
            "estimated_minutes": 0.59,
        }


@pytest.mark.parametrize("tone", list(TONE_WPM))
def test_pace_words_shift_rate_for_every_tone(tone):
    base = words_per_minute(tone)
    assert words_per_minute(tone, "fast pace") > base
    assert words_per_minute(tone, "slow pace") < base


def test_bedtime_is_slower_than_conversational():
    assert words_per_minute("bedtime") < words_per_minute("conversational")
