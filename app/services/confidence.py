"""Heuristic quality score for machine translations.

The estimate starts from a fixed baseline and only ever subtracts for warning
signs, apart from a small bonus for long source texts. It is deterministic and
cheap enough to run on every translated language.
"""

from __future__ import annotations

from typing import Final

BASE_CONFIDENCE: Final[float] = 0.85
LONG_TEXT_THRESHOLD: Final[int] = 500
SHORT_TEXT_THRESHOLD: Final[int] = 50
LONG_TEXT_BONUS: Final[float] = 0.05
SHORT_TEXT_PENALTY: Final[float] = 0.10
LENGTH_RATIO_BOUNDS: Final[tuple[float, float]] = (0.3, 3.0)
LENGTH_RATIO_PENALTY: Final[float] = 0.15
ISSUE_PENALTY: Final[float] = 0.10
MIN_CONFIDENCE: Final[float] = 0.1
MAX_CONFIDENCE: Final[float] = 1.0

_ENCODING_ARTIFACTS: Final[tuple[str, ...]] = ("&lt;", "&gt;", "&#")


def estimate_confidence(original: str, translated: str) -> float:
    """Return a confidence score in [0.1, 1.0] for ``translated``."""
    confidence = BASE_CONFIDENCE

    if len(original) > LONG_TEXT_THRESHOLD:
        confidence += LONG_TEXT_BONUS
    elif len(original) < SHORT_TEXT_THRESHOLD:
        confidence -= SHORT_TEXT_PENALTY

    low, high = LENGTH_RATIO_BOUNDS
    ratio = _length_ratio(original, translated)
    if ratio < low or ratio > high:
        confidence -= LENGTH_RATIO_PENALTY

    if has_translation_issues(original, translated):
        confidence -= ISSUE_PENALTY

    return max(MIN_CONFIDENCE, min(MAX_CONFIDENCE, confidence))


def has_translation_issues(original: str, translated: str) -> bool:
    """Detect untranslated output, repetition loops and escaped markup."""
    if original.lower() == translated.lower():
        return True

    words = translated.split(" ")
    unique_words = {word.lower() for word in words}
    if len(words) > 10 and len(unique_words) / len(words) < 0.5:
        return True

    return any(artifact in translated for artifact in _ENCODING_ARTIFACTS)


def _length_ratio(original: str, translated: str) -> float:
    if not original:
        # Nothing to compare against; only non-empty output counts as divergent.
        return float("inf") if translated else 1.0
    return len(translated) / len(original)
