from __future__ import annotations

from typing import Final

# (keyword in source text, target language, suggestion)
_CULTURAL_RULES: Final[tuple[tuple[str, str, str], ...]] = (
    (
        "pottery",
        "ja",
        'Consider using "陶芸" (tōgei) for pottery in Japanese context',
    ),
    (
        "weaving",
        "es",
        'Consider regional variations: "tejeduría" (formal) vs "tejido" (general)',
    ),
    (
        "tradition",
        "ar",
        "Consider emphasizing cultural heritage and family traditions",
    ),
    (
        "handmade",
        "zh",
        "Emphasize the skill and artistry aspect, which is highly valued in Chinese culture",
    ),
)


def cultural_suggestions(text: str, target_language: str) -> list[str]:
    """Return localisation hints for craft vocabulary in the target culture."""
    return [
        suggestion
        for keyword, language, suggestion in _CULTURAL_RULES
        if language == target_language and keyword in text
    ]
