from __future__ import annotations

import re
import unicodedata
from dataclasses import dataclass, field
from typing import Final

MIN_TEXT_LENGTH: Final[int] = 3
MAX_TEXT_LENGTH: Final[int] = 30_000
MAX_SPECIAL_CHAR_RATIO: Final[float] = 0.3

EMPTY_TEXT_MESSAGE: Final[str] = "Text cannot be empty"
TOO_LONG_MESSAGE: Final[str] = "Text exceeds maximum length of 30,000 characters"
TOO_SHORT_MESSAGE: Final[str] = "Text is too short for reliable translation"
SPECIAL_CHARS_MESSAGE: Final[str] = "Text contains too many special characters or markup"

_BASIC_PUNCTUATION: Final[frozenset[str]] = frozenset(".,!?;:-")
_ASCII_SPECIAL_PATTERN: Final[re.Pattern[str]] = re.compile(r"[^A-Za-z0-9_\s.,!?;:-]")


@dataclass(slots=True)
class ValidationResult:
    valid: bool
    errors: list[str] = field(default_factory=list)


class TextValidator:
    """Pre-flight checks applied to story text before any provider call.

    In the default script-aware mode, letters, digits and combining marks of any
    script count as ordinary characters, so Devanagari or Han text is not mistaken
    for markup. ``script_aware=False`` keeps the ASCII word-character whitelist.
    """

    def __init__(self, *, script_aware: bool = True) -> None:
        self._script_aware = script_aware

    def validate(self, text: str) -> ValidationResult:
        errors: list[str] = []
        text = text or ""

        if not text.strip():
            errors.append(EMPTY_TEXT_MESSAGE)
        if len(text) > MAX_TEXT_LENGTH:
            errors.append(TOO_LONG_MESSAGE)
        if len(text) < MIN_TEXT_LENGTH:
            errors.append(TOO_SHORT_MESSAGE)
        if text and self.special_character_ratio(text) > MAX_SPECIAL_CHAR_RATIO:
            errors.append(SPECIAL_CHARS_MESSAGE)

        return ValidationResult(valid=not errors, errors=errors)

    def special_character_ratio(self, text: str) -> float:
        if not text:
            return 0.0
        if self._script_aware:
            special = sum(1 for char in text if not _is_ordinary(char))
        else:
            special = len(_ASCII_SPECIAL_PATTERN.findall(text))
        return special / len(text)


def _is_ordinary(char: str) -> bool:
    if char.isspace() or char == "_" or char in _BASIC_PUNCTUATION:
        return True
    # L* letters, N* numbers, M* combining marks (vowel signs, viramas).
    return unicodedata.category(char)[0] in ("L", "N", "M")


def validate_text_for_translation(text: str, *, script_aware: bool = True) -> ValidationResult:
    return TextValidator(script_aware=script_aware).validate(text)
