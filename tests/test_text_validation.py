from __future__ import annotations

import pytest

from app.services.text_validation import (
    EMPTY_TEXT_MESSAGE,
    SPECIAL_CHARS_MESSAGE,
    TOO_LONG_MESSAGE,
    TOO_SHORT_MESSAGE,
    TextValidator,
    validate_text_for_translation,
)


@pytest.mark.parametrize(
    "text",
    [
        "abc",
        "The art of hand-weaving silk has been passed through generations.",
        "a" * 30000,
        "Clay, fire; patience!",
    ],
)
def test_accepts_text_within_bounds(text: str) -> None:
    result = validate_text_for_translation(text)
    assert result.valid is True
    assert result.errors == []


def test_rejects_short_text() -> None:
    result = validate_text_for_translation("ab")
    assert result.valid is False
    assert result.errors == [TOO_SHORT_MESSAGE]


def test_rejects_text_over_maximum_length() -> None:
    result = validate_text_for_translation("a" * 30001)
    assert result.valid is False
    assert result.errors == [TOO_LONG_MESSAGE]


def test_empty_text_reports_every_violation() -> None:
    result = validate_text_for_translation("")
    assert result.valid is False
    assert result.errors == [EMPTY_TEXT_MESSAGE, TOO_SHORT_MESSAGE]


def test_whitespace_only_text_is_empty() -> None:
    result = validate_text_for_translation("     ")
    assert result.valid is False
    assert result.errors == [EMPTY_TEXT_MESSAGE]


def test_rejects_markup_heavy_text() -> None:
    result = validate_text_for_translation("<div>{{$$}}</div>")
    assert result.valid is False
    assert SPECIAL_CHARS_MESSAGE in result.errors


@pytest.mark.parametrize(
    "text",
    [
        "हाथ से बुनी रेशमी साड़ी पीढ़ियों से चली आ रही है।",
        "手工陶艺是我们家族的传统",
        "الحرف اليدوية تراث عائلي",
    ],
)
def test_non_latin_scripts_are_not_special_characters(text: str) -> None:
    assert TextValidator().validate(text).valid is True


def test_strict_mode_keeps_ascii_whitelist() -> None:
    validator = TextValidator(script_aware=False)
    result = validator.validate("手工陶艺是我们家族的传统")
    assert result.valid is False
    assert result.errors == [SPECIAL_CHARS_MESSAGE]


def test_strict_mode_treats_unicode_spaces_as_whitespace() -> None:
    validator = TextValidator(script_aware=False)
    text = "\u00a0".join(["clay"] * 8)

    assert validator.special_character_ratio(text) == 0.0
    assert validator.validate(text).valid is True


def test_validation_is_repeatable() -> None:
    validator = TextValidator()
    text = "<<>>"
    assert validator.validate(text) == validator.validate(text)
