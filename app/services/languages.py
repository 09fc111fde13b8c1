from __future__ import annotations

from types import MappingProxyType
from typing import Final, Mapping

LANGUAGE_NAMES: Final[Mapping[str, str]] = MappingProxyType(
    {
        "en": "English",
        "es": "Spanish",
        "fr": "French",
        "de": "German",
        "it": "Italian",
        "pt": "Portuguese",
        "ru": "Russian",
        "ja": "Japanese",
        "ko": "Korean",
        "zh": "Chinese",
        "ar": "Arabic",
        "hi": "Hindi",
        "bn": "Bengali",
        "ur": "Urdu",
        "tr": "Turkish",
        "pl": "Polish",
        "nl": "Dutch",
        "sv": "Swedish",
        "da": "Danish",
        "no": "Norwegian",
    }
)

SPEECH_LOCALES: Final[Mapping[str, str]] = MappingProxyType(
    {
        "en": "en-US",
        "es": "es-ES",
        "fr": "fr-FR",
        "de": "de-DE",
        "it": "it-IT",
        "pt": "pt-PT",
        "ru": "ru-RU",
        "ja": "ja-JP",
        "ko": "ko-KR",
        "zh": "zh-CN",
        "ar": "ar-SA",
        "hi": "hi-IN",
        "bn": "bn-IN",
        "ur": "ur-PK",
        "tr": "tr-TR",
        "pl": "pl-PL",
        "nl": "nl-NL",
        "sv": "sv-SE",
        "da": "da-DK",
        "no": "no-NO",
    }
)

DEFAULT_SPEECH_LOCALE: Final[str] = "en-US"


def language_name(code: str) -> str:
    """Return the display name for a language code, or the code itself."""
    return LANGUAGE_NAMES.get(code, code)


def speech_locale(language: str) -> str:
    """Map a short language code (or a full locale) onto a Google Speech locale."""
    if language in SPEECH_LOCALES.values():
        return language
    return SPEECH_LOCALES.get(language, DEFAULT_SPEECH_LOCALE)
