from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from app.api.deps import get_translation_service
from app.core.app import create_app
from app.integrations.google_translate import (
    LanguageDetection,
    ProviderErrorKind,
    ProviderTranslation,
    TranslationProviderError,
)
from app.services.pacing import NoDelayPacer
from app.services.translation import TranslationService

STORY = "The art of hand-weaving silk has been passed through generations."


class StubTranslator:
    def __init__(self, failures: dict[str, ProviderErrorKind] | None = None) -> None:
        self.failures = failures or {}

    async def translate(
        self,
        text: str,
        target_language: str,
        source_language: str | None = None,
    ) -> ProviderTranslation:
        if target_language in self.failures:
            raise TranslationProviderError("rejected", kind=self.failures[target_language])
        return ProviderTranslation(translated_text=f"<{target_language}> {text}")

    async def detect_language(self, text: str) -> LanguageDetection:
        raise TranslationProviderError("offline", kind=ProviderErrorKind.TRANSPORT)

    async def list_languages(self, display_language: str = "en") -> list[dict[str, str]]:
        return [{"code": "es", "name": "Spanish"}]


def _client(translator: StubTranslator | None) -> TestClient:
    app = create_app()
    service = TranslationService(translator, pacer=NoDelayPacer())  # type: ignore[arg-type]

    async def override_get_translation_service() -> TranslationService:
        return service

    app.dependency_overrides[get_translation_service] = override_get_translation_service
    return TestClient(app)


def test_translate_story_returns_translations_and_errors() -> None:
    client = _client(StubTranslator(failures={"xx": ProviderErrorKind.INVALID_REQUEST}))

    response = client.post(
        "/api/translation/story",
        json={"text": STORY, "source_language": "en", "target_languages": ["es", "fr", "xx"]},
    )

    assert response.status_code == 200
    payload = response.json()
    assert [item["language"] for item in payload["translations"]] == ["es", "fr"]
    assert payload["translations"][0]["language_name"] == "Spanish"
    assert len(payload["errors"]) == 1
    assert payload["errors"][0].startswith("xx: ")


def test_translate_story_rejects_invalid_text() -> None:
    client = _client(StubTranslator())

    response = client.post(
        "/api/translation/story",
        json={"text": "hi", "target_languages": ["es"]},
    )

    assert response.status_code == 400
    assert response.json()["detail"] == "Text is too short for reliable translation"


def test_translate_story_requires_target_languages() -> None:
    client = _client(StubTranslator())

    response = client.post("/api/translation/story", json={"text": STORY, "target_languages": []})

    assert response.status_code == 422


def test_translation_routes_report_missing_provider() -> None:
    client = _client(None)

    response = client.post(
        "/api/translation/story",
        json={"text": STORY, "target_languages": ["es"]},
    )

    assert response.status_code == 503


@pytest.mark.parametrize(
    ("kind", "status_code"),
    [
        (ProviderErrorKind.INVALID_REQUEST, 400),
        (ProviderErrorKind.UNAUTHORIZED, 401),
        (ProviderErrorKind.QUOTA_EXCEEDED, 429),
        (ProviderErrorKind.TRANSPORT, 502),
    ],
)
def test_translate_text_maps_error_kinds_to_status(kind: ProviderErrorKind, status_code: int) -> None:
    client = _client(StubTranslator(failures={"es": kind}))

    response = client.post(
        "/api/translation/text",
        json={"text": STORY, "target_language": "es"},
    )

    assert response.status_code == status_code


def test_translate_text_returns_single_translation() -> None:
    client = _client(StubTranslator())

    response = client.post(
        "/api/translation/text",
        json={"text": STORY, "target_language": "ja", "source_language": "en"},
    )

    assert response.status_code == 200
    payload = response.json()
    assert payload["language"] == "ja"
    assert payload["language_name"] == "Japanese"
    assert payload["translated_text"].startswith("<ja>")
    assert payload["detected_source_language"] == "en"


def test_detect_language_falls_back_to_english() -> None:
    client = _client(StubTranslator())

    response = client.post("/api/translation/detect", json={"text": "Bonjour"})

    assert response.status_code == 200
    assert response.json() == {"language": "en"}


def test_validate_endpoint_lists_violations() -> None:
    client = _client(None)

    response = client.post("/api/translation/validate", json={"text": ""})

    assert response.status_code == 200
    assert response.json() == {
        "valid": False,
        "errors": ["Text cannot be empty", "Text is too short for reliable translation"],
    }


def test_languages_quota_and_suggestions() -> None:
    client = _client(StubTranslator())

    languages = client.get("/api/translation/languages").json()
    assert languages == {"languages": [{"code": "es", "name": "Spanish"}]}

    client.post("/api/translation/text", json={"text": STORY, "target_language": "es"})
    quota = client.get("/api/translation/quota").json()
    assert quota["used"] == len(STORY)
    assert quota["remaining"] == quota["limit"] - len(STORY)

    suggestions = client.post(
        "/api/translation/suggestions",
        json={"text": "A handmade lacquer box", "target_language": "zh"},
    ).json()
    assert len(suggestions["suggestions"]) == 1


def test_provider_health_reports_translation_status() -> None:
    client = _client(StubTranslator())

    response = client.get("/api/healthz/providers")

    assert response.status_code == 200
    payload = response.json()
    assert payload["translation"] == {"available": True, "error": None}
    assert "available" in payload["speech_to_text"]
