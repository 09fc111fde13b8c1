from __future__ import annotations

import pytest

from app.services.confidence import estimate_confidence, has_translation_issues


def test_identical_text_scores_below_real_translation() -> None:
    untranslated = estimate_confidence("Hello world", "Hello world")
    translated = estimate_confidence("Hello world", "Bonjour le monde")
    assert untranslated < translated
    assert translated == pytest.approx(0.75)
    assert untranslated == pytest.approx(0.65)


def test_medium_length_text_keeps_baseline() -> None:
    original = "Each bowl is thrown on a kick wheel and glazed with local ash."
    translated = "Cada cuenco se tornea en un torno de patada y se esmalta con ceniza local."
    assert estimate_confidence(original, translated) == pytest.approx(0.85)


def test_long_source_text_earns_bonus() -> None:
    original = " ".join(f"word{i}" for i in range(120))
    translated = " ".join(f"palabra{i}" for i in range(120))
    assert len(original) > 500
    assert estimate_confidence(original, translated) == pytest.approx(0.90)


def test_divergent_length_is_penalised() -> None:
    original = "Our family has carved wooden toys in this village for four generations."
    assert estimate_confidence(original, "Juguetes.") == pytest.approx(0.70)


@pytest.mark.parametrize(
    ("original", "translated"),
    [
        ("", ""),
        ("", "something"),
        ("x", "x" * 1000),
        ("a" * 600, "a" * 600),
        ("hi", "&lt;b&gt;"),
    ],
)
def test_score_is_always_clamped(original: str, translated: str) -> None:
    score = estimate_confidence(original, translated)
    assert 0.1 <= score <= 1.0


def test_issue_detector_flags_repetition() -> None:
    repeated = " ".join(["tejido"] * 8 + ["de", "seda", "fina", "hecho"])
    assert has_translation_issues("Fine woven silk made by hand in the valley.", repeated)


def test_issue_detector_flags_html_entities() -> None:
    assert has_translation_issues("Tea & cakes", "Thé &#38; gâteaux")
    assert has_translation_issues("<b>Clay</b>", "&lt;b&gt;Arcilla&lt;/b&gt;")


def test_issue_detector_accepts_clean_translation() -> None:
    assert not has_translation_issues("Hand-dyed wool", "Lana teñida a mano")
