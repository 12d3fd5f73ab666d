"""Pytest configuration and fixtures for sentiment analyzer tests."""
from __future__ import annotations

import json
from pathlib import Path

import pytest

import lexisent.config as config
from lexisent.analysis.batch import analyze_batch
from lexisent.core.models import BatchResult
from lexisent.sentiment.lexicon import Lexicon
from lexisent.sentiment.lexicon_scorer import LexiconSentiment


@pytest.fixture(autouse=True)
def reset_settings(monkeypatch: pytest.MonkeyPatch):
    """Drop the cached settings so each test reads its own environment."""
    monkeypatch.setattr(config, "_settings", None)
    yield


@pytest.fixture
def scorer() -> LexiconSentiment:
    """Scorer with the built-in lexicon."""
    return LexiconSentiment()


@pytest.fixture
def tiny_lexicon() -> Lexicon:
    """A small lexicon for tests that swap word lists."""
    return Lexicon.build(
        positive=["sunny"],
        negative=["rainy"],
        neutral=["cloudy"],
        intensifiers=["so"],
        negations=["no"],
    )


@pytest.fixture
def sample_texts() -> list[str]:
    return [
        "I absolutely love this product! Best purchase ever.",
        "Terrible experience. Would never recommend to anyone.",
        "The product is okay, nothing special.",
        "Shipping took four days.",
    ]


@pytest.fixture
def sample_batch(sample_texts: list[str]) -> BatchResult:
    return analyze_batch(sample_texts, "Sample Reviews")


@pytest.fixture
def texts_file(tmp_path: Path, sample_texts: list[str]) -> Path:
    """A text file with one review per line and a blank line in between."""
    path = tmp_path / "reviews.txt"
    path.write_text("\n".join(sample_texts[:2]) + "\n\n" + "\n".join(sample_texts[2:]) + "\n", encoding="utf-8")
    return path


@pytest.fixture
def lexicon_file(tmp_path: Path) -> Path:
    path = tmp_path / "lexicon.json"
    path.write_text(json.dumps({"positive": ["sunny"], "negative": ["rainy"]}), encoding="utf-8")
    return path
