from __future__ import annotations

import json
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

_NON_LETTERS = re.compile(r"[^a-z]")


def clean_word(token: str) -> str:
    """Lowercase a token and drop everything that is not an ASCII letter."""
    return _NON_LETTERS.sub("", token.lower())


def _normalize(words: Iterable[str]) -> frozenset[str]:
    cleaned = (clean_word(w) for w in words)
    return frozenset(w for w in cleaned if w)


POSITIVE_WORDS = (
    "love", "great", "excellent", "amazing", "wonderful", "fantastic", "good", "best",
    "happy", "joy", "pleased", "satisfied", "recommend", "perfect", "awesome", "brilliant",
    "outstanding", "superb", "delighted", "impressive", "exceptional", "beautiful", "helpful",
    "friendly", "professional", "quality", "thank", "appreciate", "enjoy", "favorite",
)

NEGATIVE_WORDS = (
    "hate", "terrible", "awful", "horrible", "bad", "worst", "disappointing", "poor",
    "angry", "frustrated", "annoyed", "upset", "complaint", "problem", "issue", "broken",
    "useless", "waste", "rude", "slow", "expensive", "overpriced", "never", "refund",
    "cancel", "avoid", "regret", "unfortunately", "failed", "error", "mistake", "wrong",
)

NEUTRAL_WORDS = (
    "okay", "fine", "average", "normal", "standard", "typical", "regular", "basic",
    "adequate", "acceptable", "moderate", "fair", "reasonable", "ordinary", "common",
)

INTENSIFIERS = ("very", "extremely", "absolutely", "really", "totally", "completely", "highly")

# Contracted forms are matched after punctuation is stripped ("don't" -> "dont")
NEGATIONS = ("not", "never", "don't", "doesn't", "didn't", "won't", "can't", "barely", "hardly")


@dataclass(frozen=True)
class Lexicon:
    """Read-only word lists used by the scorer.

    Every entry is stored in cleaned form so lookups compare like with like.
    Negations are checked before intensifiers, and both before the polarity
    lists, so a word present in several lists acts as a modifier.
    """

    positive: frozenset[str]
    negative: frozenset[str]
    neutral: frozenset[str]
    intensifiers: frozenset[str]
    negations: frozenset[str]

    @classmethod
    def build(
        cls,
        positive: Iterable[str],
        negative: Iterable[str],
        neutral: Iterable[str] = (),
        intensifiers: Iterable[str] = (),
        negations: Iterable[str] = (),
    ) -> "Lexicon":
        return cls(
            positive=_normalize(positive),
            negative=_normalize(negative),
            neutral=_normalize(neutral),
            intensifiers=_normalize(intensifiers),
            negations=_normalize(negations),
        )

    @classmethod
    def from_file(cls, path: str | Path) -> "Lexicon":
        """Load a lexicon from a JSON object of word lists.

        ``positive`` and ``negative`` are required. ``neutral``,
        ``intensifiers`` and ``negations`` fall back to the built-in lists.
        """
        data = json.loads(Path(path).read_text(encoding="utf-8"))
        if not isinstance(data, dict):
            raise ValueError(f"Lexicon file {path} must contain a JSON object")

        missing = [k for k in ("positive", "negative") if k not in data]
        if missing:
            raise ValueError(f"Lexicon file {path} is missing keys: {', '.join(missing)}")

        for key, value in data.items():
            if not isinstance(value, list) or not all(isinstance(w, str) for w in value):
                raise ValueError(f"Lexicon key '{key}' must be a list of strings")

        return cls.build(
            positive=data["positive"],
            negative=data["negative"],
            neutral=data.get("neutral", NEUTRAL_WORDS),
            intensifiers=data.get("intensifiers", INTENSIFIERS),
            negations=data.get("negations", NEGATIONS),
        )


DEFAULT_LEXICON = Lexicon.build(
    positive=POSITIVE_WORDS,
    negative=NEGATIVE_WORDS,
    neutral=NEUTRAL_WORDS,
    intensifiers=INTENSIFIERS,
    negations=NEGATIONS,
)
