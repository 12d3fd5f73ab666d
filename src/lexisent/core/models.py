from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from lexisent.core.timeutils import utcnow


class SentimentLabel(str, Enum):
    POSITIVE = "positive"
    NEGATIVE = "negative"
    NEUTRAL = "neutral"


# Row/column order of the confusion matrix
LABEL_ORDER: tuple[SentimentLabel, ...] = (
    SentimentLabel.POSITIVE,
    SentimentLabel.NEGATIVE,
    SentimentLabel.NEUTRAL,
)


def new_id() -> str:
    return uuid.uuid4().hex


def satisfaction_rating(sentiment: SentimentLabel, confidence: float) -> float:
    """Map a label and confidence onto a 1.0-5.0 star rating.

    Positive results land in 3.5-5.0 and neutral ones in 2.5-3.5, both rising
    with confidence. Negative results land in 1.0-2.5, falling as confidence
    rises.
    """
    if sentiment == SentimentLabel.POSITIVE:
        return 3.5 + confidence * 1.5
    if sentiment == SentimentLabel.NEGATIVE:
        return 1.0 + (1 - confidence) * 1.5
    return 2.5 + confidence


@dataclass(frozen=True)
class Keyword:
    word: str
    sentiment: SentimentLabel
    impact: float  # -1..+1


@dataclass(frozen=True)
class SentimentResult:
    text: str
    sentiment: SentimentLabel
    confidence: float  # 0..1
    keywords: tuple[Keyword, ...]
    explanation: str
    id: str = field(default_factory=new_id)
    timestamp: datetime = field(default_factory=utcnow)

    @property
    def rating(self) -> float:
        return satisfaction_rating(self.sentiment, self.confidence)


@dataclass(frozen=True)
class BatchSummary:
    positive: int
    negative: int
    neutral: int
    average_confidence: float

    @property
    def total(self) -> int:
        return self.positive + self.negative + self.neutral

    def count(self, label: SentimentLabel) -> int:
        return getattr(self, label.value)


@dataclass(frozen=True)
class BatchResult:
    name: str
    results: tuple[SentimentResult, ...]
    summary: BatchSummary
    id: str = field(default_factory=new_id)
    created_at: datetime = field(default_factory=utcnow)


@dataclass(frozen=True)
class AccuracyMetrics:
    """Classification quality derived from a confusion matrix.

    ``confusion_matrix[actual][predicted]`` uses ``LABEL_ORDER`` for both axes.
    """

    accuracy: float
    precision: dict[SentimentLabel, float]
    recall: dict[SentimentLabel, float]
    f1_score: dict[SentimentLabel, float]
    confusion_matrix: list[list[int]]
