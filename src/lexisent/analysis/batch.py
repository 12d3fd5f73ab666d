from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Optional, Sequence

from lexisent.core.logger import CorrelationContext, get_logger
from lexisent.core.models import (
    LABEL_ORDER,
    BatchResult,
    BatchSummary,
    SentimentLabel,
    SentimentResult,
    new_id,
)
from lexisent.sentiment.base import SentimentClient
from lexisent.sentiment.lexicon_scorer import LexiconSentiment

log = get_logger("batch")

Trend = Literal["up", "down", "flat"]


def summarize(results: Sequence[SentimentResult]) -> BatchSummary:
    """Count labels and average confidence.

    An empty result set averages to 0.0 rather than NaN.
    """
    counts = {label: 0 for label in LABEL_ORDER}
    for r in results:
        counts[r.sentiment] += 1

    average = sum(r.confidence for r in results) / len(results) if results else 0.0

    return BatchSummary(
        positive=counts[SentimentLabel.POSITIVE],
        negative=counts[SentimentLabel.NEGATIVE],
        neutral=counts[SentimentLabel.NEUTRAL],
        average_confidence=average,
    )


def analyze_batch(
    texts: Sequence[str],
    name: str,
    client: Optional[SentimentClient] = None,
) -> BatchResult:
    """Score every text and wrap the results in a BatchResult.

    Args:
        texts: Texts to score
        name: Display name for the batch
        client: Scorer to use (default: LexiconSentiment with built-in lexicon)

    Returns:
        BatchResult whose results are in the same order as ``texts``
    """
    client = client or LexiconSentiment()
    batch_id = new_id()

    with CorrelationContext(batch_id[:8]):
        results = tuple(client.analyze(text) for text in texts)
        summary = summarize(results)

        log.info(
            f"Batch '{name}': {len(results)} texts, "
            f"+{summary.positive} -{summary.negative} ={summary.neutral}, "
            f"avg confidence {summary.average_confidence:.2f}",
            extra={"batch_id": batch_id},
        )
    return BatchResult(name=name, results=results, summary=summary, id=batch_id)


@dataclass(frozen=True)
class BatchComparison:
    """Change in label share between two batches, in percentage points."""

    first: BatchResult
    second: BatchResult
    positive_change: float
    negative_change: float
    neutral_change: float
    threshold: float = 1.0

    def change(self, label: SentimentLabel) -> float:
        return getattr(self, f"{label.value}_change")

    def trend(self, label: SentimentLabel) -> Trend:
        value = self.change(label)
        if value > self.threshold:
            return "up"
        if value < -self.threshold:
            return "down"
        return "flat"


def _rate(count: int, total: int) -> float:
    return count / total * 100 if total else 0.0


def compare_batches(first: BatchResult, second: BatchResult, threshold: float = 1.0) -> BatchComparison:
    """Compare label distributions of two batches (second minus first)."""
    total1 = len(first.results)
    total2 = len(second.results)

    def delta(label: SentimentLabel) -> float:
        return _rate(second.summary.count(label), total2) - _rate(first.summary.count(label), total1)

    return BatchComparison(
        first=first,
        second=second,
        positive_change=delta(SentimentLabel.POSITIVE),
        negative_change=delta(SentimentLabel.NEGATIVE),
        neutral_change=delta(SentimentLabel.NEUTRAL),
        threshold=threshold,
    )
