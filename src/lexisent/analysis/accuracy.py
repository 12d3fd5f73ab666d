from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

import numpy as np

from lexisent.analysis.samples import LabeledSample
from lexisent.core.logger import CorrelationContext, get_logger
from lexisent.core.models import LABEL_ORDER, AccuracyMetrics, SentimentLabel
from lexisent.sentiment.base import SentimentClient
from lexisent.sentiment.lexicon_scorer import LexiconSentiment

log = get_logger("accuracy")

_INDEX = {label: i for i, label in enumerate(LABEL_ORDER)}


class InvalidArgumentError(ValueError):
    """Raised when evaluation inputs violate a precondition."""
    pass


def _ratio(num: float, den: float) -> float:
    return float(num / den) if den > 0 else 0.0


def confusion_matrix(
    predicted: Sequence[SentimentLabel],
    actual: Sequence[SentimentLabel],
) -> np.ndarray:
    """Build a 3x3 count matrix indexed [actual][predicted].

    Raises:
        InvalidArgumentError: if the sequences differ in length or contain
            something that is not a sentiment label
    """
    if len(predicted) != len(actual):
        raise InvalidArgumentError(
            f"predicted and actual must have the same length, got {len(predicted)} and {len(actual)}"
        )

    matrix = np.zeros((len(LABEL_ORDER), len(LABEL_ORDER)), dtype=np.int64)
    for pred, act in zip(predicted, actual):
        try:
            matrix[_INDEX[SentimentLabel(act)], _INDEX[SentimentLabel(pred)]] += 1
        except ValueError as e:
            raise InvalidArgumentError(str(e)) from e
    return matrix


def calculate_accuracy_metrics(
    predicted: Sequence[SentimentLabel],
    actual: Sequence[SentimentLabel],
) -> AccuracyMetrics:
    """Per-class precision/recall/F1 and overall accuracy.

    Any metric whose denominator is zero is reported as 0.0.

    Args:
        predicted: Labels produced by the classifier
        actual: Ground-truth labels, same length as ``predicted``

    Returns:
        AccuracyMetrics with plain Python numbers

    Raises:
        InvalidArgumentError: on length mismatch
    """
    matrix = confusion_matrix(predicted, actual)

    precision: dict[SentimentLabel, float] = {}
    recall: dict[SentimentLabel, float] = {}
    f1_score: dict[SentimentLabel, float] = {}

    for i, label in enumerate(LABEL_ORDER):
        tp = matrix[i, i]
        fp = matrix[:, i].sum() - tp
        fn = matrix[i, :].sum() - tp

        p = _ratio(tp, tp + fp)
        r = _ratio(tp, tp + fn)
        precision[label] = p
        recall[label] = r
        f1_score[label] = _ratio(2 * p * r, p + r)

    accuracy = _ratio(np.trace(matrix), matrix.sum())

    return AccuracyMetrics(
        accuracy=accuracy,
        precision=precision,
        recall=recall,
        f1_score=f1_score,
        confusion_matrix=matrix.tolist(),
    )


@dataclass(frozen=True)
class Prediction:
    text: str
    predicted: SentimentLabel
    actual: SentimentLabel

    @property
    def correct(self) -> bool:
        return self.predicted == self.actual


@dataclass(frozen=True)
class AccuracyReport:
    metrics: AccuracyMetrics
    predictions: tuple[Prediction, ...]

    @property
    def misclassified(self) -> list[Prediction]:
        return [p for p in self.predictions if not p.correct]


def evaluate_samples(
    samples: Sequence[LabeledSample],
    client: Optional[SentimentClient] = None,
) -> AccuracyReport:
    """Score labeled samples and measure how often the scorer agrees."""
    client = client or LexiconSentiment()

    with CorrelationContext():
        predictions = tuple(
            Prediction(text=s.text, predicted=client.analyze(s.text).sentiment, actual=s.label)
            for s in samples
        )
        metrics = calculate_accuracy_metrics(
            [p.predicted for p in predictions],
            [p.actual for p in predictions],
        )

        log.info(f"Evaluated {len(predictions)} samples: accuracy {metrics.accuracy:.1%}")
        for p in predictions:
            if not p.correct:
                log.debug(f"Misclassified as {p.predicted.value} (expected {p.actual.value}): {p.text}")

    return AccuracyReport(metrics=metrics, predictions=predictions)
