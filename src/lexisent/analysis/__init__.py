from __future__ import annotations

from .accuracy import (
    AccuracyReport,
    InvalidArgumentError,
    Prediction,
    calculate_accuracy_metrics,
    evaluate_samples,
)
from .batch import BatchComparison, analyze_batch, compare_batches, summarize
from .samples import DEMO_REVIEWS, SAMPLE_TEXTS, LabeledSample, read_texts

__all__ = [
    "AccuracyReport",
    "BatchComparison",
    "DEMO_REVIEWS",
    "InvalidArgumentError",
    "LabeledSample",
    "Prediction",
    "SAMPLE_TEXTS",
    "analyze_batch",
    "calculate_accuracy_metrics",
    "compare_batches",
    "evaluate_samples",
    "read_texts",
    "summarize",
]
