from __future__ import annotations

import json
import math
from typing import Any

import pandas as pd

from lexisent.analysis.batch import summarize
from lexisent.core.logger import get_logger
from lexisent.core.models import (
    LABEL_ORDER,
    BatchResult,
    BatchSummary,
    Keyword,
    SentimentLabel,
    SentimentResult,
)
from lexisent.core.timeutils import iso, parse_iso

log = get_logger("export")

CSV_COLUMNS = ["Text", "Sentiment", "Confidence", "Keywords", "Explanation"]


class ExportFormatError(ValueError):
    """Raised when an exported payload cannot be parsed back."""
    pass


def keyword_to_dict(k: Keyword) -> dict[str, Any]:
    return {"word": k.word, "sentiment": k.sentiment.value, "impact": k.impact}


def result_to_dict(r: SentimentResult) -> dict[str, Any]:
    return {
        "id": r.id,
        "text": r.text,
        "sentiment": r.sentiment.value,
        "confidence": r.confidence,
        "keywords": [keyword_to_dict(k) for k in r.keywords],
        "explanation": r.explanation,
        "timestamp": iso(r.timestamp),
    }


def batch_to_dict(batch: BatchResult) -> dict[str, Any]:
    """Interchange form of a batch, with camelCase keys."""
    s = batch.summary
    return {
        "id": batch.id,
        "name": batch.name,
        "createdAt": iso(batch.created_at),
        "summary": {
            "positive": s.positive,
            "negative": s.negative,
            "neutral": s.neutral,
            "averageConfidence": s.average_confidence,
        },
        "results": [result_to_dict(r) for r in batch.results],
    }


def _label(value: Any) -> SentimentLabel:
    try:
        return SentimentLabel(value)
    except ValueError as e:
        raise ExportFormatError(f"Unknown sentiment label: {value!r}") from e


def _bounded(name: str, value: Any, low: float, high: float) -> float:
    number = float(value)
    if not low <= number <= high:
        raise ExportFormatError(f"{name} {number} is outside [{low:g}, {high:g}]")
    return number


def keyword_from_dict(data: dict[str, Any]) -> Keyword:
    return Keyword(
        word=data["word"],
        sentiment=_label(data["sentiment"]),
        impact=_bounded("Keyword impact", data["impact"], -1.0, 1.0),
    )


def result_from_dict(data: dict[str, Any]) -> SentimentResult:
    try:
        return SentimentResult(
            id=data["id"],
            text=data["text"],
            sentiment=_label(data["sentiment"]),
            confidence=_bounded("Confidence", data["confidence"], 0.0, 1.0),
            keywords=tuple(keyword_from_dict(k) for k in data["keywords"]),
            explanation=data["explanation"],
            timestamp=parse_iso(data["timestamp"]),
        )
    except ExportFormatError:
        raise
    except KeyError as e:
        raise ExportFormatError(f"Result is missing field {e}") from e
    except (TypeError, ValueError) as e:
        raise ExportFormatError(f"Invalid result field: {e}") from e


def _check_summary(summary: BatchSummary, results: tuple[SentimentResult, ...]) -> None:
    """Reject a summary that does not describe its results."""
    if summary.total != len(results):
        raise ExportFormatError(
            f"Summary counts {summary.total} texts but the batch has {len(results)} results"
        )
    expected = summarize(results)
    for label in LABEL_ORDER:
        if summary.count(label) != expected.count(label):
            raise ExportFormatError(
                f"Summary has {summary.count(label)} {label.value} results, "
                f"results have {expected.count(label)}"
            )
    if not math.isclose(summary.average_confidence, expected.average_confidence, abs_tol=1e-9):
        raise ExportFormatError(
            f"Summary average confidence {summary.average_confidence} does not match "
            f"results ({expected.average_confidence})"
        )


def batch_from_dict(data: dict[str, Any]) -> BatchResult:
    try:
        summary = data["summary"]
        results = tuple(result_from_dict(r) for r in data["results"])
        batch = BatchResult(
            id=data["id"],
            name=data["name"],
            created_at=parse_iso(data["createdAt"]),
            summary=BatchSummary(
                positive=int(summary["positive"]),
                negative=int(summary["negative"]),
                neutral=int(summary["neutral"]),
                average_confidence=float(summary["averageConfidence"]),
            ),
            results=results,
        )
    except ExportFormatError:
        raise
    except KeyError as e:
        raise ExportFormatError(f"Batch is missing field {e}") from e
    except (TypeError, ValueError) as e:
        raise ExportFormatError(f"Invalid batch field: {e}") from e

    _check_summary(batch.summary, batch.results)
    return batch


def export_json(batch: BatchResult) -> str:
    return json.dumps(batch_to_dict(batch), indent=2, ensure_ascii=False)


def load_json(payload: str) -> BatchResult:
    """Parse a batch previously written by ``export_json``.

    Raises:
        ExportFormatError: payload is not valid JSON, lacks required fields,
            or holds values the scorer could not have produced
    """
    try:
        data = json.loads(payload)
    except json.JSONDecodeError as e:
        raise ExportFormatError(f"Invalid JSON: {e}") from e
    if not isinstance(data, dict):
        raise ExportFormatError("Batch payload must be a JSON object")
    return batch_from_dict(data)


def batch_to_frame(batch: BatchResult) -> pd.DataFrame:
    """One row per result, in batch order."""
    if not batch.results:
        return pd.DataFrame(columns=["id", "text", "sentiment", "confidence", "keywords", "explanation", "timestamp"])

    return pd.DataFrame(
        [
            {
                "id": r.id,
                "text": r.text,
                "sentiment": r.sentiment.value,
                "confidence": r.confidence,
                "keywords": ", ".join(k.word for k in r.keywords),
                "explanation": r.explanation,
                "timestamp": r.timestamp,
            }
            for r in batch.results
        ]
    )


def export_csv(batch: BatchResult) -> str:
    """CSV with confidence as a percentage (two decimals)."""
    df = batch_to_frame(batch)
    out = pd.DataFrame(
        {
            "Text": df["text"],
            "Sentiment": df["sentiment"],
            "Confidence": [f"{c * 100:.2f}" for c in df["confidence"]],
            "Keywords": df["keywords"],
            "Explanation": df["explanation"],
        },
        columns=CSV_COLUMNS,
    )
    log.debug(f"Exported {len(out)} rows of batch '{batch.name}' to CSV")
    return out.to_csv(index=False, lineterminator="\n")
