from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from lexisent.analysis.accuracy import evaluate_samples
from lexisent.analysis.batch import analyze_batch, compare_batches
from lexisent.analysis.samples import DEMO_REVIEWS, SAMPLE_TEXTS, read_texts
from lexisent.config import Settings, get_settings
from lexisent.core.logger import get_logger, setup_logging
from lexisent.core.models import LABEL_ORDER, BatchResult, SentimentResult
from lexisent.data.export import export_csv, export_json
from lexisent.sentiment.lexicon import Lexicon, DEFAULT_LEXICON
from lexisent.sentiment.lexicon_scorer import LexiconSentiment

log = get_logger("lexisent")
console = Console()
cli_app = typer.Typer(add_completion=False, help="Lexicon-based sentiment analysis.")

_LABEL_STYLES = {"positive": "green", "negative": "red", "neutral": "yellow"}
_TREND_MARKS = {"up": "[green]▲[/green]", "down": "[red]▼[/red]", "flat": "[yellow]–[/yellow]"}


def _init() -> Settings:
    """Load settings and configure logging, exiting on invalid configuration."""
    try:
        settings = get_settings()
    except Exception as e:
        setup_logging("INFO")
        log.error(f"Configuration error: {e}")
        raise typer.Exit(code=1)
    setup_logging(settings.log_level, json_output=settings.log_json, log_file=settings.log_file or None)
    return settings


def _make_sentiment(settings: Settings) -> LexiconSentiment:
    """Create the scorer, loading a custom lexicon when one is configured."""
    lexicon = DEFAULT_LEXICON
    if settings.lexicon_path:
        lexicon = Lexicon.from_file(settings.lexicon_path)
        log.info(f"Using lexicon from {settings.lexicon_path}")
    return LexiconSentiment(
        lexicon=lexicon,
        max_keywords=settings.max_keywords,
        explanation_keywords=settings.explanation_keywords,
    )


def _styled(label: str) -> str:
    style = _LABEL_STYLES[label]
    return f"[{style}]{label}[/{style}]"


def _print_result(result: SentimentResult) -> None:
    console.print(f"Sentiment: {_styled(result.sentiment.value)}  Confidence: {result.confidence:.1%}")
    console.print(f"Satisfaction: {result.rating:.1f} / 5.0")
    console.print(result.explanation)
    if result.keywords:
        table = Table(title="Keywords", show_header=True)
        table.add_column("Word")
        table.add_column("Sentiment")
        table.add_column("Impact", justify="right")
        for k in result.keywords:
            table.add_row(k.word, _styled(k.sentiment.value), f"{k.impact:+.2f}")
        console.print(table)


def _print_batch(batch: BatchResult) -> None:
    s = batch.summary
    table = Table(title=f"{batch.name} ({len(batch.results)} texts)", show_header=True, header_style="bold magenta")
    table.add_column("#", justify="right")
    table.add_column("Text")
    table.add_column("Sentiment")
    table.add_column("Confidence", justify="right")
    table.add_column("Rating", justify="right")
    for i, r in enumerate(batch.results, start=1):
        text = r.text if len(r.text) <= 100 else r.text[:100] + "..."
        table.add_row(str(i), text, _styled(r.sentiment.value), f"{r.confidence:.1%}", f"{r.rating:.1f}")
    console.print(table)
    console.print(
        f"Positive: {s.positive}  Negative: {s.negative}  Neutral: {s.neutral}  "
        f"Average confidence: {s.average_confidence:.1%}"
    )


@cli_app.command()
def analyze(
    text: Optional[str] = typer.Argument(None, help="Text to analyze"),
    file: Optional[Path] = typer.Option(None, "--file", "-f", exists=True, readable=True, help="Read the text from a file"),
):
    """Analyze the sentiment of a single text."""
    settings = _init()

    if file is not None:
        text = file.read_text(encoding="utf-8")
    if text is None:
        log.error("Provide TEXT or --file")
        raise typer.Exit(code=1)

    word_count = len(text.split())
    if word_count > settings.max_words:
        log.error(f"Text has {word_count} words; the limit is {settings.max_words}")
        raise typer.Exit(code=1)

    try:
        scorer = _make_sentiment(settings)
    except Exception as e:
        log.error(f"Failed to load lexicon: {e}")
        raise typer.Exit(code=1)

    _print_result(scorer.analyze(text))


@cli_app.command()
def batch(
    file: Optional[Path] = typer.Argument(None, exists=True, readable=True, help="File with one text per line"),
    name: Optional[str] = typer.Option(None, "--name", help="Batch name (default: file name)"),
    demo: bool = typer.Option(False, "--demo", help="Analyze the built-in demo reviews"),
    export: Optional[str] = typer.Option(None, "--export", help="Export format: json or csv"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Export destination (default: stdout)"),
):
    """Analyze many texts as one batch."""
    settings = _init()

    if export is not None and export not in ("json", "csv"):
        log.error(f"Unsupported export format: {export}")
        raise typer.Exit(code=1)

    if demo:
        texts = list(DEMO_REVIEWS)
        batch_name = name or "Sample Reviews"
    elif file is not None:
        texts = read_texts(file)
        batch_name = name or file.stem
    else:
        log.error("Provide a FILE or --demo")
        raise typer.Exit(code=1)

    try:
        result = analyze_batch(texts, batch_name, client=_make_sentiment(settings))
    except Exception as e:
        log.error(f"Batch analysis failed: {e}")
        raise typer.Exit(code=1)

    if export is None:
        _print_batch(result)
        return

    payload = export_json(result) if export == "json" else export_csv(result)
    if output is None:
        typer.echo(payload)
    else:
        output.write_text(payload, encoding="utf-8")
        log.info(f"Wrote {export.upper()} export to {output}")


@cli_app.command()
def compare(
    first: Path = typer.Argument(..., exists=True, readable=True, help="First file, one text per line"),
    second: Path = typer.Argument(..., exists=True, readable=True, help="Second file, one text per line"),
):
    """Compare the sentiment distribution of two text files."""
    settings = _init()

    try:
        scorer = _make_sentiment(settings)
        b1 = analyze_batch(read_texts(first), first.stem, client=scorer)
        b2 = analyze_batch(read_texts(second), second.stem, client=scorer)
    except Exception as e:
        log.error(f"Comparison failed: {e}")
        raise typer.Exit(code=1)

    comparison = compare_batches(b1, b2, threshold=settings.trend_threshold)

    table = Table(title=f"{b1.name} vs {b2.name}", show_header=True)
    table.add_column("Sentiment")
    table.add_column(b1.name, justify="right")
    table.add_column(b2.name, justify="right")
    table.add_column("Change", justify="right")
    for label in LABEL_ORDER:
        table.add_row(
            _styled(label.value),
            str(b1.summary.count(label)),
            str(b2.summary.count(label)),
            f"{_TREND_MARKS[comparison.trend(label)]} {comparison.change(label):+.1f} pp",
        )
    console.print(table)


@cli_app.command()
def evaluate(
    show_errors: bool = typer.Option(False, "--show-errors", help="List misclassified samples"),
):
    """Measure accuracy against the built-in labeled sample set."""
    settings = _init()

    try:
        report = evaluate_samples(SAMPLE_TEXTS, client=_make_sentiment(settings))
    except Exception as e:
        log.error(f"Evaluation failed: {e}")
        raise typer.Exit(code=1)

    m = report.metrics
    console.print(f"Accuracy: {m.accuracy:.1%} ({len(report.predictions)} samples)")

    table = Table(title="Per-class metrics", show_header=True)
    table.add_column("Sentiment")
    table.add_column("Precision", justify="right")
    table.add_column("Recall", justify="right")
    table.add_column("F1", justify="right")
    for label in LABEL_ORDER:
        table.add_row(
            _styled(label.value),
            f"{m.precision[label]:.1%}",
            f"{m.recall[label]:.1%}",
            f"{m.f1_score[label]:.1%}",
        )
    console.print(table)

    matrix = Table(title="Confusion matrix (rows: actual, columns: predicted)", show_header=True)
    matrix.add_column("")
    for label in LABEL_ORDER:
        matrix.add_column(label.value, justify="right")
    for label, row in zip(LABEL_ORDER, m.confusion_matrix):
        matrix.add_row(label.value, *(str(n) for n in row))
    console.print(matrix)

    if show_errors:
        for p in report.misclassified:
            console.print(f"{_styled(p.predicted.value)} (expected {p.actual.value}): {p.text}")


@cli_app.command()
def validate():
    """Validate configuration without analyzing anything."""
    settings = _init()

    try:
        scorer = _make_sentiment(settings)
    except Exception as e:
        log.error(f"Configuration validation failed: {e}")
        raise typer.Exit(code=1)

    lex = scorer.lexicon
    log.info("Configuration validation passed!")
    log.info(f"  Lexicon: {settings.lexicon_path or 'built-in'}")
    log.info(
        f"  Words: positive={len(lex.positive)}, negative={len(lex.negative)}, neutral={len(lex.neutral)}"
    )
    log.info(f"  Keywords: max={settings.max_keywords}, in explanation={settings.explanation_keywords}")
    log.info(f"  Max words per text: {settings.max_words}")


if __name__ == "__main__":
    cli_app()
