from __future__ import annotations

from dataclasses import dataclass, field

from lexisent.core.logger import get_logger
from lexisent.core.models import Keyword, SentimentLabel, SentimentResult
from lexisent.sentiment.base import SentimentClient
from lexisent.sentiment.lexicon import DEFAULT_LEXICON, Lexicon, clean_word

log = get_logger("scorer")

INTENSIFIER_MULTIPLIER = 1.5

NO_SIGNAL_EXPLANATION = "No strong sentiment indicators were found in the text."
NEUTRAL_EXPLANATION = (
    "This text is relatively neutral or balanced. It may contain mixed sentiments "
    "or lack strong emotional indicators."
)
_POLAR_EXPLANATION = (
    "This text expresses {label} sentiment. Key indicators include: {indicators}. "
    "The language suggests {tone}."
)
_TONES = {
    SentimentLabel.POSITIVE: "satisfaction, approval, or enthusiasm",
    SentimentLabel.NEGATIVE: "dissatisfaction, criticism, or frustration",
}


@dataclass
class _Tally:
    positive: float = 0.0
    negative: float = 0.0
    neutral: float = 0.0
    keywords: list[Keyword] = field(default_factory=list)

    @property
    def total(self) -> float:
        return self.positive + self.negative + self.neutral


class LexiconSentiment(SentimentClient):
    """Rule-based scorer over a fixed lexicon.

    Negation and intensifier markers only affect the next scorable token:
    both flags are cleared after every token that is not itself a marker,
    whether or not that token is in the lexicon.

    Usage:
        scorer = LexiconSentiment()
        result = scorer.analyze("Not good at all")
        print(result.sentiment, result.confidence)
    """

    def __init__(
        self,
        lexicon: Lexicon = DEFAULT_LEXICON,
        max_keywords: int = 5,
        explanation_keywords: int = 3,
    ):
        if max_keywords < 1 or explanation_keywords < 1:
            raise ValueError("max_keywords and explanation_keywords must be >= 1")
        self.lexicon = lexicon
        self.max_keywords = max_keywords
        self.explanation_keywords = explanation_keywords

    def _tally(self, text: str) -> _Tally:
        lex = self.lexicon
        tally = _Tally()
        negation_active = False
        intensifier_active = False

        for token in text.lower().split():
            word = clean_word(token)

            if word in lex.negations:
                negation_active = True
                continue
            if word in lex.intensifiers:
                intensifier_active = True
                continue

            multiplier = INTENSIFIER_MULTIPLIER if intensifier_active else 1.0

            if word in lex.positive:
                if negation_active:
                    tally.negative += 1 * multiplier
                    tally.keywords.append(Keyword(word, SentimentLabel.NEGATIVE, -0.5 * multiplier))
                else:
                    tally.positive += 1 * multiplier
                    tally.keywords.append(Keyword(word, SentimentLabel.POSITIVE, 0.5 * multiplier))
            elif word in lex.negative:
                if negation_active:
                    tally.positive += 0.5 * multiplier
                    tally.keywords.append(Keyword(word, SentimentLabel.POSITIVE, 0.3 * multiplier))
                else:
                    tally.negative += 1 * multiplier
                    tally.keywords.append(Keyword(word, SentimentLabel.NEGATIVE, -0.5 * multiplier))
            elif word in lex.neutral:
                tally.neutral += 1
                tally.keywords.append(Keyword(word, SentimentLabel.NEUTRAL, 0.0))

            negation_active = False
            intensifier_active = False

        return tally

    def _explain(self, label: SentimentLabel, keywords: list[Keyword]) -> str:
        # Detection order, not impact order
        words = [k.word for k in keywords if k.sentiment == label][: self.explanation_keywords]
        return _POLAR_EXPLANATION.format(
            label=label.value,
            indicators=", ".join(words) or f"general {label.value} tone",
            tone=_TONES[label],
        )

    def analyze(self, text: str) -> SentimentResult:
        """Score a piece of text.

        Never raises; empty or whitespace-only text is neutral with 0.5
        confidence.
        """
        tally = self._tally(text)
        total = tally.total

        if total == 0:
            label = SentimentLabel.NEUTRAL
            confidence = 0.5
            explanation = NO_SIGNAL_EXPLANATION
        else:
            positive_ratio = tally.positive / total
            negative_ratio = tally.negative / total
            neutral_ratio = tally.neutral / total

            # Ties fall through to neutral
            if positive_ratio > negative_ratio and positive_ratio > neutral_ratio:
                label = SentimentLabel.POSITIVE
                confidence = min(0.95, 0.5 + positive_ratio * 0.5)
                explanation = self._explain(label, tally.keywords)
            elif negative_ratio > positive_ratio and negative_ratio > neutral_ratio:
                label = SentimentLabel.NEGATIVE
                confidence = min(0.95, 0.5 + negative_ratio * 0.5)
                explanation = self._explain(label, tally.keywords)
            else:
                label = SentimentLabel.NEUTRAL
                confidence = min(0.9, 0.5 + neutral_ratio * 0.4)
                explanation = NEUTRAL_EXPLANATION

        # sorted() is stable, so equal impacts keep detection order
        keywords = sorted(tally.keywords, key=lambda k: abs(k.impact), reverse=True)

        result = SentimentResult(
            text=text,
            sentiment=label,
            confidence=confidence,
            keywords=tuple(keywords[: self.max_keywords]),
            explanation=explanation,
        )
        log.debug(
            f"Sentiment: {label.value} ({confidence:.2f}) for: {text[:50]}",
            extra={"result_id": result.id, "sentiment": label.value},
        )
        return result


_default_scorer = LexiconSentiment()


def analyze_sentiment(text: str) -> SentimentResult:
    """Score text with the built-in lexicon."""
    return _default_scorer.analyze(text)
