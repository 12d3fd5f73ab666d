from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from lexisent.core.models import SentimentLabel


@dataclass(frozen=True)
class LabeledSample:
    text: str
    label: SentimentLabel


def _samples(*pairs: tuple[str, str]) -> tuple[LabeledSample, ...]:
    return tuple(LabeledSample(text, SentimentLabel(label)) for text, label in pairs)


# Reference set for self-evaluation of the lexicon scorer
SAMPLE_TEXTS: tuple[LabeledSample, ...] = _samples(
    ("I absolutely love this product! Best purchase ever.", "positive"),
    ("Terrible experience. Would never recommend to anyone.", "negative"),
    ("The product is okay, nothing special.", "neutral"),
    ("Amazing customer service! They went above and beyond.", "positive"),
    ("Waste of money. Completely disappointed.", "negative"),
    ("It works as expected. Standard quality.", "neutral"),
    ("This exceeded all my expectations! Fantastic!", "positive"),
    ("Horrible quality. Broke after one day.", "negative"),
    ("Average product at an average price.", "neutral"),
    ("I'm so happy with this purchase. Highly recommend!", "positive"),
    ("Don't buy this. Total scam.", "negative"),
    ("It's fine for what it is.", "neutral"),
    ("Excellent quality and fast shipping!", "positive"),
    ("Arrived damaged and customer service was rude.", "negative"),
    ("Does the job. Nothing more, nothing less.", "neutral"),
    ("Best decision I ever made. Love it!", "positive"),
    ("Completely useless. Want my money back.", "negative"),
    ("Acceptable quality for the price.", "neutral"),
    ("Outstanding product! Will buy again.", "positive"),
    ("Very disappointing experience overall.", "negative"),
    ("Meets basic requirements.", "neutral"),
    ("I'm extremely satisfied with everything!", "positive"),
    ("Worst purchase ever. Avoid at all costs.", "negative"),
    ("Standard product, standard experience.", "neutral"),
    ("Perfect in every way. Couldn't be happier!", "positive"),
    ("Failed to work properly. Very frustrated.", "negative"),
    ("It's adequate for everyday use.", "neutral"),
    ("Wonderful experience from start to finish!", "positive"),
    ("Terrible quality and overpriced.", "negative"),
    ("Fair value for money.", "neutral"),
    ("This made my day! Absolutely brilliant!", "positive"),
    ("Complete waste of time and money.", "negative"),
    ("Regular product, works normally.", "neutral"),
    ("Exceptional service and quality!", "positive"),
    ("Never buying from here again. Awful.", "negative"),
    ("It's okay, does what it says.", "neutral"),
    ("I recommend this to everyone!", "positive"),
    ("Extremely poor quality. Very angry.", "negative"),
    ("Moderate quality at a moderate price.", "neutral"),
    ("Delighted with my purchase! Thank you!", "positive"),
    ("This is a disaster. Avoid.", "negative"),
    ("Basic functionality works fine.", "neutral"),
    ("Amazing! Beyond my expectations!", "positive"),
    ("Regret buying this. Very unhappy.", "negative"),
    ("Standard quality for the category.", "neutral"),
    ("Superb quality and great value!", "positive"),
    ("Broken on arrival. Terrible.", "negative"),
    ("Normal everyday product.", "neutral"),
    ("I'm impressed! Great job!", "positive"),
    ("Cheap and useless. Don't bother.", "negative"),
)

DEMO_REVIEWS: tuple[str, ...] = (
    "I absolutely love this product! Best purchase I've ever made.",
    "Terrible customer service. Waited for hours with no resolution.",
    "The product is okay, nothing special but gets the job done.",
    "Amazing experience! Will definitely recommend to friends.",
    "Very disappointed with the quality. Not worth the price.",
    "Fast shipping and exactly as described. Happy customer here!",
    "The app crashes constantly. Very frustrating user experience.",
    "Good value for money. Meets expectations.",
    "Outstanding support team! They went above and beyond.",
    "Wouldn't recommend. Poor packaging and arrived damaged.",
)


def read_texts(path: str | Path) -> list[str]:
    """Read texts from a file, one per non-blank line.

    Line endings are dropped, so a one-line file is a single text without its
    trailing newline.
    """
    content = Path(path).read_text(encoding="utf-8")
    return [line for line in content.splitlines() if line.strip()]
