"""Tests for accuracy metrics and the self-evaluation run."""
import math

import pytest

from lexisent.analysis.accuracy import (
    InvalidArgumentError,
    calculate_accuracy_metrics,
    evaluate_samples,
)
from lexisent.analysis.samples import SAMPLE_TEXTS, LabeledSample
from lexisent.core.models import LABEL_ORDER, SentimentLabel

POS = SentimentLabel.POSITIVE
NEG = SentimentLabel.NEGATIVE
NEU = SentimentLabel.NEUTRAL


class TestCalculateAccuracyMetrics:
    """Tests for calculate_accuracy_metrics."""

    def test_perfect_predictions(self):
        """Test that identical sequences score 1.0 everywhere."""
        labels = [POS, NEG, NEU, POS]
        m = calculate_accuracy_metrics(labels, labels)

        assert m.accuracy == 1.0
        assert m.confusion_matrix == [[2, 0, 0], [0, 1, 0], [0, 0, 1]]
        for label in LABEL_ORDER:
            assert m.precision[label] == 1.0
            assert m.recall[label] == 1.0
            assert m.f1_score[label] == 1.0

    def test_matrix_is_actual_by_predicted(self):
        """Test the matrix orientation."""
        m = calculate_accuracy_metrics(predicted=[NEU], actual=[POS])

        assert m.confusion_matrix == [[0, 0, 1], [0, 0, 0], [0, 0, 0]]

    def test_mixed_predictions(self):
        """Test precision, recall and F1 for a known matrix."""
        predicted = [POS, POS, NEG, NEU, NEU, POS]
        actual = [POS, NEG, NEG, NEU, POS, POS]
        m = calculate_accuracy_metrics(predicted, actual)

        assert m.confusion_matrix == [[2, 0, 1], [1, 1, 0], [0, 0, 1]]
        assert m.accuracy == pytest.approx(4 / 6)
        assert m.precision[POS] == pytest.approx(2 / 3)
        assert m.recall[POS] == pytest.approx(2 / 3)
        assert m.precision[NEG] == pytest.approx(1.0)
        assert m.recall[NEG] == pytest.approx(0.5)
        assert m.f1_score[NEG] == pytest.approx(2 / 3)
        assert m.precision[NEU] == pytest.approx(0.5)
        assert m.recall[NEU] == pytest.approx(1.0)

    def test_zero_denominators(self):
        """Test that absent classes report 0 instead of NaN."""
        m = calculate_accuracy_metrics([POS, POS], [NEG, NEG])

        assert m.accuracy == 0.0
        for label in LABEL_ORDER:
            for metric in (m.precision, m.recall, m.f1_score):
                assert metric[label] == 0.0
                assert not math.isnan(metric[label])

    def test_empty_inputs(self):
        """Test that empty sequences give all-zero metrics."""
        m = calculate_accuracy_metrics([], [])

        assert m.accuracy == 0.0
        assert m.confusion_matrix == [[0, 0, 0], [0, 0, 0], [0, 0, 0]]

    def test_accepts_label_strings(self):
        """Test that plain label strings are accepted."""
        m = calculate_accuracy_metrics(["positive", "neutral"], ["positive", "negative"])

        assert m.confusion_matrix == [[1, 0, 0], [0, 0, 1], [0, 0, 0]]

    def test_length_mismatch(self):
        """Test that mismatched lengths are rejected."""
        with pytest.raises(InvalidArgumentError, match="same length"):
            calculate_accuracy_metrics([POS, NEG], [POS])

    def test_unknown_label(self):
        """Test that unknown labels are rejected."""
        with pytest.raises(InvalidArgumentError):
            calculate_accuracy_metrics(["happy"], ["positive"])

    def test_matrix_total_matches_length(self):
        """Test the matrix-sum invariant."""
        predicted = [POS, NEG, NEU] * 7
        actual = [NEU, NEG, POS] * 7
        m = calculate_accuracy_metrics(predicted, actual)

        assert sum(sum(row) for row in m.confusion_matrix) == len(predicted)
        trace = sum(m.confusion_matrix[i][i] for i in range(3))
        assert m.accuracy == pytest.approx(trace / len(predicted))

    def test_plain_python_types(self):
        """Test that results are plain ints and floats."""
        m = calculate_accuracy_metrics([POS], [POS])

        assert type(m.accuracy) is float
        assert type(m.confusion_matrix[0][0]) is int


class TestEvaluateSamples:
    """Tests for the sample-set evaluation run."""

    def test_sample_set_shape(self):
        """Test the reference sample set."""
        assert len(SAMPLE_TEXTS) == 50
        labels = [s.label for s in SAMPLE_TEXTS]
        assert labels.count(POS) == 17
        assert labels.count(NEG) == 17
        assert labels.count(NEU) == 16

    def test_reference_evaluation(self):
        """Test the deterministic outcome on the reference set."""
        report = evaluate_samples(SAMPLE_TEXTS)
        m = report.metrics

        assert m.confusion_matrix == [[17, 0, 0], [0, 15, 2], [0, 0, 16]]
        assert m.accuracy == pytest.approx(48 / 50)
        assert m.precision[NEU] == pytest.approx(16 / 18)
        assert m.recall[NEG] == pytest.approx(15 / 17)

    def test_misclassified(self):
        """Test that the two missed negatives are reported."""
        report = evaluate_samples(SAMPLE_TEXTS)

        assert [p.text for p in report.misclassified] == [
            "Horrible quality. Broke after one day.",
            "Don't buy this. Total scam.",
        ]
        assert all(p.predicted == NEU for p in report.misclassified)

    def test_accuracy_is_trace_over_total(self):
        """Test that accuracy agrees with the matrix it came from."""
        report = evaluate_samples(SAMPLE_TEXTS)
        matrix = report.metrics.confusion_matrix

        assert report.metrics.accuracy == pytest.approx(sum(matrix[i][i] for i in range(3)) / 50)

    def test_custom_samples(self, tiny_lexicon):
        """Test evaluation with a swapped scorer."""
        from lexisent.sentiment.lexicon_scorer import LexiconSentiment

        samples = [LabeledSample("sunny", POS), LabeledSample("rainy", POS)]
        report = evaluate_samples(samples, client=LexiconSentiment(lexicon=tiny_lexicon))

        assert report.metrics.accuracy == pytest.approx(0.5)
        assert [p.correct for p in report.predictions] == [True, False]
