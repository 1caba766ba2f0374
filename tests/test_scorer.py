"""
Tests for log-likelihood scoring.
"""

import math

import pytest

from spambase_nb.error_handling import DimensionMismatchError
from spambase_nb.models.data_models import (
    FEATURE_COUNT, ClassModel, FeatureDistribution, FeatureVector, Label
)
from spambase_nb.services.scorer import Scorer, log_likelihood

from conftest import make_record


def _model(mean=0.0, std_dev=1.0, first=None, feature_count=FEATURE_COUNT):
    distributions = [FeatureDistribution(mean, std_dev) for _ in range(feature_count)]
    if first is not None:
        distributions[0] = first
    return ClassModel(Label.SPAM, tuple(distributions), feature_count=feature_count)


class TestLogLikelihood:
    """Tests for log_likelihood."""

    def test_matches_sum_of_log_densities(self):
        model = _model(first=FeatureDistribution(2.0, 0.5))
        record = make_record(Label.SPAM, first=2.5, rest=1.0)

        expected = math.log(FeatureDistribution(2.0, 0.5).pdf(2.5))
        expected += (FEATURE_COUNT - 1) * math.log(FeatureDistribution(0.0, 1.0).pdf(1.0))
        assert log_likelihood(record.features, model) == pytest.approx(expected)

    def test_is_deterministic(self, mixed_records):
        model = _model(mean=0.3, std_dev=2.0)
        for record in mixed_records:
            assert log_likelihood(record.features, model) == log_likelihood(record.features, model)

    def test_density_is_floored(self):
        model = _model(mean=1e-31, std_dev=1e-31)
        record = make_record(Label.HAM, first=1.0, rest=1.0)

        assert log_likelihood(record.features, model) == pytest.approx(FEATURE_COUNT * math.log(1e-32))

    def test_huge_distance_stays_finite(self):
        model = _model(mean=1e-31, std_dev=1e-31)
        record = make_record(Label.HAM, first=1e300, rest=-1e300)

        score = log_likelihood(record.features, model)
        assert math.isfinite(score)
        assert score == pytest.approx(FEATURE_COUNT * math.log(1e-32))

    def test_custom_density_floor(self):
        model = _model(mean=0.0, std_dev=1e-31)
        record = make_record(Label.HAM, first=1.0, rest=1.0)

        assert log_likelihood(record.features, model, density_floor=1e-10) == pytest.approx(
            FEATURE_COUNT * math.log(1e-10)
        )

    @pytest.mark.parametrize("std_dev", [0.1, 1.0, 7.5])
    def test_monotonic_in_distance_from_mean(self, std_dev):
        model = _model(first=FeatureDistribution(5.0, std_dev))
        scores = [
            log_likelihood(make_record(Label.SPAM, first=5.0 + offset).features, model)
            for offset in (0.0, 0.1, 0.5, 1.0, 3.0, 10.0, 100.0)
        ]

        assert all(later <= earlier for earlier, later in zip(scores, scores[1:]))
        below = log_likelihood(make_record(Label.SPAM, first=4.0).features, model)
        above = log_likelihood(make_record(Label.SPAM, first=6.0).features, model)
        assert below == pytest.approx(above)

    def test_dimension_mismatch(self):
        model = _model(feature_count=3)
        with pytest.raises(DimensionMismatchError):
            log_likelihood(make_record(Label.SPAM).features, model)

        with pytest.raises(DimensionMismatchError):
            log_likelihood(FeatureVector([0.0, 0.0], 2), model)


class TestScorer:
    """Tests for the Scorer wrapper."""

    def test_uses_configured_floor(self):
        model = _model(mean=0.0, std_dev=1e-31)
        features = make_record(Label.HAM, first=1.0, rest=1.0).features
        scorer = Scorer(density_floor=1e-5)

        assert scorer(features, model) == scorer.score(features, model)
        assert scorer(features, model) == pytest.approx(FEATURE_COUNT * math.log(1e-5))
