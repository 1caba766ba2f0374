"""
Tests for cyclic oversampling.
"""

import pytest

from spambase_nb.error_handling import EmptyClassError
from spambase_nb.models.data_models import Label
from spambase_nb.services.class_balancer import ClassBalancer

from conftest import make_record


class TestOversample:
    """Tests for ClassBalancer.oversample."""

    @pytest.mark.parametrize("label", [Label.SPAM, Label.HAM])
    def test_length_and_purity(self, mixed_records, label):
        balanced = ClassBalancer().oversample(mixed_records, label)

        assert len(balanced) == len(mixed_records)
        assert all(record.label is label for record in balanced)

    def test_cycles_in_original_order(self, mixed_records):
        ham = [record for record in mixed_records if record.label is Label.HAM]
        balanced = ClassBalancer().oversample(mixed_records, Label.HAM)

        expected = [ham[i % 3] for i in range(10)]
        assert [id(r) for r in balanced] == [id(r) for r in expected]
        assert [r.features[0] for r in balanced[:4]] == [100.0, 101.0, 102.0, 100.0]

    def test_majority_class_is_not_truncated(self, mixed_records):
        balanced = ClassBalancer().oversample(mixed_records, Label.SPAM)
        spam = [record for record in mixed_records if record.label is Label.SPAM]

        assert balanced[:7] == spam
        assert balanced[7:] == spam[:3]

    def test_single_class_record(self):
        only = make_record(Label.SPAM, first=3.0)
        records = [only] + [make_record(Label.HAM) for _ in range(5)]

        balanced = ClassBalancer().oversample(records, Label.SPAM)
        assert balanced == [only] * 6

    def test_missing_class_raises(self):
        records = [make_record(Label.HAM) for _ in range(4)]
        with pytest.raises(EmptyClassError) as exc_info:
            ClassBalancer().oversample(records, Label.SPAM)

        assert exc_info.value.label is Label.SPAM
        assert exc_info.value.code == "EMPTY_CLASS"

    def test_empty_input_raises(self):
        with pytest.raises(EmptyClassError):
            ClassBalancer().oversample([], Label.HAM)


class TestBalance:
    """Tests for ClassBalancer.balance."""

    def test_balance_both_classes(self, mixed_records):
        balancer = ClassBalancer()
        spam, ham = balancer.balance(mixed_records)

        assert len(spam) == len(ham) == 10
        results = balancer.balancing_results
        assert results.original_distribution == {'spam': 7, 'ham': 3}
        assert results.balanced_distribution == {'spam': 10, 'ham': 10}
        assert results.duplicated_samples == 10
        assert results.target_length == 10

    def test_balance_fails_on_single_class(self):
        records = [make_record(Label.SPAM) for _ in range(3)]
        with pytest.raises(EmptyClassError) as exc_info:
            ClassBalancer().balance(records)

        assert exc_info.value.label is Label.HAM
