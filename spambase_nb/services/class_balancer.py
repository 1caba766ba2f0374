"""
Class balancing component for handling imbalanced training data.

This module provides the ClassBalancer component that equalizes per-class
training volume by cyclically repeating each class's records until they fill
the length of the adjust subset. No majority-class data is discarded; the
minority class is duplicate-weighted instead.
"""
import logging
import time
from dataclasses import dataclass
from typing import Dict, List, Sequence, Tuple

from spambase_nb.error_handling import EmptyClassError
from spambase_nb.models.data_models import Label, Record


@dataclass
class BalancingResults:
    """Results from class balancing operations."""
    original_distribution: Dict[str, int]
    balanced_distribution: Dict[str, int]
    duplicated_samples: int
    target_length: int
    processing_time: float


class ClassBalancer:
    """
    Produces equal-length, class-pure training sequences by cyclic oversampling.
    """

    def __init__(self):
        self.logger = logging.getLogger(__name__)
        self.balancing_results = None

    def class_distribution(self, records: Sequence[Record]) -> Dict[str, int]:
        """Count records per label."""
        distribution = {label.value: 0 for label in Label}
        for record in records:
            distribution[record.label.value] += 1
        return distribution

    def oversample(self, records: Sequence[Record], label: Label) -> List[Record]:
        """
        Cycle through the records of one label until len(records) are collected.

        Relative order is preserved within each cycle.

        Args:
            records: Adjust subset, both labels mixed
            label: Label to keep

        Returns:
            List of exactly len(records) records, all labeled ``label``

        Raises:
            EmptyClassError: No record in ``records`` carries ``label``
        """
        class_records = [record for record in records if record.label is label]
        if not class_records:
            raise EmptyClassError(label)

        target_length = len(records)
        class_size = len(class_records)
        return [class_records[i % class_size] for i in range(target_length)]

    def balance(self, records: Sequence[Record]) -> Tuple[List[Record], List[Record]]:
        """
        Oversample both classes of the adjust subset.

        Args:
            records: Adjust subset

        Returns:
            Tuple of (spam_records, ham_records), each of length len(records)
        """
        start_time = time.time()

        original_distribution = self.class_distribution(records)
        self.logger.info(f"Current class distribution: {original_distribution}")

        spam_records = self.oversample(records, Label.SPAM)
        ham_records = self.oversample(records, Label.HAM)

        balanced_distribution = {
            Label.SPAM.value: len(spam_records),
            Label.HAM.value: len(ham_records)
        }
        duplicated = sum(balanced_distribution.values()) - sum(original_distribution.values())

        self.balancing_results = BalancingResults(
            original_distribution=original_distribution,
            balanced_distribution=balanced_distribution,
            duplicated_samples=duplicated,
            target_length=len(records),
            processing_time=time.time() - start_time
        )

        self.logger.info(f"Balanced class distribution: {balanced_distribution}")
        self.logger.info(f"Duplicated samples: {duplicated}")

        return spam_records, ham_records
