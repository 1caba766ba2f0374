"""
Hold-out splitting of a dataset into adjust, validation and test subsets.
"""
import math
import logging
from dataclasses import dataclass
from typing import List, Sequence

import numpy as np

from spambase_nb.error_handling import ConfigurationError
from spambase_nb.models.data_models import Record

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HoldoutRatios:
    """Fractions of the dataset assigned to the adjust, validation and test subsets."""
    adjust: float = 0.8
    validation: float = 0.1
    test: float = 0.1

    def __post_init__(self):
        if min(self.adjust, self.validation, self.test) < 0:
            raise ConfigurationError("Holdout ratios must be non-negative", 'ratios')
        total = self.adjust + self.validation + self.test
        if abs(total - 1.0) > 1e-9:
            raise ConfigurationError(f"Holdout ratios must sum to 1.0, got {total}", 'ratios')


@dataclass
class DatasetSplit:
    """The three disjoint hold-out subsets."""
    adjust: List[Record]
    validation: List[Record]
    test: List[Record]

    @property
    def sizes(self):
        return len(self.adjust), len(self.validation), len(self.test)

    def __len__(self) -> int:
        return sum(self.sizes)


def round_half_away(value: float) -> int:
    """Round to the nearest integer, halves away from zero (2.5 -> 3, -2.5 -> -3)."""
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def split_dataset(records: Sequence[Record],
                  rng: np.random.Generator,
                  ratios: HoldoutRatios = HoldoutRatios()) -> DatasetSplit:
    """
    Shuffle records and partition them into adjust, validation and test subsets.

    The training region is the first round(N * (adjust + validation)) shuffled
    records and the adjust subset its first round(N * adjust) records. The test
    subset is everything after the training region, so it absorbs any rounding
    remainder.

    Args:
        records: Full dataset
        rng: Source of randomness for the shuffle
        ratios: Subset fractions

    Returns:
        DatasetSplit with the three subsets
    """
    data_size = len(records)
    order = rng.permutation(data_size)
    shuffled = [records[i] for i in order]

    training_size = min(round_half_away(data_size * (ratios.adjust + ratios.validation)), data_size)
    adjust_size = min(round_half_away(data_size * ratios.adjust), training_size)

    training_region, test = shuffled[:training_size], shuffled[training_size:]
    adjust, validation = training_region[:adjust_size], training_region[adjust_size:]

    split = DatasetSplit(adjust, validation, test)
    logger.info(f"Hold-out distribution: {split.sizes}")
    return split
