"""
Estimation of per-feature Gaussian distributions for one class.
"""
import logging
from typing import Sequence

import numpy as np

from spambase_nb.error_handling import DimensionMismatchError, EmptyInputError
from spambase_nb.models.data_models import (
    FEATURE_COUNT, ClassModel, FeatureDistribution, Label, Record
)


class DistributionTrainer:
    """
    Fits one univariate Gaussian per feature from a class-pure record sequence.

    Means are sample means and standard deviations are population standard
    deviations (denominator = number of records). Both parameters are floored
    at ``parameter_floor``; with ``clamp_mean=False`` only the standard
    deviation is floored and negative or zero means are kept as estimated.
    """

    def __init__(self,
                 feature_count: int = FEATURE_COUNT,
                 parameter_floor: float = 1e-31,
                 clamp_mean: bool = True):
        self.feature_count = feature_count
        self.parameter_floor = parameter_floor
        self.clamp_mean = clamp_mean
        self.logger = logging.getLogger(__name__)

    def train(self, records: Sequence[Record], label: Label) -> ClassModel:
        """
        Estimate a ClassModel from records.

        Args:
            records: Non-empty sequence of records, usually one oversampled class
            label: Class the model represents

        Returns:
            ClassModel with ``feature_count`` distributions

        Raises:
            EmptyInputError: ``records`` is empty
            DimensionMismatchError: A record does not have ``feature_count`` features
        """
        if len(records) == 0:
            raise EmptyInputError(f"{label.value} training data")

        matrix = self._feature_matrix(records)

        means = matrix.mean(axis=0)
        std_devs = matrix.std(axis=0, ddof=0)

        std_devs = np.maximum(std_devs, self.parameter_floor)
        if self.clamp_mean:
            means = np.maximum(means, self.parameter_floor)

        distributions = [
            FeatureDistribution(float(mean), float(std_dev))
            for mean, std_dev in zip(means, std_devs)
        ]

        self.logger.info(f"Trained {label.value} model on {len(records)} records")
        self.logger.debug(f"{label.value} means: {means.tolist()}")
        self.logger.debug(f"{label.value} standard deviations: {std_devs.tolist()}")

        return ClassModel(
            label=label,
            distributions=tuple(distributions),
            sample_count=len(records),
            feature_count=self.feature_count
        )

    def _feature_matrix(self, records: Sequence[Record]) -> np.ndarray:
        for record in records:
            if len(record.features) != self.feature_count:
                raise DimensionMismatchError(self.feature_count, len(record.features))

        return np.array([record.features.values for record in records], dtype=np.float64)
