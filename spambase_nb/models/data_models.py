"""
Data models for the Spambase Naive Bayes classifier.
"""
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Dict, Any, List, Sequence, Tuple

import numpy as np
from scipy.stats import norm

from spambase_nb.error_handling import (
    DimensionMismatchError, InvalidDistributionError, InvalidLabelError
)

FEATURE_COUNT = 57


class Label(Enum):
    """Ground-truth class of an email."""
    SPAM = "spam"
    HAM = "ham"

    @property
    def index(self) -> int:
        """Position of the label on both confusion matrix axes."""
        return 0 if self is Label.SPAM else 1

    @classmethod
    def from_field(cls, raw_value: str) -> 'Label':
        """Parse the Spambase label field ("1" is spam, "0" is ham)."""
        if raw_value == "1":
            return cls.SPAM
        if raw_value == "0":
            return cls.HAM
        raise InvalidLabelError(raw_value)


class FeatureVector:
    """
    Immutable, fixed-length vector of email features.

    Indexing is bounds-checked: any index outside [0, len) raises IndexError,
    negative indices included.
    """

    __slots__ = ('_values',)

    def __init__(self, values: Sequence[float], feature_count: int = FEATURE_COUNT):
        values = tuple(float(value) for value in values)
        if len(values) != feature_count:
            raise DimensionMismatchError(feature_count, len(values))
        self._values = values

    def __len__(self) -> int:
        return len(self._values)

    def __getitem__(self, index: int) -> float:
        if not 0 <= index < len(self._values):
            raise IndexError(f"feature index {index} out of range for {len(self._values)} features")
        return self._values[index]

    def __iter__(self):
        return iter(self._values)

    def __eq__(self, other) -> bool:
        if not isinstance(other, FeatureVector):
            return NotImplemented
        return self._values == other._values

    def __hash__(self) -> int:
        return hash(self._values)

    def __repr__(self) -> str:
        return f"FeatureVector({list(self._values)!r})"

    @property
    def values(self) -> Tuple[float, ...]:
        return self._values

    def as_array(self) -> np.ndarray:
        """Return a read-only numpy copy of the features."""
        array = np.array(self._values, dtype=np.float64)
        array.flags.writeable = False
        return array


@dataclass(frozen=True, eq=False)
class Record:
    """One labeled observation."""
    features: FeatureVector
    label: Label


@dataclass(frozen=True)
class FeatureDistribution:
    """
    Univariate Gaussian for one feature of one class.

    The mean must be finite and the standard deviation finite and strictly
    positive, otherwise the density is undefined.
    """
    mean: float
    std_dev: float

    def __post_init__(self):
        if not (math.isfinite(self.mean) and math.isfinite(self.std_dev) and self.std_dev > 0):
            raise InvalidDistributionError(self.mean, self.std_dev)

    def pdf(self, x: float) -> float:
        return float(norm.pdf(x, loc=self.mean, scale=self.std_dev))


@dataclass(frozen=True)
class ClassModel:
    """
    Per-feature Gaussian parameters representing one class.

    Attributes:
        label: Class this model was trained for
        distributions: One distribution per feature, index-aligned with FeatureVector
        sample_count: Number of (possibly oversampled) records the model was estimated from
        means: Read-only array of the distribution means
        std_devs: Read-only array of the distribution standard deviations
    """
    label: Label
    distributions: Tuple[FeatureDistribution, ...]
    sample_count: int = 0
    feature_count: int = FEATURE_COUNT
    means: np.ndarray = field(init=False, repr=False, compare=False)
    std_devs: np.ndarray = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, 'distributions', tuple(self.distributions))
        if len(self.distributions) != self.feature_count:
            raise DimensionMismatchError(self.feature_count, len(self.distributions), "class model")

        means = np.array([d.mean for d in self.distributions], dtype=np.float64)
        std_devs = np.array([d.std_dev for d in self.distributions], dtype=np.float64)
        means.flags.writeable = False
        std_devs.flags.writeable = False
        object.__setattr__(self, 'means', means)
        object.__setattr__(self, 'std_devs', std_devs)

    def __len__(self) -> int:
        return len(self.distributions)

    def __getitem__(self, index: int) -> FeatureDistribution:
        return self.distributions[index]


class ConfusionMatrix:
    """
    2x2 table of actual-vs-predicted label counts.

    Rows are the actual label and columns the predicted label, both in the
    order (SPAM, HAM). Cells only ever grow through ``increment``.
    """

    LABELS = (Label.SPAM, Label.HAM)

    def __init__(self):
        self._counts = np.zeros((2, 2), dtype=np.int64)

    def increment(self, actual: Label, predicted: Label) -> None:
        self._counts[actual.index, predicted.index] += 1

    def cell(self, actual: Label, predicted: Label) -> int:
        return int(self._counts[actual.index, predicted.index])

    @property
    def counts(self) -> np.ndarray:
        """Copy of the underlying 2x2 count array."""
        return self._counts.copy()

    @property
    def total(self) -> int:
        return int(self._counts.sum())

    @property
    def correct(self) -> int:
        return int(np.trace(self._counts))

    @property
    def incorrect(self) -> int:
        return self.total - self.correct

    @property
    def accuracy(self) -> Optional[float]:
        """Trace over total, or None when nothing was evaluated."""
        if self.total == 0:
            return None
        return self.correct / self.total

    @property
    def error_rate(self) -> Optional[float]:
        """Off-diagonal sum over total, or None when nothing was evaluated."""
        if self.total == 0:
            return None
        return self.incorrect / self.total

    def to_list(self) -> List[List[int]]:
        return self._counts.tolist()

    def __eq__(self, other) -> bool:
        if not isinstance(other, ConfusionMatrix):
            return NotImplemented
        return np.array_equal(self._counts, other._counts)

    def __repr__(self) -> str:
        return f"ConfusionMatrix({self.to_list()!r})"

    def __str__(self) -> str:
        width = max(len(str(self._counts.max())), 4)
        lines = [f"{'':>12} {'pred spam':>{width + 5}} {'pred ham':>{width + 5}}"]
        for label in self.LABELS:
            row = self._counts[label.index]
            lines.append(f"{'actual ' + label.value:>12} {row[0]:>{width + 5}} {row[1]:>{width + 5}}")
        return "\n".join(lines)


@dataclass
class Prediction:
    """Outcome of classifying a single record."""
    record: Record
    predicted: Label
    score_spam: float
    score_ham: float
    tie_broken: bool = False

    @property
    def actual(self) -> Label:
        return self.record.label

    @property
    def is_correct(self) -> bool:
        return self.actual is self.predicted


@dataclass
class EvaluationResult:
    """Confusion matrix and derived metrics for one evaluated subset."""
    subset_name: str
    confusion_matrix: ConfusionMatrix
    wrong_predictions: List[Prediction] = field(default_factory=list)
    ties_broken: int = 0

    # Spam-class metrics, 0.0 when undefined
    precision: float = 0.0
    recall: float = 0.0
    f1_score: float = 0.0
    false_negative_rate: float = 0.0

    @property
    def samples(self) -> int:
        return self.confusion_matrix.total

    @property
    def accuracy(self) -> Optional[float]:
        return self.confusion_matrix.accuracy

    @property
    def error_rate(self) -> Optional[float]:
        return self.confusion_matrix.error_rate

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary format."""
        return {
            'subset': self.subset_name,
            'samples': self.samples,
            'confusion_matrix': self.confusion_matrix.to_list(),
            'accuracy': self.accuracy,
            'error_rate': self.error_rate,
            'precision': self.precision,
            'recall': self.recall,
            'f1_score': self.f1_score,
            'false_negative_rate': self.false_negative_rate,
            'wrong_predictions': len(self.wrong_predictions),
            'ties_broken': self.ties_broken
        }
