"""
Log-likelihood scoring of feature vectors under a trained class model.

Instead of multiplying the 57 per-feature densities, which underflows, the
scorer sums their natural logarithms. Each density is floored before the
logarithm so that a zero density never produces negative infinity.
"""
import numpy as np
from scipy.stats import norm

from spambase_nb.error_handling import DimensionMismatchError
from spambase_nb.models.data_models import ClassModel, FeatureVector

DENSITY_FLOOR = 1e-32


def log_likelihood(features: FeatureVector, model: ClassModel, density_floor: float = DENSITY_FLOOR) -> float:
    """
    Sum of floored log-densities of ``features`` under ``model``.

    Args:
        features: Feature vector to score
        model: Per-feature Gaussians of one class
        density_floor: Lower bound applied to every density before the log

    Returns:
        sum over i of ln(max(pdf(features[i]; model[i]), density_floor))

    Raises:
        DimensionMismatchError: Vector and model have different lengths
    """
    if len(features) != len(model):
        raise DimensionMismatchError(len(model), len(features))

    # Far-off values overflow the squared z-score to inf and the density to 0,
    # which the floor then absorbs.
    with np.errstate(over='ignore', under='ignore'):
        densities = norm.pdf(features.as_array(), loc=model.means, scale=model.std_devs)

    return float(np.log(np.maximum(densities, density_floor)).sum())


class Scorer:
    """Callable log-likelihood scorer bound to a density floor."""

    def __init__(self, density_floor: float = DENSITY_FLOOR):
        self.density_floor = density_floor

    def __call__(self, features: FeatureVector, model: ClassModel) -> float:
        return log_likelihood(features, model, self.density_floor)

    def score(self, features: FeatureVector, model: ClassModel) -> float:
        return log_likelihood(features, model, self.density_floor)
