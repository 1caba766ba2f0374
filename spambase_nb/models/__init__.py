# Models package
from .data_models import (
    FEATURE_COUNT,
    Label,
    FeatureVector,
    Record,
    FeatureDistribution,
    ClassModel,
    ConfusionMatrix,
    Prediction,
    EvaluationResult
)

__all__ = [
    'FEATURE_COUNT',
    'Label',
    'FeatureVector',
    'Record',
    'FeatureDistribution',
    'ClassModel',
    'ConfusionMatrix',
    'Prediction',
    'EvaluationResult'
]
