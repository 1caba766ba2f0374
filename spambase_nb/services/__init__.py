# Services package
from .dataset_splitter import HoldoutRatios, DatasetSplit, split_dataset
from .class_balancer import ClassBalancer
from .distribution_trainer import DistributionTrainer
from .scorer import Scorer, log_likelihood
from .classification_service import ClassificationService
from .pipeline_config import PipelineConfig
from .training_pipeline import TrainingPipeline, TrainingResult

__all__ = [
    'HoldoutRatios',
    'DatasetSplit',
    'split_dataset',
    'ClassBalancer',
    'DistributionTrainer',
    'Scorer',
    'log_likelihood',
    'ClassificationService',
    'PipelineConfig',
    'TrainingPipeline',
    'TrainingResult'
]
