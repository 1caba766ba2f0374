"""
Training and evaluation pipeline for the Gaussian Naive Bayes spam classifier.

This module wires the hold-out split, class balancing, distribution training
and evaluation together, tags failures with the stage they happened in, and
produces the comparison table and the evaluation report.
"""
import os
import logging
from contextlib import contextmanager
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np
import pandas as pd

from spambase_nb.data_loader import SpambaseLoader
from spambase_nb.error_handling import SpamClassifierError
from spambase_nb.models.data_models import ClassModel, EvaluationResult, Label, Record
from spambase_nb.services.class_balancer import BalancingResults, ClassBalancer
from spambase_nb.services.classification_service import ClassificationService
from spambase_nb.services.dataset_splitter import DatasetSplit, split_dataset
from spambase_nb.services.distribution_trainer import DistributionTrainer
from spambase_nb.services.performance_monitor import PerformanceMetrics, PerformanceMonitor
from spambase_nb.services.pipeline_config import PipelineConfig
from spambase_nb.services.scorer import Scorer

SUBSET_NAMES = ('adjust', 'validation', 'test')


@dataclass
class TrainingResult:
    """Everything a training run produces."""
    split: DatasetSplit
    spam_model: ClassModel
    ham_model: ClassModel
    evaluations: Dict[str, EvaluationResult]
    balancing_results: Optional[BalancingResults] = None
    performance: Optional[PerformanceMetrics] = None
    completed_at: datetime = field(default_factory=datetime.now)


class TrainingPipeline:
    """
    Complete training and evaluation pipeline for the spam classifier.

    A single random generator, seeded from the configuration unless one is
    passed in, drives both the shuffle and the tie-breaks.
    """

    def __init__(self,
                 config: Optional[PipelineConfig] = None,
                 rng: Optional[np.random.Generator] = None):
        """
        Initialize the training pipeline.

        Args:
            config: Pipeline configuration, environment defaults if None
            rng: Random generator, seeded from config.random_seed if None
        """
        self.config = config or PipelineConfig()
        self.rng = rng if rng is not None else np.random.default_rng(self.config.random_seed)
        self.logger = logging.getLogger(__name__)

        self.loader = SpambaseLoader(self.config.feature_count)
        self.class_balancer = ClassBalancer()
        self.trainer = DistributionTrainer(
            feature_count=self.config.feature_count,
            parameter_floor=self.config.parameter_floor,
            clamp_mean=self.config.clamp_mean
        )
        self.scorer = Scorer(self.config.density_floor)
        self.performance_monitor = PerformanceMonitor()

        self.result: Optional[TrainingResult] = None

    @contextmanager
    def _stage(self, name: str):
        """Tag domain errors escaping a stage with the stage name."""
        self.logger.debug(f"Entering stage '{name}'")
        try:
            yield
        except SpamClassifierError as e:
            if e.stage is None:
                e.stage = name
            self.logger.error(f"Stage '{name}' failed: {e.message}")
            raise

    def load_data(self, file_path: Optional[str] = None) -> List[Record]:
        """
        Load the dataset.

        Args:
            file_path: Data file, config.dataset_path if None

        Returns:
            Parsed records
        """
        with self._stage('ingestion'):
            records = self.loader.load(file_path or self.config.dataset_path)
            self.logger.info(f"Label distribution: {self.loader.label_distribution(records)}")
            return records

    def prepare_data(self, records: Sequence[Record]) -> DatasetSplit:
        """Shuffle and split records into adjust, validation and test subsets."""
        with self._stage('splitting'):
            return split_dataset(records, self.rng, self.config.ratios)

    def balance_data(self, adjust_records: Sequence[Record]) -> Tuple[List[Record], List[Record]]:
        """Oversample both classes of the adjust subset to its full length."""
        with self._stage('balancing'):
            return self.class_balancer.balance(adjust_records)

    def train_models(self,
                     spam_records: Sequence[Record],
                     ham_records: Sequence[Record]) -> Tuple[ClassModel, ClassModel]:
        """
        Train one model per class.

        Returns:
            Tuple of (spam_model, ham_model)
        """
        with self._stage('training'):
            self.logger.info("Training class models...")
            spam_model = self.trainer.train(spam_records, Label.SPAM)
            ham_model = self.trainer.train(ham_records, Label.HAM)
            return spam_model, ham_model

    def evaluate_all(self,
                     split: DatasetSplit,
                     spam_model: ClassModel,
                     ham_model: ClassModel) -> Dict[str, EvaluationResult]:
        """
        Evaluate both models on every hold-out subset.

        Returns:
            Dictionary of subset name to EvaluationResult, in adjust, validation, test order
        """
        with self._stage('evaluation'):
            service = ClassificationService(spam_model, ham_model, self.rng, self.scorer)
            subsets = dict(zip(SUBSET_NAMES, (split.adjust, split.validation, split.test)))
            return {name: service.evaluate(records, name) for name, records in subsets.items()}

    def run(self, records: Sequence[Record]) -> TrainingResult:
        """
        Run split, balancing, training and evaluation on loaded records.

        Args:
            records: Full dataset

        Returns:
            TrainingResult of the run
        """
        self.logger.info("Starting training pipeline...")
        self.performance_monitor.start_monitoring()

        split = self.prepare_data(records)
        spam_records, ham_records = self.balance_data(split.adjust)
        self.performance_monitor.update_peak_memory()

        spam_model, ham_model = self.train_models(spam_records, ham_records)
        evaluations = self.evaluate_all(split, spam_model, ham_model)

        performance = self.performance_monitor.get_performance_metrics(len(records))
        self.performance_monitor.log_performance_summary(performance)

        self.result = TrainingResult(
            split=split,
            spam_model=spam_model,
            ham_model=ham_model,
            evaluations=evaluations,
            balancing_results=self.class_balancer.balancing_results,
            performance=performance
        )
        self.logger.info("Training pipeline completed")
        return self.result

    def run_from_file(self, file_path: Optional[str] = None) -> TrainingResult:
        """Load the dataset and run the pipeline on it."""
        return self.run(self.load_data(file_path))

    def compare_subsets(self) -> pd.DataFrame:
        """
        Generate a comparison table of the evaluated subsets.

        Returns:
            DataFrame with one row per subset, empty before a run
        """
        if self.result is None:
            return pd.DataFrame()

        comparison_data = []
        for name, evaluation in self.result.evaluations.items():
            comparison_data.append({
                'Subset': name,
                'Samples': evaluation.samples,
                'Accuracy': evaluation.accuracy,
                'Error Rate': evaluation.error_rate,
                'Precision': evaluation.precision,
                'Recall': evaluation.recall,
                'F1-Score': evaluation.f1_score,
                'FNR': evaluation.false_negative_rate
            })

        return pd.DataFrame(comparison_data)

    def save_evaluation_report(self,
                               output_path: Optional[str] = None,
                               include_wrong_predictions: bool = True) -> str:
        """
        Save a plain-text evaluation report.

        Args:
            output_path: Report file, config.report_path if None
            include_wrong_predictions: Whether to list every misclassified record

        Returns:
            Path the report was written to
        """
        if self.result is None:
            raise ValueError("Pipeline must be run before saving a report")

        output_path = output_path or self.config.report_path
        directory = os.path.dirname(output_path)
        if directory:
            os.makedirs(directory, exist_ok=True)

        result = self.result
        with open(output_path, 'w') as f:
            f.write("Spambase Gaussian Naive Bayes - Evaluation Report\n")
            f.write("=" * 60 + "\n\n")
            f.write(f"Generated: {result.completed_at.strftime('%Y-%m-%d %H:%M:%S')}\n")
            f.write(f"Hold-out distribution: {result.split.sizes}\n")
            f.write(f"Mean clamped: {self.config.clamp_mean}\n")

            if result.balancing_results:
                f.write(f"Original adjust distribution: {result.balancing_results.original_distribution}\n")
                f.write(f"Balanced distribution: {result.balancing_results.balanced_distribution}\n")
            f.write("\n")

            for name, evaluation in result.evaluations.items():
                f.write(f"{name.upper()} DATA\n")
                f.write("-" * 40 + "\n")
                f.write(f"Samples: {evaluation.samples}\n")
                f.write(f"Confusion matrix:\n{evaluation.confusion_matrix}\n")
                if evaluation.accuracy is None:
                    f.write("Accuracy: undefined (no samples)\n\n")
                    continue

                f.write(f"Accuracy:   {evaluation.accuracy:.4f}\n")
                f.write(f"Error rate: {evaluation.error_rate:.4f}\n")
                f.write(f"Precision:  {evaluation.precision:.4f}\n")
                f.write(f"Recall:     {evaluation.recall:.4f}\n")
                f.write(f"F1-Score:   {evaluation.f1_score:.4f}\n")
                f.write(f"FNR:        {evaluation.false_negative_rate:.4f}\n")
                f.write(f"Ties broken: {evaluation.ties_broken}\n")

                if include_wrong_predictions and evaluation.wrong_predictions:
                    f.write("Wrong predictions:\n")
                    for prediction in evaluation.wrong_predictions:
                        f.write(f"  [Pred: {prediction.predicted.name} | Real: {prediction.actual.name}] "
                                f"{list(prediction.record.features)}\n")
                f.write("\n")

        self.logger.info(f"Evaluation report saved to {output_path}")
        return output_path
