"""
Classification and evaluation service for the trained class models.

This module applies the spam and ham models to records, decides a label with
an explicit coin-flip tie-break, and accumulates confusion matrices and
derived metrics per evaluated subset.
"""
import logging
from typing import Sequence, Optional

import numpy as np
from sklearn.metrics import precision_score, recall_score, f1_score

from spambase_nb.models.data_models import (
    ClassModel, ConfusionMatrix, EvaluationResult, Label, Prediction, Record
)
from spambase_nb.services.scorer import Scorer


class ClassificationService:
    """
    Decides spam vs. ham by comparing per-class log-likelihoods.

    The higher score wins. On exact equality a fair coin drawn from ``rng``
    decides, so ties are reproducible under a fixed seed.
    """

    def __init__(self,
                 spam_model: ClassModel,
                 ham_model: ClassModel,
                 rng: np.random.Generator,
                 scorer: Optional[Scorer] = None):
        """
        Initialize the classification service.

        Args:
            spam_model: Model trained on spam records
            ham_model: Model trained on ham records
            rng: Source of randomness for tie-breaking
            scorer: Log-likelihood scorer, default density floor if None
        """
        self.spam_model = spam_model
        self.ham_model = ham_model
        self.rng = rng
        self.scorer = scorer or Scorer()
        self.logger = logging.getLogger(__name__)

    def decide(self, score_spam: float, score_ham: float) -> Label:
        """Pick the label with the higher score, flipping a fair coin on a tie."""
        if score_spam > score_ham:
            return Label.SPAM
        if score_spam < score_ham:
            return Label.HAM
        return Label.SPAM if self.rng.random() < 0.5 else Label.HAM

    def classify(self, record: Record) -> Prediction:
        """
        Classify a single record.

        Args:
            record: Record to classify

        Returns:
            Prediction with both scores and the decided label
        """
        score_spam = self.scorer(record.features, self.spam_model)
        score_ham = self.scorer(record.features, self.ham_model)

        return Prediction(
            record=record,
            predicted=self.decide(score_spam, score_ham),
            score_spam=score_spam,
            score_ham=score_ham,
            tie_broken=score_spam == score_ham
        )

    def evaluate(self, records: Sequence[Record], subset_name: str = "data") -> EvaluationResult:
        """
        Classify every record and aggregate the results.

        An empty sequence yields a zero matrix whose accuracy and error rate
        are None.

        Args:
            records: Records to evaluate
            subset_name: Name used in logs and reports

        Returns:
            EvaluationResult for the subset
        """
        self.logger.info(f"Evaluating {len(records)} {subset_name} records...")

        matrix = ConfusionMatrix()
        wrong_predictions = []
        ties_broken = 0
        y_true, y_pred = [], []

        for record in records:
            prediction = self.classify(record)
            matrix.increment(prediction.actual, prediction.predicted)

            if prediction.tie_broken:
                ties_broken += 1
            if not prediction.is_correct:
                wrong_predictions.append(prediction)
                self.logger.debug(
                    f"Wrong prediction [Pred: {prediction.predicted.name} | Real: {prediction.actual.name}] "
                    f"spam={prediction.score_spam:.4f} ham={prediction.score_ham:.4f}"
                )

            y_true.append(prediction.actual.index)
            y_pred.append(prediction.predicted.index)

        result = EvaluationResult(
            subset_name=subset_name,
            confusion_matrix=matrix,
            wrong_predictions=wrong_predictions,
            ties_broken=ties_broken
        )

        if y_true:
            self._calculate_detailed_metrics(result, y_true, y_pred)
            self.logger.info(f"{subset_name} evaluation completed - Accuracy: {result.accuracy:.4f}")
        else:
            self.logger.warning(f"No {subset_name} records to evaluate, metrics are undefined")

        return result

    def _calculate_detailed_metrics(self, result: EvaluationResult, y_true, y_pred) -> None:
        """Fill spam-class precision, recall, F1 and false negative rate."""
        spam = Label.SPAM.index

        result.precision = float(precision_score(y_true, y_pred, pos_label=spam, zero_division=0))
        result.recall = float(recall_score(y_true, y_pred, pos_label=spam, zero_division=0))
        result.f1_score = float(f1_score(y_true, y_pred, pos_label=spam, zero_division=0))

        matrix = result.confusion_matrix
        fn = matrix.cell(Label.SPAM, Label.HAM)
        tp = matrix.cell(Label.SPAM, Label.SPAM)
        result.false_negative_rate = fn / (fn + tp) if (fn + tp) > 0 else 0.0
