#!/usr/bin/env python3
"""
Training script for the Spambase Gaussian Naive Bayes classifier.

This script loads the Spambase dataset, splits it into adjust, validation and
test subsets, trains the spam and ham models on the oversampled adjust subset,
evaluates both on every subset and writes an evaluation report.
"""

import os
import sys
import logging

from spambase_nb.error_handling import ErrorHandler, SpamClassifierError
from spambase_nb.services.pipeline_config import PipelineConfig
from spambase_nb.services.training_pipeline import TrainingPipeline


def setup_logging(config: PipelineConfig):
    """Set up logging for the training process."""
    handlers = [logging.StreamHandler(sys.stdout)]
    if config.log_file:
        log_dir = os.path.dirname(config.log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        handlers.append(logging.FileHandler(config.log_file, mode='a'))

    logging.basicConfig(
        level=getattr(logging, config.log_level.upper(), logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=handlers
    )
    return logging.getLogger(__name__)


def main():
    """Main training function."""
    error_handler = ErrorHandler()

    try:
        config = PipelineConfig()
    except SpamClassifierError as e:
        logging.basicConfig(level=logging.INFO)
        error_handler.handle_run_error(e)
        return False

    logger = setup_logging(config)
    logger.info("Starting Spambase classifier training pipeline")
    config.log_summary()

    if not os.path.exists(config.dataset_path):
        logger.error(f"Dataset not found at {config.dataset_path}. Set DATASET_PATH to the spambase.data file.")
        return False

    try:
        pipeline = TrainingPipeline(config)
        result = pipeline.run_from_file(config.dataset_path)
    except SpamClassifierError as e:
        error_handler.handle_run_error(e)
        return False
    except Exception as e:
        logger.error(f"Training failed: {str(e)}", exc_info=True)
        return False

    for name, evaluation in result.evaluations.items():
        logger.info(f"========== {name.capitalize()} data ==========")
        logger.info(f"Confusion matrix:\n{evaluation.confusion_matrix}")
        if evaluation.accuracy is None:
            logger.info("Accuracy: undefined (no samples)")
        else:
            logger.info(f"Accuracy: {evaluation.accuracy:.4f}")
            logger.info(f"Error rate: {evaluation.error_rate:.4f}")

    logger.info("\nSubset Comparison:")
    logger.info(pipeline.compare_subsets().to_string(index=False))

    if config.report_path:
        pipeline.save_evaluation_report(config.report_path)

    logger.info("Training pipeline completed successfully!")
    return True


def cli():
    """Console script entry point."""
    sys.exit(0 if main() else 1)


if __name__ == "__main__":
    cli()
