"""
End-to-end tests for the training pipeline.
"""

import numpy as np
import pytest

from spambase_nb.error_handling import (
    EmptyClassError, EmptyInputError, MalformedRecordError
)
from spambase_nb.models.data_models import FEATURE_COUNT, Label
from spambase_nb.services.pipeline_config import PipelineConfig
from spambase_nb.services.training_pipeline import TrainingPipeline

from conftest import make_record, make_row


class TestTrainingPipeline:
    """Tests for TrainingPipeline.run."""

    def test_separable_dataset(self, pipeline_config, separable_records):
        pipeline = TrainingPipeline(pipeline_config)
        result = pipeline.run(separable_records)

        assert result.split.sizes == (8, 1, 1)
        assert result.spam_model.label is Label.SPAM
        assert result.ham_model.label is Label.HAM
        assert result.spam_model.sample_count == 8
        assert result.ham_model.sample_count == 8
        assert result.spam_model[0].mean == 1.0
        assert result.ham_model[0].mean == 10.0
        assert result.spam_model[0].std_dev == 1e-31

        probe = make_record(Label.SPAM, first=1.0)
        scorer = pipeline.scorer
        assert scorer(probe.features, result.spam_model) > scorer(probe.features, result.ham_model)

        assert list(result.evaluations) == ['adjust', 'validation', 'test']
        for evaluation in result.evaluations.values():
            assert evaluation.accuracy == 1.0
        assert sum(e.samples for e in result.evaluations.values()) == len(separable_records)

    def test_balancing_results_attached(self, pipeline_config, separable_records):
        result = TrainingPipeline(pipeline_config).run(separable_records)

        balancing = result.balancing_results
        assert sum(balancing.original_distribution.values()) == 8
        assert balancing.balanced_distribution == {'spam': 8, 'ham': 8}
        assert result.performance.samples_processed == len(separable_records)

    def test_same_seed_same_result(self, pipeline_config, mixed_records):
        first = TrainingPipeline(pipeline_config).run(mixed_records)
        second = TrainingPipeline(pipeline_config).run(mixed_records)

        assert [id(r) for r in first.split.test] == [id(r) for r in second.split.test]
        assert first.spam_model == second.spam_model
        for name in first.evaluations:
            assert first.evaluations[name].confusion_matrix == second.evaluations[name].confusion_matrix

    def test_explicit_generator(self, pipeline_config, separable_records):
        rng = np.random.default_rng(1)
        pipeline = TrainingPipeline(pipeline_config, rng=rng)
        assert pipeline.rng is rng
        pipeline.run(separable_records)

    def test_unclamped_mean(self, tmp_path, separable_records):
        config = PipelineConfig(random_seed=3, clamp_mean=False, log_file=None,
                                report_path=str(tmp_path / 'report.txt'))
        result = TrainingPipeline(config).run(separable_records)

        assert result.spam_model[1].mean == 0.0
        assert result.spam_model[1].std_dev == 1e-31


class TestStageErrors:
    """Failures are tagged with the stage they escaped from."""

    def test_single_class_fails_in_balancing(self, pipeline_config):
        records = [make_record(Label.SPAM, first=float(i)) for i in range(10)]
        with pytest.raises(EmptyClassError) as exc_info:
            TrainingPipeline(pipeline_config).run(records)

        assert exc_info.value.stage == 'balancing'
        assert exc_info.value.label is Label.HAM

    def test_empty_dataset_fails_in_balancing(self, pipeline_config):
        with pytest.raises(EmptyClassError) as exc_info:
            TrainingPipeline(pipeline_config).run([])

        assert exc_info.value.stage == 'balancing'

    def test_empty_training_data_fails_in_training(self, pipeline_config):
        with pytest.raises(EmptyInputError) as exc_info:
            TrainingPipeline(pipeline_config).train_models([], [])

        assert exc_info.value.stage == 'training'

    def test_malformed_file_fails_in_ingestion(self, pipeline_config, tmp_path):
        path = tmp_path / 'bad.data'
        path.write_text(",".join(make_row("1")[:-1]) + "\n")

        pipeline = TrainingPipeline(pipeline_config)
        with pytest.raises(MalformedRecordError) as exc_info:
            pipeline.run_from_file(str(path))

        assert exc_info.value.stage == 'ingestion'
        assert exc_info.value.field_count == FEATURE_COUNT
        assert pipeline.result is None


class TestReporting:
    """Tests for the comparison table and the evaluation report."""

    def test_compare_subsets_before_run(self, pipeline_config):
        assert TrainingPipeline(pipeline_config).compare_subsets().empty

    def test_compare_subsets(self, pipeline_config, separable_records):
        pipeline = TrainingPipeline(pipeline_config)
        pipeline.run(separable_records)
        comparison = pipeline.compare_subsets()

        assert comparison['Subset'].tolist() == ['adjust', 'validation', 'test']
        assert comparison['Samples'].tolist() == [8, 1, 1]
        assert comparison['Accuracy'].tolist() == [1.0, 1.0, 1.0]

    def test_report_requires_run(self, pipeline_config):
        with pytest.raises(ValueError):
            TrainingPipeline(pipeline_config).save_evaluation_report()

    def test_save_evaluation_report(self, pipeline_config, mixed_records):
        pipeline = TrainingPipeline(pipeline_config)
        pipeline.run(mixed_records)
        path = pipeline.save_evaluation_report()

        assert path == pipeline_config.report_path
        with open(path) as f:
            content = f.read()
        assert "Hold-out distribution: (8, 1, 1)" in content
        for name in ('ADJUST DATA', 'VALIDATION DATA', 'TEST DATA'):
            assert name in content
        assert "Confusion matrix" in content

    def test_run_from_file(self, pipeline_config):
        rows = [make_row("1", value="1") for _ in range(6)] + [make_row("0", value="5") for _ in range(6)]
        with open(pipeline_config.dataset_path, 'w') as f:
            f.write("\n".join(",".join(row) for row in rows) + "\n")

        result = TrainingPipeline(pipeline_config).run_from_file()
        assert sum(result.split.sizes) == 12
        assert result.evaluations['adjust'].accuracy == 1.0
