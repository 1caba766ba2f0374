"""
Pytest configuration and shared fixtures for the Spambase classifier tests.
"""

import pytest
import numpy as np

from spambase_nb.models.data_models import FEATURE_COUNT, FeatureVector, Label, Record
from spambase_nb.services.pipeline_config import PipelineConfig

CONFIG_ENV_VARS = (
    'ADJUST_RATIO', 'VALIDATION_RATIO', 'TEST_RATIO', 'FEATURE_COUNT',
    'PARAMETER_FLOOR', 'DENSITY_FLOOR', 'CLAMP_MEAN', 'RANDOM_SEED',
    'DATASET_PATH', 'REPORT_PATH', 'LOG_LEVEL', 'LOG_FILE'
)


def make_record(label: Label, first: float = 0.0, rest: float = 0.0,
                feature_count: int = FEATURE_COUNT) -> Record:
    """Record whose feature 0 is ``first`` and every other feature ``rest``."""
    values = [first] + [rest] * (feature_count - 1)
    return Record(FeatureVector(values, feature_count), label)


def make_row(label_field: str = "1", value: str = "0.5", feature_count: int = FEATURE_COUNT):
    """Raw CSV row with every feature set to ``value``."""
    return [value] * feature_count + [label_field]


@pytest.fixture(autouse=True)
def clean_config_env(monkeypatch):
    """Keep configuration environment variables from leaking into tests."""
    for name in CONFIG_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def rng():
    """Seeded random generator."""
    return np.random.default_rng(12345)


@pytest.fixture
def mixed_records():
    """Seven spam and three ham records with distinct feature 0 values."""
    spam = [make_record(Label.SPAM, first=float(i)) for i in range(7)]
    ham = [make_record(Label.HAM, first=float(100 + i)) for i in range(3)]
    return spam + ham


@pytest.fixture
def separable_records():
    """Five spam records with feature 0 = 1 and five ham records with feature 0 = 10."""
    spam = [make_record(Label.SPAM, first=1.0) for _ in range(5)]
    ham = [make_record(Label.HAM, first=10.0) for _ in range(5)]
    return spam + ham


@pytest.fixture
def pipeline_config(tmp_path):
    """Deterministic pipeline configuration writing into a temporary directory."""
    return PipelineConfig(
        random_seed=7,
        dataset_path=str(tmp_path / 'spambase.data'),
        report_path=str(tmp_path / 'results' / 'report.txt'),
        log_file=None
    )
