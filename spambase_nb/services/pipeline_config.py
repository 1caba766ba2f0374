"""
Configuration management for the training pipeline.

This module provides configuration management with environment variable support,
validation, and default value handling for holdout splitting, distribution
training and scoring.
"""
import os
import logging
from dataclasses import dataclass, field
from typing import Optional, Dict, Any

from spambase_nb.error_handling import ConfigurationError
from spambase_nb.models.data_models import FEATURE_COUNT


@dataclass
class PipelineConfig:
    """
    Configuration for a training run with environment variable support.

    Holdout ratios must sum to 1.0; the test split absorbs any rounding
    remainder when the dataset is partitioned.
    """

    # Holdout ratios (adjust, validation, test)
    adjust_ratio: float = field(default_factory=lambda: _get_env_float('ADJUST_RATIO', 0.8))
    validation_ratio: float = field(default_factory=lambda: _get_env_float('VALIDATION_RATIO', 0.1))
    test_ratio: float = field(default_factory=lambda: _get_env_float('TEST_RATIO', 0.1))

    # Model settings
    feature_count: int = field(default_factory=lambda: _get_env_int('FEATURE_COUNT', FEATURE_COUNT))
    parameter_floor: float = field(default_factory=lambda: _get_env_float('PARAMETER_FLOOR', 1e-31))
    density_floor: float = field(default_factory=lambda: _get_env_float('DENSITY_FLOOR', 1e-32))
    clamp_mean: bool = field(default_factory=lambda: _get_env_bool('CLAMP_MEAN', True))

    # None draws fresh OS entropy
    random_seed: Optional[int] = field(default_factory=lambda: _get_env_optional_int('RANDOM_SEED'))

    # Paths
    dataset_path: str = field(default_factory=lambda: _get_env_str('DATASET_PATH', 'spambase/spambase.data'))
    report_path: Optional[str] = field(default_factory=lambda: _get_env_str('REPORT_PATH', 'results/evaluation_report.txt'))

    # Logging settings
    log_level: str = field(default_factory=lambda: _get_env_str('LOG_LEVEL', 'INFO'))
    log_file: Optional[str] = field(default_factory=lambda: _get_env_str('LOG_FILE', 'logs/training.log'))

    def __post_init__(self):
        """Validate configuration after initialization."""
        self._validate_config()

    @property
    def ratios(self):
        """Holdout ratios as a HoldoutRatios value."""
        from spambase_nb.services.dataset_splitter import HoldoutRatios
        return HoldoutRatios(self.adjust_ratio, self.validation_ratio, self.test_ratio)

    def _validate_config(self) -> None:
        """Validate all configuration parameters."""
        logger = logging.getLogger(__name__)

        for name in ('adjust_ratio', 'validation_ratio', 'test_ratio'):
            value = getattr(self, name)
            if not isinstance(value, (int, float)):
                raise ConfigurationError(f"{name} must be a number", name)
            if value < 0:
                raise ConfigurationError(f"{name} must be >= 0", name)

        ratio_sum = self.adjust_ratio + self.validation_ratio + self.test_ratio
        if abs(ratio_sum - 1.0) > 1e-9:
            raise ConfigurationError(f"Holdout ratios must sum to 1.0, got {ratio_sum}", 'ratios')

        if self.adjust_ratio == 0:
            logger.warning("adjust_ratio is 0, training will fail for lack of records")

        if self.feature_count < 1:
            raise ConfigurationError("feature_count must be >= 1", 'feature_count')

        if not self.parameter_floor > 0:
            raise ConfigurationError("parameter_floor must be > 0", 'parameter_floor')

        if not self.density_floor > 0:
            raise ConfigurationError("density_floor must be > 0", 'density_floor')

        if self.log_level.upper() not in ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'):
            raise ConfigurationError(f"Invalid log_level '{self.log_level}'", 'log_level')

    def log_summary(self) -> None:
        """Log the active configuration."""
        logger = logging.getLogger(__name__)
        logger.info("Pipeline configuration loaded:")
        logger.info(f"  - Holdout ratios: ({self.adjust_ratio}, {self.validation_ratio}, {self.test_ratio})")
        logger.info(f"  - Feature count: {self.feature_count}")
        logger.info(f"  - Parameter floor: {self.parameter_floor}")
        logger.info(f"  - Density floor: {self.density_floor}")
        logger.info(f"  - Clamp mean: {self.clamp_mean}")
        logger.info(f"  - Random seed: {self.random_seed if self.random_seed is not None else 'entropy'}")

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert configuration to dictionary format.

        Returns:
            Dictionary representation of the configuration
        """
        return {
            'adjust_ratio': self.adjust_ratio,
            'validation_ratio': self.validation_ratio,
            'test_ratio': self.test_ratio,
            'feature_count': self.feature_count,
            'parameter_floor': self.parameter_floor,
            'density_floor': self.density_floor,
            'clamp_mean': self.clamp_mean,
            'random_seed': self.random_seed,
            'dataset_path': self.dataset_path,
            'report_path': self.report_path,
            'log_level': self.log_level,
            'log_file': self.log_file
        }

    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any]) -> 'PipelineConfig':
        """
        Create configuration from dictionary.

        Args:
            config_dict: Dictionary with configuration parameters

        Returns:
            PipelineConfig instance
        """
        # Filter out None values and unknown keys
        valid_keys = {
            'adjust_ratio', 'validation_ratio', 'test_ratio', 'feature_count',
            'parameter_floor', 'density_floor', 'clamp_mean', 'random_seed',
            'dataset_path', 'report_path', 'log_level', 'log_file'
        }

        filtered_dict = {k: v for k, v in config_dict.items()
                         if k in valid_keys and v is not None}

        return cls(**filtered_dict)


# Helper functions for environment variable parsing
def _get_env_bool(key: str, default: bool) -> bool:
    """Get boolean value from environment variable."""
    value = os.getenv(key)
    if value is None:
        return default

    return value.lower() in ('true', '1', 'yes', 'on')


def _get_env_str(key: str, default: str) -> str:
    """Get string value from environment variable."""
    return os.getenv(key, default)


def _get_env_int(key: str, default: int) -> int:
    """Get integer value from environment variable."""
    value = os.getenv(key)
    if value is None:
        return default

    try:
        return int(value)
    except ValueError:
        logging.getLogger(__name__).warning(f"Invalid integer value for {key}: {value}, using default: {default}")
        return default


def _get_env_optional_int(key: str) -> Optional[int]:
    """Get optional integer value from environment variable."""
    value = os.getenv(key)
    if value is None or value.strip() == '':
        return None

    try:
        return int(value)
    except ValueError:
        logging.getLogger(__name__).warning(f"Invalid integer value for {key}: {value}, ignoring")
        return None


def _get_env_float(key: str, default: float) -> float:
    """Get float value from environment variable."""
    value = os.getenv(key)
    if value is None:
        return default

    try:
        return float(value)
    except ValueError:
        logging.getLogger(__name__).warning(f"Invalid float value for {key}: {value}, using default: {default}")
        return default
