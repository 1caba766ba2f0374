"""
Centralized error handling utilities for the Spambase Naive Bayes classifier.

This module provides the custom exception hierarchy and the error formatter
used to report a failed training run.
"""

import logging
from datetime import datetime
from typing import Dict, Any, Optional
from dataclasses import dataclass, asdict
from enum import Enum


@dataclass
class ErrorResponse:
    """Standardized error report format."""
    error: bool = True
    kind: str = ""
    message: str = ""
    code: str = ""
    stage: Optional[str] = None
    timestamp: str = ""
    details: Optional[Dict[str, Any]] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary format."""
        return asdict(self)


class ErrorCategory(Enum):
    """Error categories for classification and tracking."""
    DATA_INGESTION = "data_ingestion"
    TRAINING = "training"
    PROGRAMMING = "programming"
    CONFIGURATION = "configuration"
    UNKNOWN = "unknown"


class ErrorSeverity(Enum):
    """Error severity levels for logging."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class SpamClassifierError(Exception):
    """Base exception for the Spambase classifier."""

    def __init__(self, message: str, code: str = "GENERAL_ERROR", details: Optional[Dict] = None,
                 category: ErrorCategory = ErrorCategory.UNKNOWN, severity: ErrorSeverity = ErrorSeverity.HIGH):
        self.message = message
        self.code = code
        self.details = details or {}
        self.category = category
        self.severity = severity
        # Set by the training pipeline when the error escapes one of its stages
        self.stage: Optional[str] = None
        super().__init__(self.message)


class MalformedRecordError(SpamClassifierError):
    """Exception for a row with the wrong number of fields."""

    def __init__(self, field_count: int, expected: int = 58, row_number: Optional[int] = None):
        self.field_count = field_count
        self.row_number = row_number
        message = f"Expected {expected} fields, found {field_count}"
        if row_number is not None:
            message = f"Row {row_number}: {message}"
        super().__init__(message, "MALFORMED_RECORD",
                         {"field_count": field_count, "expected": expected, "row_number": row_number},
                         ErrorCategory.DATA_INGESTION)


class FeatureParseError(SpamClassifierError):
    """Exception for a feature field that is not a real number."""

    def __init__(self, column: int, raw_value: str, row_number: Optional[int] = None):
        self.column = column
        self.raw_value = raw_value
        self.row_number = row_number
        message = f"Feature {column} is not a real number: {raw_value!r}"
        if row_number is not None:
            message = f"Row {row_number}: {message}"
        super().__init__(message, "FEATURE_PARSE_ERROR",
                         {"column": column, "raw_value": raw_value, "row_number": row_number},
                         ErrorCategory.DATA_INGESTION)


class InvalidLabelError(SpamClassifierError):
    """Exception for a label field other than "0" or "1"."""

    def __init__(self, raw_value: str, row_number: Optional[int] = None):
        self.raw_value = raw_value
        self.row_number = row_number
        message = f"Expected 0 or 1 for label, found {raw_value!r}"
        if row_number is not None:
            message = f"Row {row_number}: {message}"
        super().__init__(message, "INVALID_LABEL",
                         {"raw_value": raw_value, "row_number": row_number},
                         ErrorCategory.DATA_INGESTION)


class EmptyClassError(SpamClassifierError):
    """Exception when a class has no records to oversample."""

    def __init__(self, label, available: int = 0):
        self.label = label
        message = f"No {label.name.lower()} records available for oversampling"
        super().__init__(message, "EMPTY_CLASS",
                         {"label": label.name, "available_records": available},
                         ErrorCategory.TRAINING)


class EmptyInputError(SpamClassifierError):
    """Exception when a distribution is trained on zero records."""

    def __init__(self, what: str = "training data"):
        super().__init__(f"Cannot estimate distributions from empty {what}", "EMPTY_INPUT",
                         {"input": what}, ErrorCategory.TRAINING)


class DimensionMismatchError(SpamClassifierError):
    """Exception when a feature vector and a model disagree on dimensionality."""

    def __init__(self, expected: int, actual: int, what: str = "feature vector"):
        self.expected = expected
        self.actual = actual
        super().__init__(f"{what} has {actual} dimensions, expected {expected}", "DIMENSION_MISMATCH",
                         {"expected": expected, "actual": actual},
                         ErrorCategory.PROGRAMMING, ErrorSeverity.CRITICAL)


class InvalidDistributionError(SpamClassifierError):
    """Exception for a Gaussian whose parameters cannot produce a finite density."""

    def __init__(self, mean: float, std_dev: float):
        self.mean = mean
        self.std_dev = std_dev
        super().__init__(f"Invalid distribution parameters: mean={mean}, std_dev={std_dev}",
                         "INVALID_DISTRIBUTION", {"mean": mean, "std_dev": std_dev},
                         ErrorCategory.PROGRAMMING, ErrorSeverity.CRITICAL)


class ConfigurationError(SpamClassifierError):
    """Exception for invalid pipeline configuration."""

    def __init__(self, message: str, field: str = None):
        self.field = field
        details = {"field": field} if field else {}
        super().__init__(message, "CONFIGURATION_ERROR", details,
                         ErrorCategory.CONFIGURATION, ErrorSeverity.MEDIUM)


class ErrorHandler:
    """Centralized error formatting and logging for training runs."""

    def __init__(self):
        self.logger = logging.getLogger(__name__)

    def format_error_response(self,
                              error: Exception,
                              default_message: str = "An error occurred",
                              include_details: bool = True) -> ErrorResponse:
        """
        Format an exception into a standardized error response.

        Args:
            error: The exception to format
            default_message: Default message if error message is empty
            include_details: Whether to include error details in response

        Returns:
            ErrorResponse object
        """
        if isinstance(error, SpamClassifierError):
            message = error.message or default_message
            code = error.code
            stage = error.stage
            details = error.details if include_details else None
        else:
            message = str(error) or default_message
            code = "INTERNAL_ERROR"
            stage = None
            details = {"type": type(error).__name__} if include_details else None

        return ErrorResponse(
            error=True,
            kind=type(error).__name__,
            message=message,
            code=code,
            stage=stage,
            timestamp=datetime.now().isoformat(),
            details=details
        )

    def handle_run_error(self, error: Exception) -> ErrorResponse:
        """
        Log a fatal training run error and return its report.

        Args:
            error: The exception that aborted the run

        Returns:
            ErrorResponse describing the failure
        """
        response = self.format_error_response(error)
        severity = getattr(error, 'severity', ErrorSeverity.CRITICAL)
        level = self._get_log_level_for_severity(severity)

        stage = response.stage or 'unknown'
        self.logger.log(level, f"Run aborted in stage '{stage}': {response.kind} [{response.code}] {response.message}")
        return response

    def _get_log_level_for_severity(self, severity: ErrorSeverity) -> int:
        """Get the logging level for an error severity."""
        severity_to_level = {
            ErrorSeverity.LOW: logging.INFO,
            ErrorSeverity.MEDIUM: logging.WARNING,
            ErrorSeverity.HIGH: logging.ERROR,
            ErrorSeverity.CRITICAL: logging.CRITICAL
        }
        return severity_to_level.get(severity, logging.ERROR)
