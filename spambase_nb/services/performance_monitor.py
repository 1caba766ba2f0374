"""
Resource monitoring for training runs.

This module records elapsed time and process memory around a training run
and logs a summary once it finishes.
"""
import logging
import time
from dataclasses import dataclass
from typing import Optional

import psutil


@dataclass
class PerformanceMetrics:
    """Performance metrics for a training run."""
    processing_time: float
    memory_usage_mb: float
    peak_memory_mb: float
    samples_processed: int
    samples_per_second: float


class PerformanceMonitor:
    """Tracks processing time and resident memory of the current process."""

    def __init__(self):
        self.logger = logging.getLogger(__name__)
        self.start_time: Optional[float] = None
        self.start_memory: Optional[float] = None
        self.peak_memory: float = 0.0

    def start_monitoring(self) -> None:
        """Start performance monitoring."""
        self.start_time = time.time()
        self.start_memory = self._get_memory_usage_mb()
        self.peak_memory = self.start_memory

        self.logger.info(f"Performance monitoring started - Initial memory: {self.start_memory:.1f} MB")

    def update_peak_memory(self) -> None:
        """Update peak memory usage."""
        current_memory = self._get_memory_usage_mb()
        if current_memory > self.peak_memory:
            self.peak_memory = current_memory

    def get_performance_metrics(self, samples_processed: int) -> PerformanceMetrics:
        """
        Get performance metrics since monitoring started.

        Args:
            samples_processed: Number of records processed

        Returns:
            PerformanceMetrics for the run
        """
        if self.start_time is None or self.start_memory is None:
            raise ValueError("Performance monitoring not started")

        self.update_peak_memory()
        processing_time = time.time() - self.start_time
        memory_usage = self._get_memory_usage_mb() - self.start_memory

        return PerformanceMetrics(
            processing_time=processing_time,
            memory_usage_mb=memory_usage,
            peak_memory_mb=self.peak_memory,
            samples_processed=samples_processed,
            samples_per_second=samples_processed / max(processing_time, 0.001)
        )

    def log_performance_summary(self, metrics: PerformanceMetrics) -> None:
        """Log a summary of the run's resource usage."""
        self.logger.info("Performance summary:")
        self.logger.info(f"  - Processing time: {metrics.processing_time:.2f} seconds")
        self.logger.info(f"  - Memory delta: {metrics.memory_usage_mb:.1f} MB (peak {metrics.peak_memory_mb:.1f} MB)")
        self.logger.info(f"  - Throughput: {metrics.samples_per_second:.0f} samples/second")

    def _get_memory_usage_mb(self) -> float:
        """Resident memory of the current process in MB."""
        return psutil.Process().memory_info().rss / (1024 * 1024)
