"""
Data loading utilities for the Spambase dataset.

This module provides functionality for parsing header-less Spambase rows
(57 numeric features followed by a 0/1 label) into records and summarizing
the loaded dataset.
"""

import csv
import math
import logging
from typing import List, Sequence, Iterable, Dict

import pandas as pd

from spambase_nb.error_handling import (
    MalformedRecordError, FeatureParseError, InvalidLabelError
)
from spambase_nb.models.data_models import (
    FEATURE_COUNT, FeatureVector, Label, Record
)


class RecordParser:
    """Parses raw CSV rows into records."""

    def __init__(self, feature_count: int = FEATURE_COUNT):
        """
        Initialize the record parser.

        Args:
            feature_count: Number of feature fields preceding the label field
        """
        self.feature_count = feature_count
        self.field_count = feature_count + 1

    def parse_row(self, row: Sequence[str], row_number: int = None) -> Record:
        """
        Parse a single row.

        Args:
            row: Raw string fields
            row_number: 1-based row number used in error messages

        Returns:
            Parsed Record

        Raises:
            MalformedRecordError: Wrong number of fields
            FeatureParseError: A feature field is not a finite real number
            InvalidLabelError: Label field is not "0" or "1"
        """
        if len(row) != self.field_count:
            raise MalformedRecordError(len(row), self.field_count, row_number)

        values = []
        for column, raw_value in enumerate(row[:self.feature_count]):
            values.append(self._parse_feature(raw_value, column, row_number))

        raw_label = row[self.feature_count]
        try:
            label = Label.from_field(raw_label)
        except InvalidLabelError:
            raise InvalidLabelError(raw_label, row_number) from None

        return Record(FeatureVector(values, self.feature_count), label)

    def parse_rows(self, rows: Iterable[Sequence[str]]) -> List[Record]:
        """Parse all rows, failing on the first invalid one. Empty rows are skipped."""
        return [
            self.parse_row(row, row_number)
            for row_number, row in enumerate(rows, start=1)
            if row
        ]

    def _parse_feature(self, raw_value: str, column: int, row_number: int) -> float:
        # float() also accepts digit separators, which are not valid data
        if '_' in raw_value:
            raise FeatureParseError(column, raw_value, row_number)

        try:
            value = float(raw_value.strip())
        except ValueError:
            raise FeatureParseError(column, raw_value, row_number) from None

        if not math.isfinite(value):
            raise FeatureParseError(column, raw_value, row_number)

        return value


class SpambaseLoader:
    """Loads the Spambase dataset from a header-less CSV file."""

    def __init__(self,
                 feature_count: int = FEATURE_COUNT,
                 encoding: str = 'utf-8'):
        """
        Initialize the loader.

        Args:
            feature_count: Number of feature columns
            encoding: File encoding to use
        """
        self.parser = RecordParser(feature_count)
        self.encoding = encoding
        self.logger = logging.getLogger(__name__)

    def load(self, file_path: str) -> List[Record]:
        """
        Load every record of a Spambase CSV file.

        Blank lines are skipped. Any invalid row aborts the load, no partial
        dataset is returned.

        Args:
            file_path: Path to the data file

        Returns:
            List of parsed records
        """
        self.logger.info(f"Loading dataset from {file_path}")

        with open(file_path, 'r', encoding=self.encoding, newline='') as f:
            records = self.parser.parse_rows(csv.reader(f))

        self.logger.info(f"Parsed {len(records)} entries")
        return records

    def summarize(self, records: Sequence[Record]) -> pd.DataFrame:
        """
        Build a per-label summary of a dataset.

        Args:
            records: Records to summarize

        Returns:
            DataFrame with one row per label: count and share of the dataset
        """
        labels = pd.Series([record.label.value for record in records], dtype=object)
        counts = labels.value_counts().reindex([label.value for label in Label], fill_value=0)

        summary = pd.DataFrame({
            'label': counts.index,
            'count': counts.values.astype(int)
        })
        total = int(summary['count'].sum())
        summary['ratio'] = summary['count'] / total if total > 0 else 0.0

        return summary

    def label_distribution(self, records: Sequence[Record]) -> Dict[str, int]:
        """Label counts keyed by label name."""
        summary = self.summarize(records)
        return dict(zip(summary['label'], summary['count'].astype(int).tolist()))
