"""
Error classification system for the trading economy engine.

This module provides a structured exception hierarchy separating bad input
records (recoverable, usually defaulted away), calculation contract violations
and dataset registry failures.
"""

from .data_quality import (
    TradingDataError,
    MalformedRecordError,
)
from .calculation import (
    TradingCalculationError,
    MissingConfigurationError,
    InvalidSeasonError,
)
from .datasets import (
    DatasetError,
    UnknownDatasetError,
    DatasetNameError,
    ProtectedDatasetError,
    QuestionSourceError,
)

__all__ = [
    # Data Quality Errors
    "TradingDataError",
    "MalformedRecordError",
    # Calculation Errors
    "TradingCalculationError",
    "MissingConfigurationError",
    "InvalidSeasonError",
    # Dataset Errors
    "DatasetError",
    "UnknownDatasetError",
    "DatasetNameError",
    "ProtectedDatasetError",
    "QuestionSourceError",
]
