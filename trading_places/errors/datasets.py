"""
Dataset registry and external source failures.
"""

from typing import Optional, Dict, Any


class DatasetError(Exception):
    """Base class for dataset registry failures."""

    def __init__(self, message: str, dataset: Optional[str] = None,
                 context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.dataset = dataset
        self.context = context or {}


class UnknownDatasetError(DatasetError):
    """Dataset name is not registered."""


class DatasetNameError(DatasetError):
    """Dataset name failed validation."""

    def __init__(self, message: str, errors: Optional[list] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.errors = errors or []


class ProtectedDatasetError(DatasetError):
    """Attempt to delete or overwrite a built-in dataset."""


class QuestionSourceError(Exception):
    """Question bank could not be fetched or parsed."""

    def __init__(self, message: str, source: Optional[str] = None):
        super().__init__(message)
        self.source = source
