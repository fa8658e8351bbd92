"""
Data quality error classifications for dataset records.

Most record problems are resolved by documented default substitution; these
exceptions cover the few cases where a record cannot be used at all.
"""

from typing import Optional, Dict, Any


class TradingDataError(Exception):
    """Base class for record issues that can be handled gracefully."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.context = context or {}
        self.recoverable = True


class MalformedRecordError(TradingDataError):
    """Record exists but cannot be turned into a canonical model."""

    def __init__(self, message: str, record_type: Optional[str] = None,
                 field: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.record_type = record_type
        self.field = field
