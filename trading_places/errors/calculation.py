"""
Calculation contract violations.

Raised by the calculation core when a caller breaks the boundary contract.
The engine layer catches these and degrades to a fallback value.
"""

from typing import Optional, Dict, Any


class TradingCalculationError(Exception):
    """Base class for calculation failures that the core cannot default away."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.context = context or {}
        self.recoverable = False


class MissingConfigurationError(TradingCalculationError, ValueError):
    """The trading configuration snapshot was not supplied."""

    def __init__(self, message: str, calculation: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.calculation = calculation


class InvalidSeasonError(TradingCalculationError, ValueError):
    """Season token is not one of the four trading seasons."""

    def __init__(self, message: str, season: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.season = season
