"""Display names and legacy availability helpers for settlements"""

from typing import Any, Optional

from ..data.models import Settlement
from ..data.normalizer import size_rating, wealth_rating

SIZE_NAMES = {
    1: "Hamlet",
    2: "Village",
    3: "Town",
    4: "City",
    5: "Metropolis",
}

WEALTH_NAMES = {
    1: "Squalid",
    2: "Poor",
    3: "Average",
    4: "Prosperous",
    5: "Wealthy",
}


def size_name(rating: Any) -> str:
    """Name of a size rating, e.g. 3 -> "Town"."""
    return SIZE_NAMES.get(rating, f"Size {rating}")


def wealth_name(rating: Any) -> str:
    """Name of a wealth rating, e.g. 4 -> "Prosperous"."""
    return WEALTH_NAMES.get(rating, f"Wealth {rating}")


def calculate_available_slots(size: Any, wealth: Any) -> int:
    """
    Quick slot estimate from size and wealth alone.

    Predates the configurable cargo slot formula and is kept for datasets
    without a trading configuration.
    """
    return max(1, size_rating(size) // 2 + wealth_rating(wealth) // 2)


def is_trade_settlement(settlement: Optional[Settlement]) -> bool:
    """True if the settlement carries the "trade" flag."""
    if settlement is None:
        return False
    return "trade" in settlement.flags
