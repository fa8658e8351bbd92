"""Supply/demand equilibrium state labels"""

from enum import Enum
from typing import Union


class EquilibriumState(str, Enum):
    """Supply/demand balance of a cargo type at a settlement."""
    BALANCED = "balanced"
    OVERSUPPLIED = "oversupplied"
    UNDERSUPPLIED = "undersupplied"
    DESPERATE = "desperate"
    BLOCKED = "blocked"


EQUILIBRIUM_LABELS = {
    EquilibriumState.BALANCED: "Balanced",
    EquilibriumState.OVERSUPPLIED: "Oversupplied",
    EquilibriumState.UNDERSUPPLIED: "Undersupplied",
    EquilibriumState.DESPERATE: "Desperate",
    EquilibriumState.BLOCKED: "Blocked",
}


def equilibrium_label(state: Union[EquilibriumState, str]) -> str:
    """Human label for an equilibrium state; unknown states are returned as-is."""
    try:
        return EQUILIBRIUM_LABELS[EquilibriumState(state)]
    except ValueError:
        return str(state)
