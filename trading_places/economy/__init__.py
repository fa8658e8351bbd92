"""Trading economy calculations for settlements"""

from .cargo_slots import (
    CalculationResult,
    CargoSlotCalculator,
    calculate_cargo_slots,
    cargo_slot_breakdown,
    try_calculate_cargo_slots,
)
from .equilibrium import EquilibriumState, equilibrium_label
from .flags import compose_flag_effects, describe_flag, flag_effect_lines
from .labels import calculate_available_slots, is_trade_settlement, size_name, wealth_name

__all__ = [
    "CalculationResult",
    "CargoSlotCalculator",
    "calculate_cargo_slots",
    "cargo_slot_breakdown",
    "try_calculate_cargo_slots",
    "EquilibriumState",
    "equilibrium_label",
    "compose_flag_effects",
    "describe_flag",
    "flag_effect_lines",
    "calculate_available_slots",
    "is_trade_settlement",
    "size_name",
    "wealth_name",
]
