"""Cargo slot calculations"""

import math
from dataclasses import dataclass
from typing import Optional, Union

from ..data.models import CargoSlotStep, Season, Settlement, TradingConfig
from ..data.normalizer import parse_season, resolve_properties
from ..errors import MissingConfigurationError, TradingCalculationError
from ..logging.config import get_calculation_logger, log_calculation_step

calculation_logger = get_calculation_logger(__name__)

SeasonLike = Union[Season, str, None]


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves rounding up (2.5 -> 3, -2.5 -> -2)."""
    return math.floor(value + 0.5)


def _format_number(value: float) -> str:
    return f"{value:g}"


def _require_config(config: Optional[TradingConfig], calculation: str) -> TradingConfig:
    if config is None:
        raise MissingConfigurationError(
            "Trading configuration is required for cargo slot calculation",
            calculation=calculation,
        )
    return config


def _check_season(season: SeasonLike) -> Optional[Season]:
    # Accepted and validated, but no seasonal term exists in the slot formula
    if season is None:
        return None
    return parse_season(season)


def _run_formula(settlement: Optional[Settlement], config: TradingConfig,
                 record_steps: bool) -> tuple[int, list[CargoSlotStep]]:
    params = config.cargo_slots
    props = resolve_properties(settlement)
    settlement_name = settlement.name if settlement is not None else ""
    steps: list[CargoSlotStep] = []

    def record(label: str, total: float) -> None:
        if record_steps:
            steps.append(CargoSlotStep(label=label, total=total))
        log_calculation_step(calculation_logger, "cargo_slots", settlement_name, label, total)

    base = params.base_per_size.get(props.size_numeric, props.size_numeric)
    total = float(base)
    record(f"Base slots by size: {_format_number(base)}", total)

    population_contribution = props.population * (params.population_multiplier or 0.0)
    total += population_contribution
    if population_contribution:
        record(f"Population contribution: {population_contribution:+.2f}", total)

    size_contribution = props.size_numeric * (params.size_multiplier or 0.0)
    total += size_contribution
    if size_contribution:
        record(f"Size multiplier bonus: {size_contribution:+.2f}", total)

    for flag in props.production_categories:
        multiplier = params.flag_multipliers.get(flag)
        # Zero multipliers are applied, not skipped as falsy; the 1-slot floor covers them
        if multiplier is not None and multiplier != 1:
            total *= multiplier
            record(f"Flag: {flag} ×{_format_number(multiplier)}", total)

    hard_cap = params.hard_cap
    if hard_cap is not None and total > hard_cap:
        total = hard_cap
        record(f"Hard cap applied: {_format_number(hard_cap)}", total)

    slots = max(1, round_half_up(total))
    if record_steps:
        label = f"Final slots: {slots}"
        if hard_cap is not None:
            label += f" (capped at {_format_number(hard_cap)})"
        steps.append(CargoSlotStep(label=label, total=float(slots)))

    return slots, steps


def calculate_cargo_slots(settlement: Optional[Settlement], season: SeasonLike,
                          config: Optional[TradingConfig]) -> int:
    """
    Calculate the number of tradeable cargo slots at a settlement.

    slots = max(1, round(min(cap, (base + pop * pop_mult + size * size_mult) * flag_mults)))

    Args:
        settlement: Settlement record
        season: Trading season (validated, does not change the result)
        config: Trading configuration snapshot for the active dataset

    Returns:
        Cargo slot count, always at least 1

    Raises:
        MissingConfigurationError: If config is None
        InvalidSeasonError: If season is an unknown token
    """
    config = _require_config(config, "cargo_slots")
    _check_season(season)
    slots, _ = _run_formula(settlement, config, record_steps=False)
    return slots


def cargo_slot_breakdown(settlement: Optional[Settlement], season: SeasonLike,
                         config: Optional[TradingConfig]) -> list[CargoSlotStep]:
    """
    Step-by-step cargo slot calculation with running totals.

    The last step always carries the same value ``calculate_cargo_slots``
    returns for identical inputs.
    """
    config = _require_config(config, "cargo_slot_breakdown")
    _check_season(season)
    _, steps = _run_formula(settlement, config, record_steps=True)
    return steps


@dataclass
class CalculationResult:
    """Outcome of a calculation at the core boundary."""
    value: Optional[int] = None
    success: bool = True
    error_msg: Optional[str] = None

    @classmethod
    def success(cls, value: int):
        """Create successful result with the calculated value."""
        return cls(
            value=value,
            success=True
        )

    @classmethod
    def error(cls, error_msg: str):
        """Create error result."""
        return cls(
            success=False,
            error_msg=error_msg
        )

    def value_or(self, fallback: int) -> int:
        """Calculated value, or ``fallback`` if the calculation failed."""
        return self.value if self.success and self.value is not None else fallback


def try_calculate_cargo_slots(settlement: Optional[Settlement], season: SeasonLike,
                              config: Optional[TradingConfig]) -> CalculationResult:
    """
    Calculate cargo slots, reporting failures as an error result.

    Covers contract violations and arithmetic failures such as a running
    total that overflowed to infinity with no hard cap to clamp it.
    """
    try:
        return CalculationResult.success(calculate_cargo_slots(settlement, season, config))
    except (TradingCalculationError, ArithmeticError, ValueError) as e:
        return CalculationResult.error(str(e))


class CargoSlotCalculator:
    """Cargo slot calculator bound to one trading configuration snapshot"""

    def __init__(self, config: TradingConfig):
        self.config = _require_config(config, "cargo_slots")

    def calculate(self, settlement: Optional[Settlement], season: SeasonLike = None) -> int:
        """Cargo slots for a settlement under the bound configuration."""
        return calculate_cargo_slots(settlement, season, self.config)

    def breakdown(self, settlement: Optional[Settlement],
                  season: SeasonLike = None) -> list[CargoSlotStep]:
        """Breakdown for a settlement under the bound configuration."""
        return cargo_slot_breakdown(settlement, season, self.config)

    def flag_multipliers(self, settlement: Optional[Settlement]) -> list[tuple[str, float]]:
        """Flag multipliers that apply to a settlement, in flag order."""
        props = resolve_properties(settlement)
        applied = []
        for flag in props.production_categories:
            multiplier = self.config.cargo_slots.flag_multipliers.get(flag)
            if multiplier is not None and multiplier != 1:
                applied.append((flag, multiplier))
        return applied
