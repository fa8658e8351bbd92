"""
Canonical data models for settlements and trading configuration.

This module defines immutable data structures that represent clean, validated
dataset records after normalization from the raw dataset JSON shape. Records
are loaded once per dataset switch and never mutated by a calculation.
"""

import math
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping, Optional, Union


class Season(str, Enum):
    """Trading seasons."""
    SPRING = "spring"
    SUMMER = "summer"
    AUTUMN = "autumn"
    WINTER = "winter"


@dataclass(frozen=True)
class Settlement:
    """Settlement record as authored in a dataset."""
    name: str
    region: str = ""
    size: Union[str, int, None] = None     # Size code ("T", "CS") or numeric rating
    wealth: Union[str, int, None] = None   # Numeric rating 1-5
    population: int = 0
    flags: tuple[str, ...] = ()            # Insertion order is significant
    ruler: str = ""
    notes: str = ""
    produces: tuple[str, ...] = ()
    demands: tuple[str, ...] = ()


@dataclass(frozen=True)
class SettlementProperties:
    """Canonical numeric ratings derived from a settlement."""
    size_numeric: int
    wealth_numeric: int
    population: int
    production_categories: tuple[str, ...]


# Dataset JSON uses camelCase; YAML overrides and defaults use snake_case.
_CARGO_SLOT_KEYS = {
    "basePerSize": "base_per_size",
    "populationMultiplier": "population_multiplier",
    "sizeMultiplier": "size_multiplier",
    "hardCap": "hard_cap",
    "flagMultipliers": "flag_multipliers",
}


def snake_case_cargo_slots(raw: Optional[Mapping[str, Any]]) -> dict[str, Any]:
    """Rename camelCase ``cargoSlots`` keys to their snake_case config names."""
    if not isinstance(raw, Mapping):
        return {}
    return {_CARGO_SLOT_KEYS.get(key, key): value for key, value in raw.items()}


def _optional_float(value: Any) -> Optional[float]:
    """Parse a finite number, None for anything else including NaN and infinity."""
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return None
    return number if math.isfinite(number) else None


def _mapping(value: Any) -> Mapping[Any, Any]:
    return value if isinstance(value, Mapping) else {}


@dataclass(frozen=True)
class CargoSlotParams:
    """Cargo slot formula parameters. Absent values contribute nothing."""
    base_per_size: Mapping[int, float] = field(default_factory=lambda: MappingProxyType({}))
    population_multiplier: Optional[float] = None
    size_multiplier: Optional[float] = None
    hard_cap: Optional[float] = None
    flag_multipliers: Mapping[str, float] = field(default_factory=lambda: MappingProxyType({}))

    @classmethod
    def from_dict(cls, raw: Optional[Mapping[str, Any]]) -> "CargoSlotParams":
        """Build parameters from a ``cargoSlots`` section (camelCase or snake_case)."""
        if not raw or not isinstance(raw, Mapping):
            return cls()

        data = snake_case_cargo_slots(raw)

        base_per_size: dict[int, float] = {}
        for key, value in _mapping(data.get("base_per_size")).items():
            slots = _optional_float(value)
            try:
                rating = int(key)
            except (TypeError, ValueError, OverflowError):
                continue
            if slots is not None:
                base_per_size[rating] = slots

        flag_multipliers: dict[str, float] = {}
        for key, value in _mapping(data.get("flag_multipliers")).items():
            multiplier = _optional_float(value)
            if multiplier is not None:
                flag_multipliers[str(key).lower()] = multiplier

        return cls(
            base_per_size=MappingProxyType(base_per_size),
            population_multiplier=_optional_float(data.get("population_multiplier")),
            size_multiplier=_optional_float(data.get("size_multiplier")),
            hard_cap=_optional_float(data.get("hard_cap")),
            flag_multipliers=MappingProxyType(flag_multipliers),
        )


@dataclass(frozen=True)
class TradingConfig:
    """Trading configuration snapshot for one dataset."""
    cargo_slots: CargoSlotParams = field(default_factory=CargoSlotParams)

    @classmethod
    def from_dict(cls, raw: Optional[Mapping[str, Any]]) -> "TradingConfig":
        """Build a snapshot from a dataset ``tradingConfig`` object."""
        raw = _mapping(raw)
        section = raw.get("cargoSlots", raw.get("cargo_slots"))
        return cls(cargo_slots=CargoSlotParams.from_dict(section))


@dataclass(frozen=True)
class SourceFlag:
    """Definition of a settlement flag and its trade effects."""
    name: str
    description: str = ""
    supply_transfer: float = 0.0
    demand_transfer: float = 0.0
    availability_bonus_producers: float = 0.0
    availability_bonus_seekers: float = 0.0
    category_supply_transfer: Mapping[str, float] = field(default_factory=lambda: MappingProxyType({}))
    category_demand_transfer: Mapping[str, float] = field(default_factory=lambda: MappingProxyType({}))
    contraband_chance: float = 0.0
    quality: Optional[float] = None        # Multiplier around 1.0, None if undefined
    ui_tags: tuple[str, ...] = ()

    @classmethod
    def from_dict(cls, name: str, raw: Optional[Mapping[str, Any]]) -> "SourceFlag":
        """Build a flag definition from its dataset JSON entry."""
        raw = _mapping(raw)
        bonus = _mapping(raw.get("availabilityBonus"))

        def number(value: Any) -> float:
            parsed = _optional_float(value)
            return parsed if parsed is not None else 0.0

        def category_map(value: Any) -> Mapping[str, float]:
            if not isinstance(value, Mapping):
                return MappingProxyType({})
            return MappingProxyType({str(k): number(v) for k, v in value.items()})

        tags = raw.get("uiTags")
        return cls(
            name=name,
            description=str(raw.get("description") or ""),
            supply_transfer=number(raw.get("supplyTransfer")),
            demand_transfer=number(raw.get("demandTransfer")),
            availability_bonus_producers=number(bonus.get("producers")),
            availability_bonus_seekers=number(bonus.get("seekers")),
            category_supply_transfer=category_map(raw.get("categorySupplyTransfer")),
            category_demand_transfer=category_map(raw.get("categoryDemandTransfer")),
            contraband_chance=number(raw.get("contrabandChance")),
            quality=_optional_float(raw.get("quality")),
            ui_tags=tuple(str(tag) for tag in tags) if isinstance(tags, (list, tuple)) else (),
        )


SourceFlags = Mapping[str, SourceFlag]


def parse_source_flags(raw: Optional[Mapping[str, Any]]) -> SourceFlags:
    """Parse the dataset ``sourceFlags`` object into flag definitions."""
    if not raw or not isinstance(raw, Mapping):
        return MappingProxyType({})
    return MappingProxyType({
        name: SourceFlag.from_dict(name, definition)
        for name, definition in raw.items()
        if isinstance(definition, Mapping)
    })


@dataclass(frozen=True)
class EffectiveModifiers:
    """Aggregated trade modifiers for all active flags of a settlement."""
    supply_transfer: float = 0.0
    demand_transfer: float = 0.0
    availability_bonus_producers: float = 0.0
    availability_bonus_seekers: float = 0.0
    category_supply_transfer: Mapping[str, float] = field(default_factory=lambda: MappingProxyType({}))
    category_demand_transfer: Mapping[str, float] = field(default_factory=lambda: MappingProxyType({}))
    contraband_chance: float = 0.0
    quality_bonus: float = 0.0             # Sum of (quality - 1) across flags
    ui_tags: tuple[str, ...] = ()
    applied_flags: tuple[str, ...] = ()

    @property
    def quality_multiplier(self) -> float:
        """Combined quality multiplier around 1.0."""
        return 1.0 + self.quality_bonus

    @property
    def is_generic(self) -> bool:
        """True when no flag contributed, i.e. a plain settlement."""
        return not self.applied_flags


@dataclass(frozen=True)
class CargoSlotStep:
    """One row of the cargo slot breakdown with its running total."""
    label: str
    total: float

    @property
    def display_total(self) -> str:
        """Running total formatted to two decimals."""
        return f"{self.total:.2f}"
