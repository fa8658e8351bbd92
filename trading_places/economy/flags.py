"""Settlement flag effect composition"""

from types import MappingProxyType
from typing import Optional

import structlog

from ..data.models import EffectiveModifiers, Settlement, SourceFlag, SourceFlags
from .cargo_slots import round_half_up

logger = structlog.get_logger(__name__)


def _lookup_flag(flag: str, source_flags: SourceFlags) -> Optional[SourceFlag]:
    definition = source_flags.get(flag)
    if definition is None:
        definition = source_flags.get(flag.lower())
    return definition


def compose_flag_effects(settlement: Optional[Settlement],
                         source_flags: Optional[SourceFlags]) -> EffectiveModifiers:
    """
    Aggregate the trade effects of every flag on a settlement.

    Transfers, bonuses and contraband chance are summed. Category maps are
    merged, summing values on key collision. Quality is combined additively
    on its offset from 1.0. UI tags are concatenated in flag order.
    Flags without a definition contribute nothing.

    Args:
        settlement: Settlement record
        source_flags: Flag definitions of the active dataset

    Returns:
        EffectiveModifiers for the settlement
    """
    if settlement is None or not source_flags:
        return EffectiveModifiers()

    supply_transfer = 0.0
    demand_transfer = 0.0
    producers = 0.0
    seekers = 0.0
    category_supply: dict[str, float] = {}
    category_demand: dict[str, float] = {}
    contraband_chance = 0.0
    quality_bonus = 0.0
    ui_tags: list[str] = []
    applied: list[str] = []

    for flag in settlement.flags:
        definition = _lookup_flag(flag, source_flags)
        if definition is None:
            logger.debug("Flag has no definition, ignoring", flag=flag, settlement=settlement.name)
            continue

        applied.append(flag)
        supply_transfer += definition.supply_transfer
        demand_transfer += definition.demand_transfer
        producers += definition.availability_bonus_producers
        seekers += definition.availability_bonus_seekers

        for category, value in definition.category_supply_transfer.items():
            category_supply[category] = category_supply.get(category, 0.0) + value
        for category, value in definition.category_demand_transfer.items():
            category_demand[category] = category_demand.get(category, 0.0) + value

        contraband_chance += definition.contraband_chance
        if definition.quality is not None:
            quality_bonus += definition.quality - 1
        ui_tags.extend(definition.ui_tags)

    return EffectiveModifiers(
        supply_transfer=supply_transfer,
        demand_transfer=demand_transfer,
        availability_bonus_producers=producers,
        availability_bonus_seekers=seekers,
        category_supply_transfer=MappingProxyType(category_supply),
        category_demand_transfer=MappingProxyType(category_demand),
        contraband_chance=contraband_chance,
        quality_bonus=quality_bonus,
        ui_tags=tuple(ui_tags),
        applied_flags=tuple(applied),
    )


def _percent(value: float) -> int:
    return round_half_up(value * 100)


def _signed_percent(value: float) -> str:
    percent = _percent(value)
    sign = "+" if percent >= 0 else ""
    return f"{sign}{percent}%"


def flag_effect_lines(flag: SourceFlag) -> list[str]:
    """Human-readable effect lines for a flag definition."""
    effects = []

    if flag.supply_transfer:
        effects.append(f"{_signed_percent(flag.supply_transfer)} supply transfer rate")
    if flag.demand_transfer:
        effects.append(f"{_signed_percent(flag.demand_transfer)} demand transfer rate")

    if flag.availability_bonus_producers:
        effects.append(f"{_signed_percent(flag.availability_bonus_producers)} availability bonus for producers")
    if flag.availability_bonus_seekers:
        effects.append(f"{_signed_percent(flag.availability_bonus_seekers)} availability bonus for seekers")

    for category, value in flag.category_supply_transfer.items():
        effects.append(f"{_signed_percent(value)} {category} supply transfer")
    for category, value in flag.category_demand_transfer.items():
        effects.append(f"{_signed_percent(value)} {category} demand transfer")

    if flag.contraband_chance:
        effects.append(f"+{_percent(flag.contraband_chance)}% chance of contraband goods")
    if flag.quality:
        effects.append(f"{_signed_percent(flag.quality - 1)} quality multiplier")
    if flag.ui_tags:
        effects.append(f"UI tags: {', '.join(flag.ui_tags)}")

    return effects


def describe_flag(name: str, source_flags: Optional[SourceFlags]) -> str:
    """
    Plain-text description of a flag and its trading effects.

    Unknown flags are described as a generic "<flag> settlement".
    """
    definition = _lookup_flag(name, source_flags) if source_flags else None
    if definition is None:
        return f"{name} settlement"

    lines = [name[:1].upper() + name[1:], ""]
    if definition.description:
        lines.extend([definition.description, ""])
    lines.append("Trading Effects:")
    lines.extend(f"• {effect}" for effect in flag_effect_lines(definition))
    return "\n".join(lines)
