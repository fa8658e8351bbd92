"""Configuration validation utilities."""

import math
from dataclasses import dataclass
from typing import Any

_NUMERIC_FLAG_FIELDS = (
    "supplyTransfer",
    "demandTransfer",
    "contrabandChance",
    "quality",
)

_CATEGORY_FLAG_FIELDS = (
    "categorySupplyTransfer",
    "categoryDemandTransfer",
)


@dataclass(frozen=True)
class ValidationError:
    """Represents a configuration validation error."""
    field: str
    message: str
    value: Any


def _is_number(value: Any) -> bool:
    if not isinstance(value, (int, float)) or isinstance(value, bool):
        return False
    return isinstance(value, int) or math.isfinite(value)


def _pick(params: dict[str, Any], camel: str, snake: str) -> tuple[bool, Any]:
    if camel in params:
        return True, params[camel]
    if snake in params:
        return True, params[snake]
    return False, None


class ConfigValidator:
    """Validates dataset trading configuration."""

    @staticmethod
    def validate_cargo_slot_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate a cargoSlots section (camelCase or snake_case keys)."""
        errors = []

        # Validate basePerSize
        present, value = _pick(params, "basePerSize", "base_per_size")
        if present:
            if not isinstance(value, dict):
                errors.append(ValidationError(
                    field="basePerSize",
                    message="Must be a mapping of size rating to slot count",
                    value=value
                ))
            else:
                for key, slots in value.items():
                    try:
                        rating = int(key)
                    except (TypeError, ValueError, OverflowError):
                        rating = None
                    if rating is None or rating < 1 or rating > 5:
                        errors.append(ValidationError(
                            field=f"basePerSize.{key}",
                            message="Size rating must be an integer between 1 and 5",
                            value=key
                        ))
                    if not _is_number(slots) or slots < 0:
                        errors.append(ValidationError(
                            field=f"basePerSize.{key}",
                            message="Must be a non-negative number",
                            value=slots
                        ))

        # Validate populationMultiplier
        present, value = _pick(params, "populationMultiplier", "population_multiplier")
        if present and value is not None and (not _is_number(value) or value < 0):
            errors.append(ValidationError(
                field="populationMultiplier",
                message="Must be a non-negative number",
                value=value
            ))

        # Validate sizeMultiplier
        present, value = _pick(params, "sizeMultiplier", "size_multiplier")
        if present and value is not None and (not _is_number(value) or value < 0):
            errors.append(ValidationError(
                field="sizeMultiplier",
                message="Must be a non-negative number",
                value=value
            ))

        # Validate hardCap
        present, value = _pick(params, "hardCap", "hard_cap")
        if present and value is not None and (not _is_number(value) or value <= 0):
            errors.append(ValidationError(
                field="hardCap",
                message="Must be a positive number",
                value=value
            ))

        # Validate flagMultipliers
        present, value = _pick(params, "flagMultipliers", "flag_multipliers")
        if present:
            if not isinstance(value, dict):
                errors.append(ValidationError(
                    field="flagMultipliers",
                    message="Must be a mapping of flag name to multiplier",
                    value=value
                ))
            else:
                for flag, multiplier in value.items():
                    if not _is_number(multiplier) or multiplier <= 0:
                        errors.append(ValidationError(
                            field=f"flagMultipliers.{flag}",
                            message="Must be a positive number",
                            value=multiplier
                        ))

        return errors

    @staticmethod
    def validate_source_flags(flags: dict[str, Any]) -> list[ValidationError]:
        """Validate sourceFlags definitions."""
        errors = []

        for name, definition in flags.items():
            if not isinstance(definition, dict):
                errors.append(ValidationError(
                    field=f"sourceFlags.{name}",
                    message="Must be an object",
                    value=definition
                ))
                continue

            for field_name in _NUMERIC_FLAG_FIELDS:
                if field_name in definition and not _is_number(definition[field_name]):
                    errors.append(ValidationError(
                        field=f"sourceFlags.{name}.{field_name}",
                        message="Must be a number",
                        value=definition[field_name]
                    ))

            if "quality" in definition and _is_number(definition["quality"]) and definition["quality"] <= 0:
                errors.append(ValidationError(
                    field=f"sourceFlags.{name}.quality",
                    message="Must be a positive multiplier",
                    value=definition["quality"]
                ))

            chance = definition.get("contrabandChance")
            if _is_number(chance) and not 0 <= chance <= 1:
                errors.append(ValidationError(
                    field=f"sourceFlags.{name}.contrabandChance",
                    message="Must be between 0 and 1",
                    value=chance
                ))

            bonus = definition.get("availabilityBonus")
            if bonus is not None:
                if not isinstance(bonus, dict):
                    errors.append(ValidationError(
                        field=f"sourceFlags.{name}.availabilityBonus",
                        message="Must be an object with producers/seekers",
                        value=bonus
                    ))
                else:
                    for side in ("producers", "seekers"):
                        if side in bonus and not _is_number(bonus[side]):
                            errors.append(ValidationError(
                                field=f"sourceFlags.{name}.availabilityBonus.{side}",
                                message="Must be a number",
                                value=bonus[side]
                            ))

            for field_name in _CATEGORY_FLAG_FIELDS:
                if field_name not in definition:
                    continue
                categories = definition[field_name]
                if not isinstance(categories, dict) or not all(_is_number(v) for v in categories.values()):
                    errors.append(ValidationError(
                        field=f"sourceFlags.{name}.{field_name}",
                        message="Must be a mapping of category to number",
                        value=categories
                    ))

            tags = definition.get("uiTags")
            if tags is not None and not isinstance(tags, list):
                errors.append(ValidationError(
                    field=f"sourceFlags.{name}.uiTags",
                    message="Must be a list of strings",
                    value=tags
                ))

        return errors

    @staticmethod
    def validate_config(config: dict[str, Any]) -> list[ValidationError]:
        """Validate a complete trading configuration."""
        errors = []

        present, cargo_slots = _pick(config, "cargoSlots", "cargo_slots")
        if present:
            if isinstance(cargo_slots, dict):
                errors.extend(ConfigValidator.validate_cargo_slot_params(cargo_slots))
            else:
                errors.append(ValidationError(
                    field="cargoSlots",
                    message="Must be an object",
                    value=cargo_slots
                ))

        present, source_flags = _pick(config, "sourceFlags", "source_flags")
        if present:
            if isinstance(source_flags, dict):
                errors.extend(ConfigValidator.validate_source_flags(source_flags))
            else:
                errors.append(ValidationError(
                    field="sourceFlags",
                    message="Must be an object",
                    value=source_flags
                ))

        return errors
