"""
Dataset registry and immutable dataset snapshots.

A dataset bundles settlements, cargo types, trading configuration and flag
definitions under a name. The registry tracks built-in and user datasets in
memory; every switch produces a fresh ``DatasetSnapshot`` that calculations
treat as read-only.
"""

import copy
import re
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any, Mapping, Optional

import structlog

from .config.defaults import CargoSlotDefaults
from .config.loader import ConfigLoader
from .config.validation import ConfigValidator, ValidationError
from .data.models import (
    Settlement,
    SourceFlags,
    TradingConfig,
    parse_source_flags,
    snake_case_cargo_slots,
)
from .data.normalizer import SettlementNormalizer
from .errors import (
    DatasetNameError,
    ProtectedDatasetError,
    UnknownDatasetError,
)

logger = structlog.get_logger(__name__)

BUILTIN_DATASETS = ("wfrp4e",)
BUILTIN_LABELS = {"wfrp4e": "WFRP4e (Built-in)"}

_DATASET_NAME_PATTERN = re.compile(r"^[a-zA-Z0-9_-]+$")


@dataclass(frozen=True)
class DatasetSnapshot:
    """Read-only view of one dataset, injected into every calculation."""
    name: str
    config: TradingConfig = field(default_factory=TradingConfig)
    source_flags: SourceFlags = field(default_factory=lambda: MappingProxyType({}))
    settlements: tuple[Settlement, ...] = ()

    @classmethod
    def from_dict(cls, name: str, raw: Optional[Mapping[str, Any]]) -> "DatasetSnapshot":
        """Build a snapshot from a raw dataset object."""
        raw = raw if isinstance(raw, Mapping) else {}
        return cls(
            name=name,
            config=TradingConfig.from_dict(raw.get("tradingConfig")),
            source_flags=parse_source_flags(raw.get("sourceFlags")),
            settlements=tuple(SettlementNormalizer().normalize_all(raw.get("settlements"))),
        )

    def find_settlement(self, name: str) -> Optional[Settlement]:
        """Settlement by name (case-insensitive), None if absent."""
        wanted = name.strip().lower()
        for settlement in self.settlements:
            if settlement.name.lower() == wanted:
                return settlement
        return None

    def settlements_in_region(self, region: str) -> list[Settlement]:
        """Settlements of a region, in dataset order."""
        wanted = region.strip().lower()
        return [s for s in self.settlements if s.region.lower() == wanted]

    @property
    def regions(self) -> list[str]:
        """Distinct region names in first-seen order."""
        seen: dict[str, None] = {}
        for settlement in self.settlements:
            if settlement.region:
                seen.setdefault(settlement.region, None)
        return list(seen)


def placeholder_dataset(name: str) -> dict[str, Any]:
    """Raw data for a newly created dataset, ready to be edited."""
    cargo_defaults = CargoSlotDefaults()
    return {
        "settlements": [{
            "name": "Example Settlement",
            "region": "Example Region",
            "size": 3,
            "wealth": 3,
            "population": 1000,
            "ruler": "Local Authority",
            "notes": "This is a placeholder settlement.",
            "produces": [],
            "demands": [],
            "flags": [],
        }],
        "cargoTypes": [{
            "name": "Example Cargo",
            "category": "Trade Goods",
            "basePrice": 100,
            "description": "This is a placeholder cargo type.",
            "seasonalModifiers": {
                "spring": 1.0,
                "summer": 1.0,
                "autumn": 1.0,
                "winter": 1.0,
            },
        }],
        "config": {
            "system": name,
            "version": "1.0",
        },
        "tradingConfig": {
            "cargoSlots": {
                "basePerSize": {str(k): v for k, v in cargo_defaults.base_per_size.items()},
                "populationMultiplier": cargo_defaults.population_multiplier,
                "sizeMultiplier": cargo_defaults.size_multiplier,
                "hardCap": cargo_defaults.hard_cap,
                "flagMultipliers": dict(cargo_defaults.flag_multipliers),
            }
        },
        "sourceFlags": {},
    }


def validate_dataset_name(name: Any, existing: tuple[str, ...] = ()) -> list[str]:
    """Validation errors for a new dataset name; empty list if valid."""
    if not isinstance(name, str) or not name.strip():
        return ["Dataset name cannot be empty"]

    errors = []
    name = name.strip()
    if not _DATASET_NAME_PATTERN.match(name):
        errors.append("Dataset name can only contain letters, numbers, hyphens, and underscores")
    if name in existing:
        errors.append("A dataset with this name already exists")
    return errors


class DatasetRegistry:
    """
    In-memory registry of built-in and user datasets.

    Built-in datasets are registered at construction and cannot be deleted.
    """

    def __init__(self, builtin: Optional[Mapping[str, Mapping[str, Any]]] = None) -> None:
        self.logger = logger
        if builtin is None:
            builtin = {dataset: placeholder_dataset(dataset) for dataset in BUILTIN_DATASETS}

        self._builtin = tuple(builtin)
        self._datasets: dict[str, dict[str, Any]] = {
            dataset: copy.deepcopy(dict(raw)) for dataset, raw in builtin.items()
        }

    def is_builtin(self, name: str) -> bool:
        return name in self._builtin

    def exists(self, name: str) -> bool:
        return name in self._datasets

    def names(self) -> tuple[str, ...]:
        return tuple(self._datasets)

    def user_datasets(self) -> tuple[str, ...]:
        return tuple(name for name in self._datasets if not self.is_builtin(name))

    def available(self) -> dict[str, str]:
        """Dataset name to display label, built-ins first."""
        labels = {name: BUILTIN_LABELS.get(name, f"{name} (Built-in)") for name in self._builtin}
        for name in self.user_datasets():
            labels[name] = f"{name} (User)"
        return labels

    def create(self, name: str, raw: Optional[Mapping[str, Any]] = None) -> DatasetSnapshot:
        """
        Create a user dataset, seeded with placeholder data unless given.

        Raises:
            DatasetNameError: If the name is invalid or already taken
        """
        errors = validate_dataset_name(name, self.names())
        if errors:
            raise DatasetNameError(
                f"Invalid dataset name {name!r}: {'; '.join(errors)}",
                dataset=str(name),
                errors=errors,
            )

        name = name.strip()
        data = copy.deepcopy(dict(raw)) if raw is not None else placeholder_dataset(name)
        snapshot = DatasetSnapshot.from_dict(name, data)
        self._datasets[name] = data
        self.logger.info("Created user dataset", dataset=name, placeholder=raw is None)
        return snapshot

    def delete(self, name: str) -> None:
        """
        Delete a user dataset.

        Raises:
            ProtectedDatasetError: If the dataset is built-in
            UnknownDatasetError: If no such dataset exists
        """
        if self.is_builtin(name):
            raise ProtectedDatasetError("Cannot delete built-in datasets", dataset=name)
        if name not in self._datasets:
            raise UnknownDatasetError(f"Dataset '{name}' not found", dataset=name)

        del self._datasets[name]
        self.logger.info("Deleted user dataset", dataset=name)

    def get(self, name: str) -> dict[str, Any]:
        """
        Copy of the raw data of a dataset.

        Raises:
            UnknownDatasetError: If no such dataset exists
        """
        if name not in self._datasets:
            available = ", ".join(self._datasets)
            raise UnknownDatasetError(
                f"Dataset '{name}' not found. Available datasets: {available}",
                dataset=name,
            )
        return copy.deepcopy(self._datasets[name])

    def snapshot(self, name: str, loader: Optional[ConfigLoader] = None) -> DatasetSnapshot:
        """
        Immutable snapshot of a dataset for calculations.

        With a ``loader`` the trading configuration is layered: loader defaults,
        then datasets.yaml, then the dataset's own ``tradingConfig``.
        """
        raw = self.get(name)
        snapshot = DatasetSnapshot.from_dict(name, raw)
        if loader is None:
            return snapshot

        trading_config = raw.get("tradingConfig")
        if not isinstance(trading_config, Mapping):
            trading_config = {}
        overrides = {"cargo_slots": snake_case_cargo_slots(trading_config.get("cargoSlots"))}
        return replace(snapshot, config=loader.trading_config(name, overrides))

    def validate(self, name: str) -> list[ValidationError]:
        """Configuration validation errors for a dataset."""
        raw = self.get(name)
        trading_config = raw.get("tradingConfig") or {}
        config = dict(trading_config) if isinstance(trading_config, Mapping) else {"cargoSlots": trading_config}
        if "sourceFlags" in raw:
            config["sourceFlags"] = raw["sourceFlags"]
        return ConfigValidator.validate_config(config)
