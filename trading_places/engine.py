"""
Main trading engine coordinator.

Owns the active dataset snapshot and current season, and calls into the
calculation core. This is the layer where calculation failures are caught,
logged and replaced by fallback values so the caller always gets something
it can display.
"""

from typing import Any, Optional, Union

import structlog

from .config.defaults import EngineParams
from .config.loader import ConfigLoader
from .data.models import CargoSlotStep, EffectiveModifiers, Season, Settlement
from .data.normalizer import parse_season, resolve_properties
from .datasets import DatasetRegistry, DatasetSnapshot
from .economy.cargo_slots import cargo_slot_breakdown, try_calculate_cargo_slots
from .economy.flags import compose_flag_effects, describe_flag
from .economy.labels import is_trade_settlement, size_name, wealth_name
from .errors import TradingCalculationError

logger = structlog.get_logger(__name__)


class TradingEngine:
    """
    Coordinator for settlement trading calculations.

    Manages the calculation pipeline:
    Dataset Snapshot + Season → Property Resolution → Cargo Slots / Flag Effects
    """

    def __init__(
        self,
        snapshot: Optional[DatasetSnapshot] = None,
        season: Union[Season, str, None] = None,
        params: Optional[EngineParams] = None,
    ) -> None:
        """Initialize the trading engine."""
        self.logger = logger
        self.params = params or EngineParams()
        self._snapshot = snapshot
        self._season = parse_season(season or self.params.default_season)

        self.logger.info(
            "Trading engine initialized",
            dataset=snapshot.name if snapshot else None,
            season=self._season.value,
        )

    @classmethod
    def from_registry(
        cls,
        registry: DatasetRegistry,
        dataset: Optional[str] = None,
        season: Union[Season, str, None] = None,
        params: Optional[EngineParams] = None,
        loader: Optional[ConfigLoader] = None,
    ) -> "TradingEngine":
        """Create an engine on a registry dataset (the default dataset if omitted)."""
        params = params or EngineParams()
        engine = cls(season=season, params=params)
        engine.switch_to(registry, dataset or params.default_dataset, loader)
        return engine

    @property
    def snapshot(self) -> Optional[DatasetSnapshot]:
        return self._snapshot

    @property
    def current_season(self) -> Season:
        return self._season

    def set_current_season(self, season: Union[Season, str]) -> None:
        """
        Change the trading season.

        Raises:
            InvalidSeasonError: If the season token is unknown
        """
        new_season = parse_season(season)
        previous = self._season
        self._season = new_season
        self.logger.info("Trading season changed", from_season=previous.value, to_season=new_season.value)

    def switch_dataset(self, snapshot: DatasetSnapshot) -> None:
        """Replace the active dataset snapshot."""
        previous = self._snapshot.name if self._snapshot else None
        self._snapshot = snapshot
        self.logger.info(
            "Switched dataset",
            from_dataset=previous,
            to_dataset=snapshot.name,
            settlements=len(snapshot.settlements),
        )

    def switch_to(self, registry: DatasetRegistry, dataset: str,
                  loader: Optional[ConfigLoader] = None) -> None:
        """
        Validate a registry dataset and make it active.

        Validation problems are logged as warnings; the dataset is still
        loaded so the remaining data stays usable.

        Raises:
            UnknownDatasetError: If the dataset is not registered
        """
        validation_errors = registry.validate(dataset)
        if validation_errors:
            self.logger.warning(
                "Dataset loaded with configuration warnings",
                dataset=dataset,
                errors=[f"{err.field}: {err.message} (got: {err.value})" for err in validation_errors],
            )
        self.switch_dataset(registry.snapshot(dataset, loader))

    def cargo_slots(self, settlement: Optional[Settlement],
                    season: Union[Season, str, None] = None) -> int:
        """Cargo slots for a settlement, 0 if the calculation cannot run."""
        if self._snapshot is None:
            self.logger.warning("No active dataset, cargo slots unavailable")
            return 0

        result = try_calculate_cargo_slots(settlement, season or self._season, self._snapshot.config)
        if not result.success:
            self.logger.warning(
                "Error calculating cargo slots",
                settlement=settlement.name if settlement else None,
                error=result.error_msg,
            )
        return result.value_or(0)

    def cargo_slot_breakdown(self, settlement: Optional[Settlement],
                             season: Union[Season, str, None] = None) -> list[CargoSlotStep]:
        """Step-by-step cargo slot calculation, empty if it cannot run."""
        if self._snapshot is None:
            return []

        try:
            return cargo_slot_breakdown(settlement, season or self._season, self._snapshot.config)
        except (TradingCalculationError, ArithmeticError, ValueError) as e:
            self.logger.warning(
                "Error getting calculation breakdown",
                settlement=settlement.name if settlement else None,
                error=str(e),
            )
            return []

    def flag_effects(self, settlement: Optional[Settlement]) -> EffectiveModifiers:
        """Combined flag modifiers for a settlement."""
        source_flags = self._snapshot.source_flags if self._snapshot else None
        return compose_flag_effects(settlement, source_flags)

    def describe_flag(self, flag: str) -> str:
        """Plain-text flag description under the active dataset."""
        source_flags = self._snapshot.source_flags if self._snapshot else None
        return describe_flag(flag, source_flags)

    def find_settlement(self, name: str) -> Optional[Settlement]:
        if self._snapshot is None:
            return None
        return self._snapshot.find_settlement(name)

    def settlements_in_region(self, region: str) -> list[Settlement]:
        if self._snapshot is None:
            return []
        return self._snapshot.settlements_in_region(region)

    def settlement_summary(self, settlement: Settlement,
                           season: Union[Season, str, None] = None) -> dict[str, Any]:
        """
        Everything the trading view shows for one settlement.

        Raises:
            InvalidSeasonError: If an explicit season token is unknown
        """
        props = resolve_properties(settlement)
        modifiers = self.flag_effects(settlement)
        return {
            "name": settlement.name,
            "region": settlement.region,
            "season": (parse_season(season) if season else self._season).value,
            "size": props.size_numeric,
            "size_name": size_name(props.size_numeric),
            "wealth": props.wealth_numeric,
            "wealth_name": wealth_name(props.wealth_numeric),
            "population": props.population,
            "is_trade_settlement": is_trade_settlement(settlement),
            "cargo_slots": self.cargo_slots(settlement, season),
            "contraband_chance": modifiers.contraband_chance,
            "quality_multiplier": modifiers.quality_multiplier,
            "ui_tags": list(modifiers.ui_tags),
        }
