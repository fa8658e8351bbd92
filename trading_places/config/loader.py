"""Configuration loader with 3-tier parameter precedence."""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

import yaml

from ..data.models import TradingConfig
from .defaults import DefaultConfig, get_default_config


@dataclass(frozen=True)
class ConfigLoader:
    """Manages configuration loading with 3-tier precedence."""

    config_dir: Path
    defaults: DefaultConfig

    @classmethod
    def create(cls, config_dir: Optional[Path] = None) -> "ConfigLoader":
        """Create a ConfigLoader instance."""
        if config_dir is None:
            config_dir = Path(__file__).parent.parent.parent / "config"

        return cls(
            config_dir=Path(config_dir),
            defaults=get_default_config(),
        )

    def load_dataset_config(self, dataset: str) -> dict[str, Any]:
        """Load dataset-specific configuration overrides."""
        datasets_file = self.config_dir / "datasets.yaml"

        if not datasets_file.exists():
            return {}

        with open(datasets_file) as f:
            datasets_config = yaml.safe_load(f) or {}

        return (datasets_config.get("datasets") or {}).get(dataset) or {}  # type: ignore[no-any-return]

    def merge_config(
        self,
        dataset: str,
        overrides: Optional[dict[str, Any]] = None
    ) -> dict[str, Any]:
        """
        Merge configuration with 3-tier precedence.

        Priority order:
        1. Explicit overrides (highest priority)
        2. Dataset-specific overrides from datasets.yaml
        3. Global defaults (lowest priority)
        """
        config = self._dataclass_to_dict(self.defaults)

        dataset_config = self.load_dataset_config(dataset)
        config = self._deep_merge(config, dataset_config)

        if overrides:
            config = self._deep_merge(config, overrides)

        return config

    def trading_config(
        self,
        dataset: str,
        overrides: Optional[dict[str, Any]] = None
    ) -> TradingConfig:
        """Build the immutable trading configuration snapshot for a dataset."""
        return TradingConfig.from_dict(self.merge_config(dataset, overrides))

    def _dataclass_to_dict(self, obj: Any) -> dict[str, Any]:
        """Convert nested dataclasses to dictionary."""
        if hasattr(obj, '__dataclass_fields__'):
            result = {}
            for field_name, _field in obj.__dataclass_fields__.items():
                value = getattr(obj, field_name)
                if hasattr(value, '__dataclass_fields__'):
                    result[field_name] = self._dataclass_to_dict(value)
                elif isinstance(value, dict):
                    result[field_name] = dict(value)
                else:
                    result[field_name] = value
            return result
        return obj  # type: ignore[no-any-return]

    def _deep_merge(self, base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
        """Deep merge two dictionaries."""
        result = base.copy()

        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value

        return result
