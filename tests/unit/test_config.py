"""Tests for configuration defaults, loading and validation."""

from pathlib import Path

import pytest
import yaml

from trading_places.config.defaults import get_default_config
from trading_places.config.loader import ConfigLoader
from trading_places.config.validation import ConfigValidator


@pytest.fixture
def config_dir(tmp_path: Path) -> Path:
    """Temporary config directory with a datasets.yaml."""
    (tmp_path / "datasets.yaml").write_text(yaml.safe_dump({
        "datasets": {
            "wfrp4e": {
                "cargo_slots": {
                    "population_multiplier": 0.0001,
                    "flag_multipliers": {"trade": 1.5},
                }
            },
            "custom": {"cargo_slots": {"hard_cap": 12}},
        }
    }))
    return tmp_path


class TestDefaults:
    """Test default configuration values."""

    def test_cargo_slot_defaults(self):
        defaults = get_default_config().cargo_slots

        assert defaults.base_per_size == {1: 1, 2: 2, 3: 3, 4: 4, 5: 5}
        assert defaults.population_multiplier == 0.001
        assert defaults.size_multiplier == 0.5
        assert defaults.hard_cap == 20
        assert defaults.flag_multipliers == {}

    def test_engine_and_question_defaults(self):
        defaults = get_default_config()

        assert defaults.engine.default_season == "spring"
        assert defaults.engine.default_dataset == "wfrp4e"
        assert defaults.questions.min_questions == 1
        assert defaults.questions.max_questions == 10


class TestConfigLoader:
    """Test 3-tier configuration precedence."""

    def test_load_dataset_config(self, config_dir):
        loader = ConfigLoader.create(config_dir)

        assert loader.load_dataset_config("custom") == {"cargo_slots": {"hard_cap": 12}}
        assert loader.load_dataset_config("unknown") == {}

    def test_missing_file_gives_empty_config(self, tmp_path):
        assert ConfigLoader.create(tmp_path).load_dataset_config("wfrp4e") == {}

    def test_dataset_config_overrides_defaults(self, config_dir):
        merged = ConfigLoader.create(config_dir).merge_config("wfrp4e")

        assert merged["cargo_slots"]["population_multiplier"] == 0.0001
        assert merged["cargo_slots"]["size_multiplier"] == 0.5
        assert merged["cargo_slots"]["flag_multipliers"] == {"trade": 1.5}

    def test_explicit_overrides_win(self, config_dir):
        merged = ConfigLoader.create(config_dir).merge_config(
            "custom", {"cargo_slots": {"hard_cap": 8}}
        )

        assert merged["cargo_slots"]["hard_cap"] == 8

    def test_merge_does_not_mutate_defaults(self, config_dir):
        loader = ConfigLoader.create(config_dir)
        loader.merge_config("wfrp4e", {"cargo_slots": {"flag_multipliers": {"mining": 0.9}}})

        assert loader.defaults.cargo_slots.flag_multipliers == {}

    def test_trading_config_snapshot(self, config_dir):
        config = ConfigLoader.create(config_dir).trading_config("custom")

        assert config.cargo_slots.hard_cap == 12
        assert config.cargo_slots.base_per_size[3] == 3
        assert config.cargo_slots.population_multiplier == 0.001

    def test_repository_config(self):
        """The shipped config/datasets.yaml is picked up by default."""
        config = ConfigLoader.create().trading_config("wfrp4e")

        assert config.cargo_slots.population_multiplier == 0.0001
        assert config.cargo_slots.flag_multipliers["trade"] == 1.5


class TestConfigValidator:
    """Test trading configuration validation."""

    def test_valid_config(self, sample_trading_config_data, sample_source_flags_data):
        config = dict(sample_trading_config_data, sourceFlags=sample_source_flags_data)
        assert ConfigValidator.validate_config(config) == []

    def test_invalid_cargo_slot_params(self):
        errors = ConfigValidator.validate_cargo_slot_params({
            "basePerSize": {"7": 3, "2": -1},
            "populationMultiplier": -0.1,
            "sizeMultiplier": "big",
            "hardCap": 0,
            "flagMultipliers": {"trade": 0},
        })

        fields = {error.field for error in errors}
        assert fields == {
            "basePerSize.7",
            "basePerSize.2",
            "populationMultiplier",
            "sizeMultiplier",
            "hardCap",
            "flagMultipliers.trade",
        }

    def test_snake_case_params_are_validated(self):
        errors = ConfigValidator.validate_cargo_slot_params({"hard_cap": -5})

        assert len(errors) == 1
        assert errors[0].field == "hardCap"
        assert errors[0].value == -5

    def test_invalid_source_flags(self):
        errors = ConfigValidator.validate_source_flags({
            "trade": {"supplyTransfer": "lots", "quality": 0},
            "contraband": {"contrabandChance": 1.5, "uiTags": "shady"},
            "mining": {"availabilityBonus": {"producers": "x"}, "categorySupplyTransfer": {"Ore": "y"}},
            "broken": 3,
        })

        fields = {error.field for error in errors}
        assert fields == {
            "sourceFlags.trade.supplyTransfer",
            "sourceFlags.trade.quality",
            "sourceFlags.contraband.contrabandChance",
            "sourceFlags.contraband.uiTags",
            "sourceFlags.mining.availabilityBonus.producers",
            "sourceFlags.mining.categorySupplyTransfer",
            "sourceFlags.broken",
        }

    def test_sections_must_be_objects(self):
        errors = ConfigValidator.validate_config({"cargoSlots": [], "sourceFlags": "none"})

        assert [(e.field, e.message) for e in errors] == [
            ("cargoSlots", "Must be an object"),
            ("sourceFlags", "Must be an object"),
        ]


class TestNonFiniteValidation:
    """Non-finite numbers are reported as invalid."""

    def test_infinite_and_nan_params(self):
        errors = ConfigValidator.validate_cargo_slot_params({
            "hardCap": float("inf"),
            "populationMultiplier": float("nan"),
            "flagMultipliers": {"trade": float("inf")},
            "basePerSize": {"3": float("nan")},
        })

        assert {error.field for error in errors} == {
            "hardCap",
            "populationMultiplier",
            "flagMultipliers.trade",
            "basePerSize.3",
        }

    def test_infinite_flag_fields(self):
        errors = ConfigValidator.validate_source_flags({"trade": {"supplyTransfer": float("inf")}})

        assert [error.field for error in errors] == ["sourceFlags.trade.supplyTransfer"]

    def test_engine_defaults_are_minimal(self):
        engine = get_default_config().engine

        assert set(engine.__dataclass_fields__) == {"default_season", "default_dataset"}
