"""Pytest configuration and shared fixtures."""

import pytest
from typing import Dict, Any

from trading_places.data.models import Settlement, TradingConfig, parse_source_flags


@pytest.fixture
def sample_trading_config_data() -> Dict[str, Any]:
    """Sample tradingConfig section as authored in a dataset."""
    return {
        "cargoSlots": {
            "basePerSize": {"3": 3},
            "populationMultiplier": 0.001,
            "sizeMultiplier": 0.5,
            "hardCap": 20,
            "flagMultipliers": {"trade": 1.2},
        }
    }


@pytest.fixture
def sample_trading_config(sample_trading_config_data) -> TradingConfig:
    """Trading configuration snapshot built from the sample section."""
    return TradingConfig.from_dict(sample_trading_config_data)


@pytest.fixture
def sample_settlement() -> Settlement:
    """Town-sized trade settlement with 1000 inhabitants."""
    return Settlement(
        name="Ubersreik",
        region="Reikland",
        size="T",
        wealth=3,
        population=1000,
        flags=("trade",),
    )


@pytest.fixture
def sample_source_flags_data() -> Dict[str, Any]:
    """Sample sourceFlags section as authored in a dataset."""
    return {
        "trade": {
            "description": "Busy trading town",
            "supplyTransfer": 0.1,
            "demandTransfer": 0.05,
            "availabilityBonus": {"producers": 0.2, "seekers": -0.1},
            "categorySupplyTransfer": {"Wine": 0.1},
            "quality": 1.1,
            "uiTags": ["market"],
        },
        "contraband": {
            "description": "Smugglers operate openly",
            "contrabandChance": 0.2,
            "categorySupplyTransfer": {"Wine": 0.05, "Spices": 0.3},
            "quality": 1.2,
            "uiTags": ["shady", "market"],
        },
        "mining": {
            "description": "Mines in the hills",
            "categoryDemandTransfer": {"Tools": 0.25},
            "availabilityBonus": {"producers": -0.05},
        },
    }


@pytest.fixture
def sample_source_flags(sample_source_flags_data):
    """Parsed flag definitions."""
    return parse_source_flags(sample_source_flags_data)


@pytest.fixture
def sample_dataset(sample_trading_config_data, sample_source_flags_data) -> Dict[str, Any]:
    """Complete raw dataset with three settlements."""
    return {
        "settlements": [
            {
                "name": "Ubersreik",
                "region": "Reikland",
                "size": "T",
                "wealth": 3,
                "population": 1000,
                "flags": ["trade"],
            },
            {
                "name": "Grissenwald",
                "region": "Reikland",
                "size": "V",
                "wealth": 2,
                "population": 300,
                "flags": ["mining", "contraband"],
            },
            {
                "name": "Middenheim",
                "region": "Middenland",
                "size": "CS",
                "wealth": 5,
                "population": 30000,
                "flags": [],
            },
        ],
        "tradingConfig": sample_trading_config_data,
        "sourceFlags": sample_source_flags_data,
    }
