#!/usr/bin/env python3
"""
Basic Usage Example - Trading Places Economy Engine

This script demonstrates the basic usage of the trading engine with a small
sample dataset. It shows how to:
- Register a dataset and switch the engine to it
- Calculate cargo slots and print the step-by-step breakdown
- Compose flag effects for a settlement
- Change the trading season

Run: python examples/basic_usage.py
"""

from typing import Any, Dict

from trading_places.datasets import DatasetRegistry
from trading_places.economy.equilibrium import EquilibriumState, equilibrium_label
from trading_places.engine import TradingEngine
from trading_places.logging.config import configure_logging


def create_sample_dataset() -> Dict[str, Any]:
    """Create a small dataset with two settlements and three flags."""
    return {
        "settlements": [
            {
                "name": "Altdorf",
                "region": "Reikland",
                "size": "CS",
                "wealth": 5,
                "population": 105000,
                "flags": ["trade", "government"],
                "produces": ["Luxuries"],
            },
            {
                "name": "Bögenhafen",
                "region": "Reikland",
                "size": "T",
                "wealth": 4,
                "population": 5000,
                "flags": ["trade", "smuggling"],
                "produces": ["Wool", "Wine"],
            },
        ],
        "tradingConfig": {
            "cargoSlots": {
                "basePerSize": {"1": 1, "2": 2, "3": 3, "4": 4, "5": 5},
                "populationMultiplier": 0.0001,
                "sizeMultiplier": 0.5,
                "hardCap": 20,
                "flagMultipliers": {"trade": 1.5, "smuggling": 1.1},
            }
        },
        "sourceFlags": {
            "trade": {
                "description": "A trading hub with busy markets",
                "supplyTransfer": 0.1,
                "demandTransfer": 0.1,
                "availabilityBonus": {"producers": 0.2},
                "uiTags": ["market"],
            },
            "smuggling": {
                "description": "Goods slip past the toll collectors",
                "contrabandChance": 0.25,
                "quality": 0.9,
                "uiTags": ["contraband"],
            },
            "government": {
                "description": "Seat of the Imperial court",
                "categoryDemandTransfer": {"Luxuries": 0.15},
                "quality": 1.2,
            },
        },
    }


def main() -> None:
    configure_logging(level="WARNING")

    registry = DatasetRegistry()
    registry.create("sample", create_sample_dataset())

    engine = TradingEngine.from_registry(registry, "sample", season="spring")

    for settlement in engine.settlements_in_region("Reikland"):
        print(f"\n🏘️  {settlement.name}")
        for step in engine.cargo_slot_breakdown(settlement):
            print(f"  {step.label:<40} {step.display_total:>8}")

        modifiers = engine.flag_effects(settlement)
        print(f"  Supply transfer:   {modifiers.supply_transfer:+.0%}")
        print(f"  Contraband chance: {modifiers.contraband_chance:.0%}")
        print(f"  Quality:           x{modifiers.quality_multiplier:.2f}")
        print(f"  Tags:              {', '.join(modifiers.ui_tags) or '-'}")

    print("\n" + engine.describe_flag("smuggling"))

    engine.set_current_season("winter")
    summary = engine.settlement_summary(engine.find_settlement("Altdorf"))
    print(f"\n❄️  {summary['name']} in {summary['season']}: {summary['cargo_slots']} cargo slots")

    print(f"\nMarket state: {equilibrium_label(EquilibriumState.DESPERATE)}")


if __name__ == "__main__":
    main()
