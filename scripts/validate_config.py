#!/usr/bin/env python3
"""Configuration validation script."""

import sys
from pathlib import Path
from typing import List

# Add the project root to the Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from trading_places.config.loader import ConfigLoader
from trading_places.config.validation import ConfigValidator, ValidationError


def validate_dataset_config(dataset: str) -> List[ValidationError]:
    """Validate configuration for a specific dataset."""
    loader = ConfigLoader.create()
    config = loader.merge_config(dataset)
    return ConfigValidator.validate_config(config)


def main():
    """Main validation function."""
    print("🔍 Validating Trading Places configuration...")

    loader = ConfigLoader.create()

    test_datasets = [
        "wfrp4e",
        "custom",
        "UNKNOWN-DATASET"  # Should use defaults
    ]

    all_valid = True

    for dataset in test_datasets:
        print(f"\n📊 Validating {dataset}...")

        try:
            errors = validate_dataset_config(dataset)

            if errors:
                print(f"❌ Found {len(errors)} validation errors:")
                for error in errors:
                    print(f"  • {error.field}: {error.message} (value: {error.value})")
                all_valid = False
            else:
                print(f"✅ {dataset} configuration is valid")

        except Exception as e:
            print(f"❌ Error validating {dataset}: {e}")
            all_valid = False

    print(f"\n📋 Testing explicit overrides...")
    test_overrides = {
        "cargo_slots": {
            "hard_cap": 8,
            "flag_multipliers": {"trade": 1.25},
        }
    }

    try:
        config = loader.merge_config("wfrp4e", test_overrides)
        errors = ConfigValidator.validate_config(config)

        if errors:
            print(f"❌ Override validation failed:")
            for error in errors:
                print(f"  • {error.field}: {error.message}")
            all_valid = False
        else:
            print(f"✅ Override validation passed")

    except Exception as e:
        print(f"❌ Error testing overrides: {e}")
        all_valid = False

    if all_valid:
        print(f"\n🎉 All configuration validation passed!")
        sys.exit(0)
    else:
        print(f"\n❌ Configuration validation failed!")
        sys.exit(1)


if __name__ == "__main__":
    main()
