#!/usr/bin/env python3
"""Configuration validation script."""

import sys
from pathlib import Path
from typing import List, Optional

# Add the project root to the Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from futures_card.config.loader import ConfigLoader
from futures_card.config.validation import ConfigValidator, ValidationError


def validate_settings(config_dir: Optional[Path] = None) -> List[ValidationError]:
    """Validate defaults merged with settings.yaml from config_dir."""
    loader = ConfigLoader.create(config_dir)
    config = loader.merge_config()
    errors = ConfigValidator.validate_config(config)
    if not errors:
        # Surfaces unknown keys and type mismatches
        loader.build_config(config)
    return errors


def main():
    """Main validation function."""
    config_dir = Path(sys.argv[1]) if len(sys.argv) > 1 else None
    location = config_dir or project_root / "config"
    print(f"🔍 Validating futures card configuration in {location}...")

    try:
        errors = validate_settings(config_dir)
    except Exception as e:
        print(f"❌ Error loading configuration: {e}")
        sys.exit(1)

    if errors:
        print(f"❌ Found {len(errors)} validation errors:")
        for error in errors:
            print(f"  • {error.field}: {error.message} (value: {error.value})")
        sys.exit(1)

    print("🎉 Configuration validation passed!")
    sys.exit(0)


if __name__ == "__main__":
    main()
