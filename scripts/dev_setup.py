#!/usr/bin/env python3
"""Development setup script for Futures Card."""

import subprocess
import sys
from pathlib import Path

STEPS = [
    ("poetry install --all-extras", "Installing dependencies", True),
    ("poetry run ruff check futures_card tests", "Running linter checks", False),
    ("poetry run mypy futures_card", "Running type checker", False),
    ("poetry run pytest -m 'not integration'", "Running unit tests", False),
    ("poetry run python scripts/validate_config.py", "Validating config/settings.yaml", False),
]


def run_command(cmd: str, description: str) -> bool:
    """Run a command and return success status."""
    print(f"🔧 {description}...")
    try:
        subprocess.run(cmd, shell=True, check=True, capture_output=True, text=True)
    except subprocess.CalledProcessError as e:
        print(f"❌ {description} failed:")
        print(f"Command: {cmd}")
        print(f"Error: {e.stderr or e.stdout}")
        return False
    print(f"✅ {description} completed successfully")
    return True


def main():
    """Main setup function."""
    print("🚀 Setting up Futures Card development environment...")

    if not Path("pyproject.toml").exists():
        print("❌ No pyproject.toml found. Please run this script from the project root.")
        sys.exit(1)

    warnings = []
    for cmd, description, required in STEPS:
        if run_command(cmd, description):
            continue
        if required:
            sys.exit(1)
        warnings.append(description)

    print("\n🎉 Development environment setup complete!")
    if warnings:
        print(f"⚠️  Review: {', '.join(warnings)}")
    print("\nNext steps:")
    print("1. Copy config/settings.example.yaml to config/settings.yaml if needed")
    print("2. Run the offline demo: poetry run python examples/basic_usage.py")
    print("3. Check the live services: poetry run python scripts/smoke_test.py")


if __name__ == "__main__":
    main()
