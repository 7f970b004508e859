#!/usr/bin/env python3
"""Configuration validation script."""

import sys
from pathlib import Path
from typing import List

# Add the project root to the Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

import yaml

from presence_app.config.loader import ConfigLoader
from presence_app.config.validation import ConfigValidator, ValidationError


def validate_profile_config(loader: ConfigLoader, profile: str) -> List[ValidationError]:
    """Validate configuration for a specific deployment profile."""
    config = loader.merge_config(profile)
    return ConfigValidator.validate_config(config)


def main():
    """Main validation function."""
    config_dir = Path(sys.argv[1]) if len(sys.argv) > 1 else None
    loader = ConfigLoader.create(config_dir)
    profiles_file = loader.config_dir / "profiles.yaml"

    print(f"Validating presence tracker configuration in {loader.config_dir}")

    profiles = [None]
    if profiles_file.exists():
        with open(profiles_file) as f:
            profiles += list((yaml.safe_load(f) or {}).get("profiles", {}))

    all_valid = True

    for profile in profiles:
        name = profile or "(defaults)"
        try:
            errors = validate_profile_config(loader, profile)
        except yaml.YAMLError as e:
            print(f"  {name}: cannot parse profiles.yaml: {e}")
            all_valid = False
            continue

        if errors:
            print(f"  {name}: {len(errors)} validation errors")
            for error in errors:
                print(f"    - {error.field}: {error.message} (value: {error.value!r})")
            all_valid = False
        else:
            print(f"  {name}: ok")

    sys.exit(0 if all_valid else 1)


if __name__ == "__main__":
    main()
