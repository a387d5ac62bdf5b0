#!/usr/bin/env python3
"""Configuration validation script."""

import sys
from pathlib import Path

# Add the project root to the Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from tambola_caller.config.loader import CONFIG_FILENAME, ConfigLoader
from tambola_caller.config.validation import ConfigValidator


def main():
    """Main validation function."""
    config_dir = Path(sys.argv[1]) if len(sys.argv) > 1 else None
    loader = ConfigLoader.create(config_dir)

    print(f"🔍 Validating {loader.config_dir / CONFIG_FILENAME}...")

    try:
        merged = loader.merge_config()
    except Exception as e:
        print(f"❌ Could not read configuration: {e}")
        return 1

    errors = ConfigValidator.validate_config(merged)
    if errors:
        print(f"❌ Found {len(errors)} validation errors:")
        for error in errors:
            print(f"  • {error.field}: {error.message} (value: {error.value})")
        return 1

    config = loader.load_config()
    print("✅ Configuration is valid")
    print(f"  pool size:      {config.engine.pool_size}")
    print(f"  auto interval:  {config.engine.default_auto_interval}s "
          f"(bounds {config.engine.min_auto_interval}-{config.engine.max_auto_interval}s)")
    print(f"  storage:        {config.storage.directory}")
    print(f"  record keys:    {config.storage.session_key}, {config.storage.settings_key}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
