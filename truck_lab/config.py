"""
YAML configuration loading shared by both entry points.
"""

from pathlib import Path

import yaml

DEFAULT_CONFIG_PATH = Path(__file__).parent.parent / "config" / "config.yaml"


def load_config(config_path: str = None) -> dict:
    """Load configuration from YAML file."""
    if config_path and Path(config_path).exists():
        with open(config_path, 'r') as f:
            return yaml.safe_load(f) or {}

    if config_path:
        print(f"Warning: Config file {config_path} not found")

    # Try default path
    if DEFAULT_CONFIG_PATH.exists():
        with open(DEFAULT_CONFIG_PATH, 'r') as f:
            return yaml.safe_load(f) or {}

    print("Warning: No config file found, using defaults")
    return {}
