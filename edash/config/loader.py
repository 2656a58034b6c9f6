"""
Configuration loading for EDASH.

Handles loading configuration from ~/.edash/config.json with sensible defaults.
"""

import json
import logging
from pathlib import Path
from typing import Dict, Any
import copy

logger = logging.getLogger(__name__)

DEFAULT_CONFIG: Dict[str, Any] = {
    # Heatmap surface parameters
    "heatmap": {
        "seed_offset": 12345,
        "base_load": 200.0,
        "floor": 50.0,
        "amplitude": 100.0
    },

    # Web dashboard
    "server": {
        "host": "127.0.0.1",
        "port": 8080
    },

    # Display options
    "display": {
        "color_enabled": True,
        "unit": "kWh"
    },

    "log_level": "INFO"
}


def get_config_path() -> Path:
    """Get path to config file."""
    return Path.home() / ".edash" / "config.json"


def get_heatmap_params(config: Dict[str, Any]) -> Dict[str, Any]:
    """
    Get validated heatmap generator parameters from config.

    Raises ValueError for a non-positive base load or a negative floor/amplitude.
    """
    params = config["heatmap"]
    base_load = float(params["base_load"])
    floor = float(params["floor"])
    amplitude = float(params["amplitude"])

    if base_load <= 0:
        raise ValueError(f"heatmap.base_load must be positive, got {base_load}")
    if floor < 0:
        raise ValueError(f"heatmap.floor must not be negative, got {floor}")
    if amplitude < 0:
        raise ValueError(f"heatmap.amplitude must not be negative, got {amplitude}")

    return {
        "seed_offset": int(params["seed_offset"]),
        "base_load": base_load,
        "floor": floor,
        "amplitude": amplitude,
    }


def load_config() -> Dict[str, Any]:
    """
    Load configuration from file, merging with defaults.

    Returns a complete configuration with all default values filled in.
    User config overrides defaults where specified.
    """
    config = copy.deepcopy(DEFAULT_CONFIG)
    config_path = get_config_path()

    if config_path.exists():
        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                user_config = json.load(f)

            # Shallow merge sections
            for key in ['heatmap', 'server', 'display']:
                if key in user_config and isinstance(user_config[key], dict):
                    config[key].update(user_config[key])

            # Direct override for simple values
            if 'log_level' in user_config:
                config['log_level'] = user_config['log_level']

        except json.JSONDecodeError as e:
            logger.warning("Could not parse config file %s: %s", config_path, e)
        except OSError as e:
            logger.warning("Error loading config %s: %s", config_path, e)

    return config


def save_config(config: Dict[str, Any]) -> None:
    """Save configuration to file."""
    config_path = get_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)

    with open(config_path, 'w', encoding='utf-8') as f:
        json.dump(config, f, indent=2)
