"""Scenario configuration loading and management.

Scenarios are OmegaConf configs with four sections:

- ``energy``: per-state currents (uA) and the two energy scales
- ``packets``: representative DATA size
- ``coils``: ordered per-coil RSSI readings
- ``holds``: per-variant, per-phase state hold durations
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from omegaconf import DictConfig, OmegaConf

REQUIRED_KEYS = [
    "energy.currents_ua",
    "energy.state_scale",
    "energy.transmit_scale",
    "packets.data_bytes",
    "coils",
    "holds.mi_mac",
    "holds.csma_ca",
]

DEFAULTS: dict[str, Any] = {
    "energy": {
        "currents_ua": {
            "idle": 50.0,
            "receive": 200.0,
            "data_acquire": 250.0,
            "channel_sensing": 200.0,
            "transmit": 1120.0,
        },
        "state_scale": 1.0,
        "transmit_scale": 0.001,
    },
    "packets": {"data_bytes": 10},
    "coils": [
        {"coil": "X", "rssi_dbm": -45.5},
        {"coil": "Y", "rssi_dbm": -52.3},
        {"coil": "Z", "rssi_dbm": -48.7},
    ],
    "holds": {
        "mi_mac": {
            "data_acquire": 10,
            "channel_sensing": 5,
            "ack_wait": 5,
            "rev_receive": 15,
            "ack_sensing": 3,
            "data_sensing": 3,
            "data_receive": 10,
        },
        "csma_ca": {
            "data_acquire": 10,
            "channel_sensing": 8,
            "cts_wait": 8,
            "rts_receive": 20,
            "cts_sensing": 5,
            "ack_wait": 5,
            "data_receive": 10,
        },
    },
}


def default_config() -> DictConfig:
    """Build the default scenario configuration."""
    return OmegaConf.create(DEFAULTS)


def load_config(config_path: str | Path, with_defaults: bool = True) -> DictConfig:
    """Load a YAML scenario file.

    Args:
        config_path: Path to the YAML file.
        with_defaults: Overlay the file on the default scenario, so partial
            files only need the values they change.

    Returns:
        Configuration as a DictConfig.

    Raises:
        FileNotFoundError: If the file does not exist.
    """
    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    loaded = OmegaConf.load(config_path)
    if with_defaults:
        return merge_configs(default_config(), loaded)
    return loaded


def merge_configs(*configs: DictConfig) -> DictConfig:
    """Merge configurations; later ones override earlier ones."""
    return OmegaConf.merge(*configs)


def to_dict(config: DictConfig) -> dict[str, Any]:
    """Convert a DictConfig to a plain dictionary."""
    return OmegaConf.to_container(config, resolve=True)


def validate_config(config: DictConfig, required_keys: list[str] | None = None) -> None:
    """Check that required keys are present.

    Args:
        config: Configuration to validate.
        required_keys: Dotted key paths; the scenario keys if None.

    Raises:
        ValueError: If any required key is missing.
    """
    if required_keys is None:
        required_keys = REQUIRED_KEYS

    missing = [key for key in required_keys if OmegaConf.select(config, key) is None]
    if missing:
        raise ValueError(f"Missing required configuration keys: {missing}")


def get_nested(config: DictConfig, key: str, default: Any = None) -> Any:
    """Get a nested configuration value, or ``default`` if absent."""
    return OmegaConf.select(config, key, default=default)


def save_config(config: DictConfig, path: str | Path) -> None:
    """Save configuration to a YAML file."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    OmegaConf.save(config, path)
