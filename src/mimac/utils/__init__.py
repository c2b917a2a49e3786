"""Utility functions for mimac.

This module provides configuration, logging, and visualization utilities.
"""

from mimac.utils.config import (
    default_config,
    get_nested,
    load_config,
    merge_configs,
    save_config,
    to_dict,
    validate_config,
)
from mimac.utils.logging import (
    LoggerAdapter,
    get_logger,
    log_metrics,
    session_logger,
    setup_logging,
)
from mimac.utils.visualization import (
    plot_energy_comparison,
    save_figure,
)

__all__ = [
    # config
    "default_config",
    "load_config",
    "merge_configs",
    "to_dict",
    "validate_config",
    "get_nested",
    "save_config",
    # logging
    "setup_logging",
    "get_logger",
    "LoggerAdapter",
    "log_metrics",
    "session_logger",
    # visualization
    "plot_energy_comparison",
    "save_figure",
]
