"""Node configuration for the auxiliary store."""

from .config import (
    LEGACY_CONFIG_NAME,
    NodeConfig,
    build_parser,
    load_config,
    read_config_file,
)

__all__ = [
    "LEGACY_CONFIG_NAME",
    "NodeConfig",
    "build_parser",
    "load_config",
    "read_config_file",
]
