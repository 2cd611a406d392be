"""Subsystems of the auxiliary node store."""

from .chaincfg import Network, NetworkParams, params_for
from .node import NodeConfig, load_config

__all__ = [
    "Network",
    "NetworkParams",
    "NodeConfig",
    "load_config",
    "params_for",
]
