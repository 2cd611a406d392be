"""
Filesystem layout of the namespaces.

    <dataRoot>/<networkDirName>/<prefix>_<engineType>/
"""

from __future__ import annotations

from pathlib import Path

from monad_store.subspecs.chaincfg import BitcoinNet, NetworkParams
from monad_store.subspecs.node import NodeConfig

from .namespaces import NamespaceDescriptor


def net_name(params: NetworkParams) -> str:
    """
    Return the directory name used when referring to a network.

    Data for the fourth test network generation lives in "testnet", which
    does not match the canonical "testnet4" name of its parameters. Every
    other network uses its canonical name.
    """
    if params.net == BitcoinNet.TEST_NET4:
        return "testnet"
    return params.name


def resolve_path(
    namespace: NamespaceDescriptor,
    params: NetworkParams,
    data_root: Path,
) -> Path:
    """
    Compute the directory of a namespace.

    Args:
        namespace: The namespace to locate.
        params: Parameters of the active network.
        data_root: Root data directory.

    Returns:
        `data_root / net_name(params) / namespace.dir_name`.
    """
    return Path(data_root) / net_name(params) / namespace.dir_name


def namespace_path(namespace: NamespaceDescriptor, config: NodeConfig) -> Path:
    """Compute the directory of a namespace for a loaded configuration."""
    return resolve_path(namespace, config.net_params, config.data_dir)
