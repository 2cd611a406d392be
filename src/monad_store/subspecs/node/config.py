"""
Node configuration loader.

Combines command line flags with an optional YAML config file. The result
selects the active network and the data directory that every namespace
path is derived from.

The expected YAML format uses the same keys as the long command line flags:

    datadir: /var/lib/monad/data
    testnet: true
    alertpubmainkey: 04fc97...
"""

from __future__ import annotations

import argparse
import logging
from collections.abc import Sequence
from pathlib import Path
from typing import Any

import yaml
from pydantic import Field, ValidationError, field_validator, model_validator

from monad_store.config import DEFAULT_CONFIG_FILE, DEFAULT_DATA_DIR
from monad_store.subspecs.chaincfg import Network, NetworkParams, decode_hex_key, params_for
from monad_store.types import ConfigurationError, StrictBaseModel

logger = logging.getLogger(__name__)

LEGACY_CONFIG_NAME = "monad.conf"
"""INI config of the node itself. Not read; its settings must be moved to YAML."""


class NodeConfig(StrictBaseModel):
    """
    Configuration consumed by the store.

    Field aliases match the config file keys and long flag names.
    """

    data_dir: Path = Field(default=DEFAULT_DATA_DIR, alias="datadir")
    """Location of the data directory."""

    config_file: Path = Field(default=DEFAULT_CONFIG_FILE, alias="configfile")
    """Path to the YAML config file."""

    testnet: bool = Field(default=False, alias="testnet")
    """Use the test network."""

    regtest: bool = Field(default=False, alias="regtest")
    """Use the regression test network."""

    simnet: bool = Field(default=False, alias="simnet")
    """Use the simulation test network."""

    alert_pub_main_key: bytes | None = Field(default=None, alias="alertpubmainkey")
    """Override for the network's primary alert public key."""

    alert_pub_sub_key: bytes | None = Field(default=None, alias="alertpubsubkey")
    """Override for the network's secondary alert public key."""

    @field_validator("data_dir", "config_file", mode="before")
    @classmethod
    def parse_path(cls, v: Any) -> Any:
        """YAML and argparse hand over plain strings; expand them to paths."""
        if isinstance(v, str):
            return Path(v).expanduser()
        return v

    @field_validator("alert_pub_main_key", "alert_pub_sub_key", mode="before")
    @classmethod
    def parse_hex_key(cls, v: Any) -> Any:
        """Convert hex strings to raw key bytes."""
        return decode_hex_key(v)

    @model_validator(mode="after")
    def check_single_network(self) -> NodeConfig:
        """Multiple networks can't be selected simultaneously."""
        selected = [name for name in ("testnet", "regtest", "simnet") if getattr(self, name)]
        if len(selected) > 1:
            raise ValueError(
                f"The {' and '.join(selected)} params can't be used together -- "
                "choose one of the networks"
            )
        return self

    @property
    def network(self) -> Network:
        """The selected network. Mainnet unless a test network flag is set."""
        if self.testnet:
            return Network.TESTNET
        if self.regtest:
            return Network.REGTEST
        if self.simnet:
            return Network.SIMNET
        return Network.MAINNET

    @property
    def net_params(self) -> NetworkParams:
        """Parameter table of the selected network, with alert key overrides applied."""
        params = params_for(self.network)
        overrides: dict[str, bytes] = {}
        if self.alert_pub_main_key is not None:
            overrides["alert_pub_main_key"] = self.alert_pub_main_key
        if self.alert_pub_sub_key is not None:
            overrides["alert_pub_sub_key"] = self.alert_pub_sub_key
        if not overrides:
            return params
        return NetworkParams.model_validate(params.model_dump() | overrides)


def build_parser() -> argparse.ArgumentParser:
    """
    Build the parser for the configuration flags.

    Help is left to the caller's parser so unknown arguments pass through.
    """
    parser = argparse.ArgumentParser(add_help=False)
    parser.add_argument(
        "-b",
        "--datadir",
        default=None,
        help="Location of the monad data directory",
    )
    parser.add_argument(
        "-C",
        "--configfile",
        default=None,
        help="Path to configuration file",
    )
    parser.add_argument(
        "--testnet",
        action="store_true",
        default=None,
        help="Use the test network",
    )
    parser.add_argument(
        "--regtest",
        action="store_true",
        default=None,
        help="Use the regression test network",
    )
    parser.add_argument(
        "--simnet",
        action="store_true",
        default=None,
        help="Use the simulation test network",
    )
    return parser


def read_config_file(path: Path, *, required: bool) -> dict[str, Any]:
    """
    Read the YAML config file.

    Args:
        path: File to read.
        required: Whether a missing file is an error.

    Returns:
        Mapping of config keys to values. Empty when the file is absent.

    Raises:
        ConfigurationError: If the file is required but missing, unreadable,
            not valid YAML, or not a mapping.
    """
    try:
        with path.open(encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except FileNotFoundError as e:
        if required:
            raise ConfigurationError(f"Config file {path} does not exist") from e
        legacy = path.with_name(LEGACY_CONFIG_NAME)
        if legacy.exists():
            logger.warning(
                "Ignoring %s: only YAML config is read. Move its settings to %s",
                legacy,
                path,
            )
        else:
            logger.debug("No config file at %s, using defaults", path)
        return {}
    except OSError as e:
        raise ConfigurationError(f"Cannot read config file {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Cannot parse config file {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(
            f"Config file {path} must contain a mapping, got {type(data).__name__}"
        )
    return data


def load_config(argv: Sequence[str] | None = None) -> tuple[NodeConfig, list[str]]:
    """
    Initialize and validate the config from the config file and command line.

    Precedence, lowest first: built-in defaults, config file, command line.

    Only YAML is read. A node's INI `monad.conf` next to a missing YAML file
    is ignored with a warning, so its network selection does not apply.

    Args:
        argv: Command line arguments (without the program name).
              Defaults to sys.argv[1:].

    Returns:
        The validated config and the arguments that were not consumed.

    Raises:
        ConfigurationError: If the file cannot be read or the combined
            settings are invalid (e.g. two networks selected).
    """
    args, remaining = build_parser().parse_known_args(argv)

    config_file = Path(args.configfile).expanduser() if args.configfile else DEFAULT_CONFIG_FILE
    values = read_config_file(config_file, required=args.configfile is not None)
    values["configfile"] = config_file

    # Flags left at None were not given and must not mask file values.
    for key in ("datadir", "testnet", "regtest", "simnet"):
        flag = getattr(args, key)
        if flag is not None:
            values[key] = flag

    try:
        config = NodeConfig.model_validate(values)
    except ValidationError as e:
        raise ConfigurationError(f"loadConfig: {e}") from e

    logger.debug("Loaded config: network=%s datadir=%s", config.network, config.data_dir)
    return config, remaining
