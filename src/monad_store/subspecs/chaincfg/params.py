"""
Network Parameter Tables

Per-network constants consumed by the store: the canonical network name,
the wire magic that identifies the network on the P2P layer, and the two
public keys trusted by the legacy alert system.
"""

from enum import IntEnum, StrEnum
from typing import Any

from pydantic import field_validator
from typing_extensions import Final

from monad_store.types import StrictBaseModel


class Network(StrEnum):
    """Network selector. Exactly one is active per process."""

    MAINNET = "mainnet"
    TESTNET = "testnet"
    REGTEST = "regtest"
    SIMNET = "simnet"


class BitcoinNet(IntEnum):
    """Wire magic numbers identifying each network."""

    MAIN_NET = 0xDBB6C0FB
    TEST_NET = 0xDAB5BFFA
    """Used by the regression test network."""
    TEST_NET4 = 0xF1C8D2FD
    SIM_NET = 0x12141C16


def decode_hex_key(value: Any) -> Any:
    """
    Accept public keys given as hex strings (with or without 0x).

    YAML turns an unquoted all-digit value into an int (octal with a leading
    0), so anything that is not text or bytes is rejected with a hint.
    """
    if value is None or isinstance(value, bytes):
        return value
    if not isinstance(value, str):
        raise ValueError(
            f"alert public key must be a quoted hex string, got {type(value).__name__} "
            f"{value!r}"
        )
    text = value.removeprefix("0x")
    try:
        return bytes.fromhex(text)
    except ValueError as e:
        raise ValueError(f"alert public key is not valid hex: {value!r}") from e


class NetworkParams(StrictBaseModel):
    """Parameters of a single network."""

    name: str
    """Canonical network name."""

    net: BitcoinNet
    """Wire magic of the network."""

    alert_pub_main_key: bytes
    """Primary alert public key (uncompressed SEC1)."""

    alert_pub_sub_key: bytes
    """Secondary alert public key (uncompressed SEC1)."""

    @field_validator("alert_pub_main_key", "alert_pub_sub_key", mode="before")
    @classmethod
    def parse_hex_key(cls, v: Any) -> Any:
        """Convert hex strings to raw key bytes."""
        return decode_hex_key(v)

    @field_validator("alert_pub_main_key", "alert_pub_sub_key")
    @classmethod
    def check_not_empty(cls, v: bytes) -> bytes:
        """Alert keys are used as database keys and cannot be empty."""
        if not v:
            raise ValueError("alert public key must not be empty")
        return v


_MAIN_ALERT_KEY: Final = (
    "04fc9702847840aaf195de8442ebecedf5b095cdbb9bc716bda9110971b28a49e0"
    "ead8564ff0db22209e0374782c093bb899692d524e9d6a6956e7c5ecbcd68284"
)

_TEST_ALERT_KEY: Final = (
    "04302390343f91cc401d56d68b123028bf52e5fca1939df127f63c6467cdf9c8e2"
    "c14b61104cf817d0b780da337893ecc4aaff1309e536162dabbdb45200ca2b0a"
)

MAIN_NET_PARAMS: Final = NetworkParams(
    name="mainnet",
    net=BitcoinNet.MAIN_NET,
    alert_pub_main_key=_MAIN_ALERT_KEY,
    alert_pub_sub_key=_TEST_ALERT_KEY,
)

TEST_NET4_PARAMS: Final = NetworkParams(
    name="testnet4",
    net=BitcoinNet.TEST_NET4,
    alert_pub_main_key=_TEST_ALERT_KEY,
    alert_pub_sub_key=_MAIN_ALERT_KEY,
)

REGRESSION_NET_PARAMS: Final = NetworkParams(
    name="regtest",
    net=BitcoinNet.TEST_NET,
    alert_pub_main_key=_TEST_ALERT_KEY,
    alert_pub_sub_key=_MAIN_ALERT_KEY,
)

SIM_NET_PARAMS: Final = NetworkParams(
    name="simnet",
    net=BitcoinNet.SIM_NET,
    alert_pub_main_key=_TEST_ALERT_KEY,
    alert_pub_sub_key=_MAIN_ALERT_KEY,
)

_PARAMS_BY_NETWORK: Final = {
    Network.MAINNET: MAIN_NET_PARAMS,
    Network.TESTNET: TEST_NET4_PARAMS,
    Network.REGTEST: REGRESSION_NET_PARAMS,
    Network.SIMNET: SIM_NET_PARAMS,
}


def params_for(network: Network) -> NetworkParams:
    """Look up the parameter table of a network."""
    return _PARAMS_BY_NETWORK[network]
