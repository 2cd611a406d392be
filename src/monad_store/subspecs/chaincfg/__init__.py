"""Network parameter tables."""

from .params import (
    MAIN_NET_PARAMS,
    REGRESSION_NET_PARAMS,
    SIM_NET_PARAMS,
    TEST_NET4_PARAMS,
    BitcoinNet,
    Network,
    NetworkParams,
    decode_hex_key,
    params_for,
)

__all__ = [
    "BitcoinNet",
    "MAIN_NET_PARAMS",
    "Network",
    "NetworkParams",
    "REGRESSION_NET_PARAMS",
    "SIM_NET_PARAMS",
    "TEST_NET4_PARAMS",
    "decode_hex_key",
    "params_for",
]
