"""
Auxiliary node store CLI entry point.

Inspect and edit the checkpoint, alert key and deny-list databases of a node.

Usage::

    python -m monad_store paths
    python -m monad_store --testnet checkpoint add 1500000 ff8e...
    python -m monad_store checkpoint max
    python -m monad_store volatile clear
    python -m monad_store alert status
    python -m monad_store deny check MVp2...

Options:
    -b, --datadir      Location of the monad data directory
    -C, --configfile   Path to the YAML configuration file
    --testnet          Use the test network
    --regtest          Use the regression test network
    --simnet           Use the simulation test network
    --startup-delay    Seconds each store waits before first use (default: 1)
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence

from monad_store.subspecs.node import build_parser, load_config
from monad_store.subspecs.storage import (
    ALL_NAMESPACES,
    STARTUP_DELAY_SECONDS,
    StoreRegistry,
    namespace_path,
)
from monad_store.types import ConfigurationError, StoreError

logger = logging.getLogger(__name__)

_HANDLER_NAME = "monad_store.cli"


class ColoredFormatter(logging.Formatter):
    """Logging formatter with ANSI colors for better readability."""

    # ANSI color codes
    GREY = "\x1b[38;5;244m"
    BLUE = "\x1b[38;5;39m"
    GREEN = "\x1b[38;5;40m"
    YELLOW = "\x1b[38;5;220m"
    RED = "\x1b[38;5;196m"
    BOLD_RED = "\x1b[38;5;196;1m"
    CYAN = "\x1b[38;5;51m"
    RESET = "\x1b[0m"

    LEVEL_COLORS = {
        logging.DEBUG: GREY,
        logging.INFO: GREEN,
        logging.WARNING: YELLOW,
        logging.ERROR: RED,
        logging.CRITICAL: BOLD_RED,
    }

    def format(self, record: logging.LogRecord) -> str:
        """Format log record with colors."""
        color = self.LEVEL_COLORS.get(record.levelno, self.RESET)
        timestamp = f"{self.CYAN}{self.formatTime(record, self.datefmt)}{self.RESET}"
        levelname = f"{color}{record.levelname:8}{self.RESET}"
        name = f"{self.BLUE}{record.name}{self.RESET}"
        return f"{timestamp} {levelname} {name}: {record.getMessage()}"


def setup_logging(verbose: bool = False, no_color: bool = False) -> None:
    """Configure logging to stderr with optional colors."""
    level = logging.DEBUG if verbose else logging.INFO

    handler = logging.StreamHandler()
    handler.setLevel(level)

    if no_color:
        formatter = logging.Formatter(
            "%(asctime)s %(levelname)-8s %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    else:
        formatter = ColoredFormatter(datefmt="%Y-%m-%d %H:%M:%S")

    handler.setFormatter(formatter)
    handler.set_name(_HANDLER_NAME)

    # Replace the handler of an earlier call instead of stacking another.
    root = logging.getLogger()
    for existing in [h for h in root.handlers if h.get_name() == _HANDLER_NAME]:
        root.removeHandler(existing)
    root.setLevel(level)
    root.addHandler(handler)


def _hex_bytes(value: str) -> bytes:
    try:
        return bytes.fromhex(value.removeprefix("0x"))
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"not a hex string: {value!r}") from e


# -----------------------------------------------------------------------------
# Commands
# -----------------------------------------------------------------------------


def cmd_paths(registry: StoreRegistry, args: argparse.Namespace) -> int:
    """Print the directory of every namespace."""
    for namespace in ALL_NAMESPACES:
        print(namespace_path(namespace, registry.config))
    return 0


def cmd_checkpoint(registry: StoreRegistry, args: argparse.Namespace) -> int:
    """Operate on user checkpoints."""
    store = registry.user_checkpoints()
    store.open_db()

    match args.action:
        case "add":
            store.add(args.height, args.hash)
        case "delete":
            store.delete(args.height)
        case "get":
            block_hash = store.get(args.height)
            if block_hash is None:
                print(f"no checkpoint at height {args.height}")
                return 1
            print(block_hash)
        case "max":
            print(store.get_max_checkpoint_height())
        case "list":
            for height, block_hash in store.checkpoints():
                print(f"{height} {block_hash}")
    return 0


def cmd_volatile(registry: StoreRegistry, args: argparse.Namespace) -> int:
    """Operate on volatile checkpoints."""
    store = registry.volatile_checkpoints()
    store.open_db()

    match args.action:
        case "set":
            store.set(args.height, args.hash)
        case "clear":
            print(store.clear_db())
        case "list":
            for height, block_hash in store.checkpoints():
                print(f"{height} {block_hash}")
    return 0


def cmd_alert(registry: StoreRegistry, args: argparse.Namespace) -> int:
    """Inspect or revoke alert keys."""
    store = registry.alert_keys()
    store.open_db()

    match args.action:
        case "status":
            print("valid" if store.is_valid() else "revoked")
        case "revoke":
            store.set(args.key)
    return 0


def cmd_deny(registry: StoreRegistry, args: argparse.Namespace) -> int:
    """Edit or query the deny list."""
    store = registry.deny_addresses()
    store.open_db()

    match args.action:
        case "add":
            store.set(args.address)
        case "check":
            listed = store.has(args.address)
            print("denied" if listed else "allowed")
    return 0


def build_command_parser() -> argparse.ArgumentParser:
    """Build the full CLI parser, including the configuration flags."""
    parser = argparse.ArgumentParser(
        prog="monad-store",
        description="Auxiliary node store",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
        parents=[build_parser()],
    )
    parser.add_argument(
        "--startup-delay",
        type=float,
        default=STARTUP_DELAY_SECONDS,
        help="Seconds each store waits before first use (default: 1)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable colored logging output",
    )

    commands = parser.add_subparsers(dest="command", required=True)

    commands.add_parser("paths", help="Print namespace directories").set_defaults(func=cmd_paths)

    checkpoint = commands.add_parser("checkpoint", help="User checkpoints")
    checkpoint.set_defaults(func=cmd_checkpoint)
    actions = checkpoint.add_subparsers(dest="action", required=True)
    add = actions.add_parser("add", help="Record a checkpoint")
    add.add_argument("height", type=int)
    add.add_argument("hash")
    actions.add_parser("delete", help="Remove a checkpoint").add_argument("height", type=int)
    actions.add_parser("get", help="Show the hash at a height").add_argument("height", type=int)
    actions.add_parser("max", help="Show the highest checkpoint height")
    actions.add_parser("list", help="List all checkpoints")

    volatile = commands.add_parser("volatile", help="Volatile checkpoints")
    volatile.set_defaults(func=cmd_volatile)
    actions = volatile.add_subparsers(dest="action", required=True)
    set_ = actions.add_parser("set", help="Record a checkpoint")
    set_.add_argument("height", type=int)
    set_.add_argument("hash")
    actions.add_parser("clear", help="Delete all volatile checkpoints")
    actions.add_parser("list", help="List all volatile checkpoints")

    alert = commands.add_parser("alert", help="Alert key flags")
    alert.set_defaults(func=cmd_alert)
    actions = alert.add_subparsers(dest="action", required=True)
    actions.add_parser("status", help="Check whether both alert keys are unrevoked")
    actions.add_parser("revoke", help="Revoke an alert key (irreversible)").add_argument(
        "key", type=_hex_bytes
    )

    deny = commands.add_parser("deny", help="Deny-listed addresses")
    deny.set_defaults(func=cmd_deny)
    actions = deny.add_subparsers(dest="action", required=True)
    actions.add_parser("add", help="Deny-list an address").add_argument("address")
    actions.add_parser("check", help="Check an address").add_argument("address")

    return parser


def run(argv: Sequence[str] | None = None) -> int:
    """
    Run the CLI and return the process exit status.

    Usage errors exit with status 2 from argparse. Configuration and store
    errors return 1.
    """
    argv = list(sys.argv[1:] if argv is None else argv)
    args = build_command_parser().parse_args(argv)

    setup_logging(args.verbose, args.no_color)

    try:
        config, _ = load_config(argv)
    except ConfigurationError as e:
        logger.critical("%s", e)
        return 1

    with StoreRegistry(config, startup_delay=args.startup_delay) as registry:
        try:
            return args.func(registry, args)
        except StoreError as e:
            logger.error("%s", e)
            return 1


def main() -> None:
    """CLI entry point."""
    sys.exit(run())


if __name__ == "__main__":
    main()
