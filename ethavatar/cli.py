# ethavatar/cli.py
"""
EthAvatar: Command Line Interface

Usage:
    ethavatar config [--web3 [URL]] [--ipfs [ADDR]] [--contract [ADDRESS]]
    ethavatar get FILENAME [CONNECTION] [--address ADDRESS]
    ethavatar set FILENAME [CONNECTION]
    ethavatar remove [CONNECTION]
    ethavatar watch [CONNECTION] [--address ADDRESS]

    CONNECTION: [--web3 URL] [--ipfs ADDR] [--contract ADDRESS]

`config --web3 URL` stores a value, `config --web3` (no value) clears it.
Connections not given on the command line come from the settings file
and ETHAVATAR_* environment variables.

Updated: 2026-10-17
Version: 0.1.0
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from typing import List, Optional

from . import __version__
from .client import EthAvatar
from .config import ConnectionConfig, Settings, SETTINGS_KEYS
from .errors import EthAvatarError
from .helpers import FileHelper
from .ledger import ChangeEvent


logger = logging.getLogger("ethavatar-cli")


class UsageError(Exception):
    """Invalid command line usage."""
    pass


# =============================================================================
# Parser
# =============================================================================

def _add_connection_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--web3", metavar="URL", help="Web3 connection")
    parser.add_argument("--ipfs", metavar="ADDR", help="IPFS connection")
    parser.add_argument("--contract", metavar="ADDRESS", help="EthAvatar contract address")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ethavatar",
        description="Python API for EthAvatar",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")

    commands = parser.add_subparsers(dest="command")

    config = commands.add_parser("config", help="Set Web3, IPFS and contract connection")
    config.add_argument("--web3", nargs="?", const=True, metavar="URL", help="Web3 connection")
    config.add_argument("--ipfs", nargs="?", const=True, metavar="ADDR", help="IPFS connection")
    config.add_argument("--contract", nargs="?", const=True, metavar="ADDRESS",
                        help="EthAvatar contract address")

    get = commands.add_parser("get", help="Get avatar of address to file")
    get.add_argument("filename")
    _add_connection_options(get)
    get.add_argument("--address", help="Ethereum address or ENS name")

    set_ = commands.add_parser("set", help="Set avatar of address from file")
    set_.add_argument("filename")
    _add_connection_options(set_)

    remove = commands.add_parser("remove", help="Remove avatar of address")
    _add_connection_options(remove)

    watch = commands.add_parser("watch", help="Print avatar changes of address")
    _add_connection_options(watch)
    watch.add_argument("--address", help="Ethereum address or ENS name")

    return parser


# =============================================================================
# Commands
# =============================================================================

def run_config(args: argparse.Namespace, settings: Settings) -> int:
    for key in SETTINGS_KEYS:
        value = getattr(args, key)
        if isinstance(value, str):
            settings.set(key, value)
        elif value is True:
            settings.unset(key)
    settings.save()

    print(f"Current Web3 connection: {settings.get('web3') or 'Not set'}")
    print(f"Current IPFS connection: {settings.get('ipfs') or 'Not set'}")
    print(f"Current contract: {settings.get('contract') or 'Not set'}")
    return 0


def build_client(args: argparse.Namespace, settings: Settings) -> EthAvatar:
    """Create a client from command line options and settings."""
    config = ConnectionConfig.from_environment(settings)

    web3 = args.web3 or config.web3
    if not web3:
        raise UsageError("Web3 connection not specified!")

    return EthAvatar(
        wallet=web3,
        store=args.ipfs or config.ipfs,
        contract=args.contract or config.contract,
        config=config,
    )


async def run_get(client: EthAvatar, args: argparse.Namespace) -> int:
    address = await FileHelper(client).to_file(args.filename, args.address)
    print(f"Avatar of address {address} has been written to file {args.filename}")
    return 0


async def run_set(client: EthAvatar, args: argparse.Namespace) -> int:
    await FileHelper(client).from_file(args.filename)
    address = await client.resolve()
    print(f"Avatar of address {address} from file {args.filename} has been uploaded to blockchain")
    return 0


async def run_remove(client: EthAvatar, args: argparse.Namespace) -> int:
    await client.remove()
    address = await client.resolve()
    print(f"Avatar of address {address} has been removed")
    return 0


async def run_watch(client: EthAvatar, args: argparse.Namespace) -> int:
    def on_change(event: ChangeEvent) -> None:
        print(f"{event.hash_address}: {event.hash or '(removed)'}", flush=True)

    subscription = client.watch(on_change, args.address)
    address = await subscription.ready()
    print(f"Watching avatar of address {address} (Ctrl-C to stop)", flush=True)
    try:
        await subscription.wait_closed()
    finally:
        subscription.unsubscribe()
    return 0


COMMANDS = {
    "get": run_get,
    "set": run_set,
    "remove": run_remove,
    "watch": run_watch,
}


# =============================================================================
# Entry Point
# =============================================================================

def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    if args.command is None:
        parser.print_help()
        return 0

    try:
        settings = Settings.load()
        if args.command == "config":
            return run_config(args, settings)

        client = build_client(args, settings)
        return asyncio.run(COMMANDS[args.command](client, args))
    except (EthAvatarError, UsageError) as e:
        print(str(e), file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        return 130


if __name__ == "__main__":
    sys.exit(main())
