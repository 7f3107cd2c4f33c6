"""Command line interface for the Token API.

Usage:
    tokenapi evm tokens transfers --network mainnet --from 0x123 --limit 10
    tokenapi --auto-paginate evm tokens holders --network base --contract 0xabc --limit 100
    tokenapi svm dexs swaps --network solana --amm-pool <address> --limit 10
    tokenapi tvm tokens transfers --network tron --limit 10
    tokenapi monitoring health

Every request goes through a PaginationExecutor built from the global
``--max-retries``, ``--timeout-ms`` and ``--auto-paginate`` flags. Results
are printed as JSON on stdout; failures print ``{"error": ...}`` on stderr
and exit with status 1.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from collections.abc import Callable
from dataclasses import dataclass
from functools import partial
from typing import Any

from tokenapi import __version__
from tokenapi.client import TokenAPIClient
from tokenapi.config import policy_defaults_from_env
from tokenapi.errors import TokenAPIError
from tokenapi.execution import ExecutionPolicy, PaginationExecutor
from tokenapi.networks import (
    DEX_PROTOCOLS,
    EVM_NETWORKS,
    OHLC_INTERVALS,
    ORDER_DIRECTIONS,
    SVM_NETWORKS,
    TVM_NETWORKS,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Option:
    flag: str
    dest: str
    help: str
    required: bool = False
    type: Callable[[str], Any] | None = None
    choices: tuple[str, ...] | None = None
    switch: bool = False

    def add_to(self, parser: argparse.ArgumentParser) -> None:
        if self.switch:
            parser.add_argument(self.flag, dest=self.dest, action="store_true", default=None, help=self.help)
            return
        parser.add_argument(
            self.flag,
            dest=self.dest,
            required=self.required,
            type=self.type,
            choices=self.choices,
            default=None,
            help=self.help,
        )


@dataclass(frozen=True)
class Command:
    """One leaf subcommand bound to a client method such as ``evm.tokens.get_transfers``."""

    path: tuple[str, ...]
    method: str
    help: str
    options: tuple[Option, ...] = ()
    paginated: bool = True


def _network(vm: str, networks: tuple[str, ...]) -> Option:
    return Option("--network", "network", f"{vm} network ({', '.join(networks)})", required=True)


def _required(flag: str, dest: str, help: str) -> Option:
    return Option(flag, dest, help, required=True)


EVM = _network("EVM", EVM_NETWORKS)
SVM = _network("SVM", SVM_NETWORKS)
TVM = _network("TVM", TVM_NETWORKS)

TIME_RANGE = (
    Option("--start-time", "start_time", "Start time (ISO 8601)"),
    Option("--end-time", "end_time", "End time (ISO 8601)"),
)
BLOCK_RANGE = (
    Option("--start-block", "start_block", "Start block number", type=int),
    Option("--end-block", "end_block", "End block number", type=int),
)
INTERVAL = Option("--interval", "interval", "Time interval", choices=OHLC_INTERVALS)
INCLUDE_NULL = Option("--include-null-balances", "include_null_balances", "Include zero balances", switch=True)
TRANSACTION_ID = Option("--transaction-id", "transaction_id", "Filter by transaction ID")
FROM_ADDRESS = Option("--from", "from_address", "Filter by sender address")
TO_ADDRESS = Option("--to", "to_address", "Filter by recipient address")
TOKEN_ID = Option("--token-id", "token_id", "Filter by token ID")
ORDER = Option("--order", "order", "Sort direction by block time", choices=ORDER_DIRECTIONS)

COMMANDS: tuple[Command, ...] = (
    # EVM tokens
    Command(
        ("evm", "tokens", "transfers"),
        "evm.tokens.get_transfers",
        "Get ERC-20 and native token transfers",
        (
            EVM,
            TRANSACTION_ID,
            Option("--contract", "contract", "Filter by token contract address"),
            FROM_ADDRESS,
            TO_ADDRESS,
            *TIME_RANGE,
            *BLOCK_RANGE,
            ORDER,
        ),
    ),
    Command(
        ("evm", "tokens", "native-transfers"),
        "evm.tokens.get_native_transfers",
        "Get native token transfers",
        (EVM, TRANSACTION_ID, FROM_ADDRESS, TO_ADDRESS, *TIME_RANGE, *BLOCK_RANGE),
    ),
    Command(
        ("evm", "tokens", "metadata"),
        "evm.tokens.get_tokens",
        "Get token metadata",
        (EVM, _required("--contract", "contract", "Token contract address")),
    ),
    Command(
        ("evm", "tokens", "balances"),
        "evm.tokens.get_balances",
        "Get token balances for a wallet address",
        (
            EVM,
            _required("--address", "address", "Wallet address"),
            Option("--contract", "contract", "Filter by token contract address"),
            INCLUDE_NULL,
        ),
    ),
    Command(
        ("evm", "tokens", "holders"),
        "evm.tokens.get_holders",
        "Get token holders",
        (EVM, _required("--contract", "contract", "Token contract address")),
    ),
    Command(
        ("evm", "tokens", "native-balances"),
        "evm.tokens.get_native_balances",
        "Get native token balances",
        (EVM, _required("--address", "address", "Wallet address"), INCLUDE_NULL),
    ),
    Command(
        ("evm", "tokens", "historical-balances"),
        "evm.tokens.get_historical_balances",
        "Get historical token balance changes in OHLCV format",
        (
            EVM,
            _required("--address", "address", "Wallet address"),
            Option("--contract", "contract", "Filter by token contract address"),
            INTERVAL,
            *TIME_RANGE,
        ),
    ),
    # EVM dexs
    Command(
        ("evm", "dexs", "swaps"),
        "evm.dexs.get_swaps",
        "Get DEX swap transactions",
        (
            EVM,
            TRANSACTION_ID,
            Option("--pool", "pool", "Filter by pool address"),
            Option("--caller", "caller", "Filter by caller address"),
            Option("--sender", "sender", "Filter by sender address"),
            Option("--recipient", "recipient", "Filter by recipient address"),
            Option("--protocol", "protocol", "Filter by DEX protocol", choices=DEX_PROTOCOLS),
            *TIME_RANGE,
            *BLOCK_RANGE,
            ORDER,
        ),
    ),
    Command(
        ("evm", "dexs", "pools"),
        "evm.dexs.get_pools",
        "Get DEX liquidity pools",
        (
            EVM,
            Option("--pool", "pool", "Filter by pool address"),
            Option("--token0", "token0", "Filter by token0 address"),
            Option("--token1", "token1", "Filter by token1 address"),
        ),
    ),
    Command(("evm", "dexs", "list"), "evm.dexs.get_dexes", "Get supported DEXs", (EVM,), paginated=False),
    Command(
        ("evm", "dexs", "ohlc"),
        "evm.dexs.get_pool_ohlc",
        "Get OHLCV price data for liquidity pools",
        (EVM, _required("--pool", "pool", "Pool address"), INTERVAL, *TIME_RANGE),
    ),
    # EVM nfts
    Command(
        ("evm", "nfts", "collections"),
        "evm.nfts.get_collections",
        "Get NFT collection metadata and stats",
        (EVM, _required("--contract", "contract", "NFT contract address")),
    ),
    Command(
        ("evm", "nfts", "holders"),
        "evm.nfts.get_holders",
        "Get NFT holders for a collection",
        (EVM, _required("--contract", "contract", "NFT contract address")),
    ),
    Command(
        ("evm", "nfts", "items"),
        "evm.nfts.get_items",
        "Get NFT items with metadata",
        (EVM, _required("--contract", "contract", "NFT contract address"), TOKEN_ID),
    ),
    Command(
        ("evm", "nfts", "ownerships"),
        "evm.nfts.get_ownerships",
        "Get NFT ownerships by wallet address",
        (
            EVM,
            _required("--address", "address", "Wallet address"),
            Option("--contract", "contract", "Filter by NFT contract address"),
        ),
    ),
    Command(
        ("evm", "nfts", "sales"),
        "evm.nfts.get_sales",
        "Get NFT sales data",
        (
            EVM,
            Option("--contract", "contract", "Filter by NFT contract address"),
            TOKEN_ID,
            Option("--buyer", "buyer", "Filter by buyer address"),
            Option("--seller", "seller", "Filter by seller address"),
            *TIME_RANGE,
            *BLOCK_RANGE,
        ),
    ),
    Command(
        ("evm", "nfts", "transfers"),
        "evm.nfts.get_transfers",
        "Get NFT transfers",
        (
            EVM,
            TRANSACTION_ID,
            Option("--contract", "contract", "Filter by NFT contract address"),
            TOKEN_ID,
            FROM_ADDRESS,
            TO_ADDRESS,
            *TIME_RANGE,
            *BLOCK_RANGE,
        ),
    ),
    # SVM tokens
    Command(
        ("svm", "tokens", "transfers"),
        "svm.tokens.get_transfers",
        "Get SPL token transfers",
        (
            SVM,
            Option("--signature", "signature", "Filter by transaction signature"),
            Option("--mint", "mint", "Filter by token mint address"),
            FROM_ADDRESS,
            TO_ADDRESS,
            Option("--from-owner", "from_owner", "Filter by sender owner address"),
            Option("--to-owner", "to_owner", "Filter by recipient owner address"),
            *TIME_RANGE,
            *BLOCK_RANGE,
        ),
    ),
    Command(
        ("svm", "tokens", "metadata"),
        "svm.tokens.get_tokens",
        "Get token metadata",
        (SVM, _required("--mint", "mint", "Token mint address")),
    ),
    Command(
        ("svm", "tokens", "balances"),
        "svm.tokens.get_balances",
        "Get token balances for a wallet address",
        (
            SVM,
            _required("--owner", "owner", "Wallet owner address"),
            Option("--mint", "mint", "Filter by token mint address"),
            INCLUDE_NULL,
        ),
    ),
    Command(
        ("svm", "tokens", "native-balances"),
        "svm.tokens.get_native_balances",
        "Get native SOL balances",
        (SVM, _required("--address", "address", "Wallet address"), INCLUDE_NULL),
    ),
    Command(
        ("svm", "tokens", "holders"),
        "svm.tokens.get_holders",
        "Get token holders",
        (SVM, _required("--mint", "mint", "Token mint address")),
    ),
    Command(
        ("svm", "tokens", "owner"),
        "svm.tokens.get_account_owner",
        "Get account owner lookup",
        (SVM, _required("--account", "account", "Account address")),
    ),
    # SVM dexs
    Command(
        ("svm", "dexs", "swaps"),
        "svm.dexs.get_swaps",
        "Get DEX swap transactions",
        (
            SVM,
            Option("--signature", "signature", "Filter by transaction signature"),
            Option("--amm", "amm", "Filter by AMM address"),
            Option("--amm-pool", "amm_pool", "Filter by AMM pool address"),
            Option("--user", "user", "Filter by user address"),
            Option("--input-mint", "input_mint", "Filter by input mint address"),
            Option("--output-mint", "output_mint", "Filter by output mint address"),
            *TIME_RANGE,
            *BLOCK_RANGE,
        ),
    ),
    Command(
        ("svm", "dexs", "pools"),
        "svm.dexs.get_pools",
        "Get DEX liquidity pools",
        (
            SVM,
            Option("--amm-pool", "amm_pool", "Filter by AMM pool address"),
            Option("--base-mint", "base_mint", "Filter by base mint address"),
            Option("--quote-mint", "quote_mint", "Filter by quote mint address"),
        ),
    ),
    Command(("svm", "dexs", "list"), "svm.dexs.get_dexes", "Get supported DEXs", (SVM,), paginated=False),
    Command(
        ("svm", "dexs", "ohlc"),
        "svm.dexs.get_pool_ohlc",
        "Get OHLCV price data for liquidity pools",
        (SVM, _required("--amm-pool", "amm_pool", "AMM pool address"), INTERVAL, *TIME_RANGE),
    ),
    # TVM tokens
    Command(
        ("tvm", "tokens", "transfers"),
        "tvm.tokens.get_transfers",
        "Get TRC-20 token transfers",
        (
            TVM,
            TRANSACTION_ID,
            Option("--contract", "contract", "Filter by token contract address"),
            FROM_ADDRESS,
            TO_ADDRESS,
            *TIME_RANGE,
            *BLOCK_RANGE,
        ),
    ),
    Command(
        ("tvm", "tokens", "native-transfers"),
        "tvm.tokens.get_native_transfers",
        "Get native TRX transfers",
        (TVM, TRANSACTION_ID, FROM_ADDRESS, TO_ADDRESS, *TIME_RANGE, *BLOCK_RANGE),
    ),
    Command(
        ("tvm", "tokens", "metadata"),
        "tvm.tokens.get_tokens",
        "Get token metadata",
        (TVM, _required("--contract", "contract", "Token contract address")),
    ),
    # TVM dexs
    Command(
        ("tvm", "dexs", "swaps"),
        "tvm.dexs.get_swaps",
        "Get DEX swap transactions",
        (
            TVM,
            TRANSACTION_ID,
            Option("--pool", "pool", "Filter by pool address"),
            Option("--caller", "caller", "Filter by caller address"),
            Option("--sender", "sender", "Filter by sender address"),
            Option("--recipient", "recipient", "Filter by recipient address"),
            *TIME_RANGE,
            *BLOCK_RANGE,
        ),
    ),
    Command(
        ("tvm", "dexs", "pools"),
        "tvm.dexs.get_pools",
        "Get DEX liquidity pools",
        (
            TVM,
            Option("--pool", "pool", "Filter by pool address"),
            Option("--factory", "factory", "Filter by factory address"),
            Option("--token", "token", "Filter by token address"),
            Option("--protocol", "protocol", "Filter by DEX protocol"),
        ),
    ),
    Command(("tvm", "dexs", "list"), "tvm.dexs.get_dexes", "Get supported DEXs", (TVM,), paginated=False),
    Command(
        ("tvm", "dexs", "ohlc"),
        "tvm.dexs.get_pool_ohlc",
        "Get OHLCV price data for liquidity pools",
        (TVM, _required("--pool", "pool", "Pool address"), INTERVAL, *TIME_RANGE),
    ),
    # Monitoring
    Command(("monitoring", "health"), "get_health", "Check API health status", paginated=False),
    Command(("monitoring", "version"), "get_version", "Get API version information", paginated=False),
    Command(("monitoring", "networks"), "get_networks", "Get list of supported networks", paginated=False),
)

GROUP_HELP = {
    ("evm",): "EVM (Ethereum Virtual Machine) operations",
    ("evm", "tokens"): "Token operations on EVM networks",
    ("evm", "dexs"): "DEX operations on EVM networks",
    ("evm", "nfts"): "NFT operations on EVM networks",
    ("svm",): "SVM (Solana Virtual Machine) operations",
    ("svm", "tokens"): "Token operations on SVM networks",
    ("svm", "dexs"): "DEX operations on SVM networks",
    ("tvm",): "TVM (Tron Virtual Machine) operations",
    ("tvm", "tokens"): "Token operations on TVM networks",
    ("tvm", "dexs"): "DEX operations on TVM networks",
    ("monitoring",): "API monitoring and status",
}


def _non_negative_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected an integer, got {value!r}") from None
    if number < 0:
        raise argparse.ArgumentTypeError(f"expected a non-negative integer, got {number}")
    return number


def _add_global_options(
    parser: argparse.ArgumentParser, max_retries: Any, timeout_ms: Any, switches: Any
) -> None:
    parser.add_argument(
        "--max-retries",
        type=_non_negative_int,
        default=max_retries,
        help="Maximum number of retry attempts for failed API requests",
    )
    parser.add_argument(
        "--timeout-ms",
        type=_non_negative_int,
        default=timeout_ms,
        help="Timeout in milliseconds between API requests",
    )
    parser.add_argument(
        "--auto-paginate",
        action="store_true",
        default=switches,
        help="Automatically paginate through all results until less than limit are returned",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", default=switches, help="Enable debug logging"
    )


def build_parser(max_retries: int = 3, timeout_ms: int = 10_000) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tokenapi",
        description="Token API - real-time token data for apps and AI agents",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    _add_global_options(parser, max_retries, timeout_ms, False)

    # Leaf parsers accept the global flags too; SUPPRESS keeps them from
    # clobbering values given before the subcommand.
    leaf_globals = argparse.ArgumentParser(add_help=False)
    _add_global_options(leaf_globals, argparse.SUPPRESS, argparse.SUPPRESS, argparse.SUPPRESS)

    groups: dict[tuple[str, ...], Any] = {(): parser.add_subparsers(dest="vm", metavar="<command>")}
    groups[()].required = True

    for command in COMMANDS:
        for depth in range(1, len(command.path)):
            prefix = command.path[:depth]
            if prefix in groups:
                continue
            sub = groups[prefix[:-1]].add_parser(
                prefix[-1], help=GROUP_HELP.get(prefix), description=GROUP_HELP.get(prefix)
            )
            groups[prefix] = sub.add_subparsers(dest=f"level{depth}", metavar="<command>")
            groups[prefix].required = True

        leaf = groups[command.path[:-1]].add_parser(
            command.path[-1], help=command.help, description=command.help, parents=[leaf_globals]
        )
        for option in command.options:
            option.add_to(leaf)
        if command.paginated:
            leaf.add_argument("--page", type=int, default=None, help="Page number")
            leaf.add_argument("--limit", type=int, default=None, help="Results per page")
        leaf.set_defaults(command=command)

    return parser


def _resolve_method(client: TokenAPIClient, dotted: str) -> Callable[..., Any]:
    target: Any = client
    for attr in dotted.split("."):
        target = getattr(target, attr)
    return target


def run_command(
    client: TokenAPIClient, executor: PaginationExecutor, command: Command, args: argparse.Namespace
) -> Any:
    """Execute one parsed subcommand through `executor`.

    Paginated commands get a ``page_fetch(page)`` closure. An explicit
    ``--page`` pins every attempt to that page and turns auto-pagination off.
    """
    method = _resolve_method(client, command.method)
    params = {option.dest: getattr(args, option.dest) for option in command.options}

    if not command.paginated:
        return executor.execute_with_retry(partial(method, **params))

    limit = args.limit

    def page_fetch(page: int) -> Any:
        return method(**params, page=page, limit=limit)

    if args.page is not None:
        return executor.execute_with_retry(partial(page_fetch, args.page))
    return executor.execute_with_auto_pagination(page_fetch, limit)


def _print_error(message: str) -> None:
    print(json.dumps({"error": message}, indent=2), file=sys.stderr)


def main(argv: list[str] | None = None) -> int:
    try:
        max_retries, timeout_ms = policy_defaults_from_env()
    except TokenAPIError as e:
        _print_error(str(e))
        return 1

    parser = build_parser(max_retries, timeout_ms)
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    policy = ExecutionPolicy(
        max_retries=args.max_retries,
        delay_ms=args.timeout_ms,
        auto_paginate=args.auto_paginate,
    )
    logger.debug(f"Running {' '.join(args.command.path)} with {policy}")

    try:
        client = TokenAPIClient.from_env()
        with PaginationExecutor(policy) as executor:
            result = run_command(client, executor, args.command, args)
    except TokenAPIError as e:
        _print_error(str(e))
        return 1

    print(json.dumps(result, indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
