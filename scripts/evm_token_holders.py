#!/usr/bin/env python
"""Sweep every holder of an ERC-20 token with auto-pagination.

Example:
    python scripts/evm_token_holders.py --network mainnet \
        --contract 0xa0b86991c6218b36c1d19d4a2e9eb0ce3606eb48 --limit 100 --top 10
"""

from __future__ import annotations

import argparse
import logging
from functools import partial

from tokenapi.client import TokenAPIClient
from tokenapi.execution import ExecutionPolicy, PaginationExecutor

logger = logging.getLogger(__name__)

USDC_CONTRACT = "0xa0b86991c6218b36c1d19d4a2e9eb0ce3606eb48"


def fetch_all_holders(
    client: TokenAPIClient, executor: PaginationExecutor, network: str, contract: str, limit: int
) -> list[dict]:
    fetch = partial(client.evm.tokens.get_holders, network=network, contract=contract, limit=limit)
    result = executor.execute_with_auto_pagination(lambda page: fetch(page=page), limit=limit)
    return list(result.get("data") or [])


def format_holder(holder: dict) -> str:
    return f"{holder.get('address')}  {holder.get('value')} {holder.get('symbol', '')}".rstrip()


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="List every holder of a token (/v1/evm/holders)")
    parser.add_argument("--network", default="mainnet", help="EVM network id")
    parser.add_argument("--contract", default=USDC_CONTRACT, help="Token contract address")
    parser.add_argument("--limit", type=int, default=100, help="Holders per page")
    parser.add_argument("--top", type=int, default=10, help="Holders to display (0 = all)")
    parser.add_argument("--delay-ms", type=int, default=1000, help="Pause between pages")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    client = TokenAPIClient.from_env()
    policy = ExecutionPolicy(max_retries=3, delay_ms=args.delay_ms, auto_paginate=True)
    with PaginationExecutor(policy) as executor:
        holders = fetch_all_holders(client, executor, args.network, args.contract, args.limit)

    logger.info(f"Fetched {len(holders)} holders of {args.contract} on {args.network}")
    shown = holders[: args.top] if args.top else holders
    for holder in shown:
        print(format_holder(holder))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
