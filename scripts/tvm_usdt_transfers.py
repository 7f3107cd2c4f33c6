#!/usr/bin/env python
"""Walk USDT (TRC-20) transfers on Tron page by page and print a volume line per page."""

from __future__ import annotations

import argparse
from collections.abc import Iterator

from tokenapi.client import TokenAPIClient
from tokenapi.execution import ExecutionPolicy, PaginationExecutor

TRON_USDT_CONTRACT = "TR7NHqjeKQxGTCi8q8ZY4pL8otSzgjLj6t"


def page_summary(page: int, payload: dict) -> str:
    records = payload.get("data") or []
    first = records[0].get("datetime", "N/A") if records else "N/A"
    volume = sum(float(r.get("value") or 0) for r in records)
    return f"{first} | Transfers {int(volume)} USDT [Page {page}]"


def iter_pages(
    client: TokenAPIClient, executor: PaginationExecutor, limit: int, end_time: str | None, max_pages: int
) -> Iterator[tuple[int, dict]]:
    """Yield ``(page, payload)`` until a short page or `max_pages` is reached."""
    page = 1
    while page <= max_pages:
        payload = executor.execute_with_retry(
            lambda: client.tvm.tokens.get_transfers(
                network="tron", contract=TRON_USDT_CONTRACT, end_time=end_time, page=page, limit=limit
            )
        )
        yield page, payload
        if len(payload.get("data") or []) < limit:
            return
        page += 1


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Summarize USDT transfers on Tron (/v1/tvm/transfers)")
    parser.add_argument("--limit", type=int, default=10, help="Transfers per page")
    parser.add_argument("--end-time", default=None, help="Only transfers before this date")
    parser.add_argument("--max-pages", type=int, default=5, help="Stop after this many pages")
    args = parser.parse_args(argv)

    client = TokenAPIClient.from_env()
    with PaginationExecutor(ExecutionPolicy(max_retries=3, delay_ms=1000)) as executor:
        for page, payload in iter_pages(client, executor, args.limit, args.end_time, args.max_pages):
            print(page_summary(page, payload))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
