"""Page-level views over Token API collection responses.

Collection endpoints answer with::

    {"data": [...], "pagination": {"current_page": 1, "total_pages": 3, "total_results": 25}}

The records themselves are passed through untouched; only `data` and
`pagination` are looked at.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

DATA_KEY = "data"
PAGINATION_KEY = "pagination"


@dataclass(frozen=True)
class PagedResult:
    """One page of a collection response.

    `items` is None when the payload carries no list under `data`, which
    the paginator reads as "no more data".
    """

    payload: Mapping[str, Any]
    items: list[Any] | None
    page_meta: dict[str, Any] | None

    @classmethod
    def from_payload(cls, payload: Any) -> PagedResult:
        if not isinstance(payload, Mapping):
            return cls(payload={}, items=None, page_meta=None)
        data = payload.get(DATA_KEY)
        items = list(data) if isinstance(data, list) else None
        meta = payload.get(PAGINATION_KEY)
        page_meta = dict(meta) if isinstance(meta, Mapping) else None
        return cls(payload=payload, items=items, page_meta=page_meta)

    @property
    def has_items(self) -> bool:
        return self.items is not None


def aggregate_pages(last_page: PagedResult | None, items: list[Any]) -> dict[str, Any]:
    """Fold every fetched page into one response shaped like a single page.

    Top-level fields and pagination metadata come from the last page
    fetched; `current_page` is reset to 1 and `total_results` becomes the
    number of accumulated records.
    """
    base: dict[str, Any] = dict(last_page.payload) if last_page is not None else {}
    meta: dict[str, Any] = dict(last_page.page_meta or {}) if last_page is not None else {}
    meta["current_page"] = 1
    meta["total_results"] = len(items)
    base[DATA_KEY] = list(items)
    base[PAGINATION_KEY] = meta
    return base
