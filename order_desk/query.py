"""
Query pipeline: partition, sort newest-first, and window into pages.

Pure in-memory processing over a loaded record list. Ordering is imposed here,
never on disk.
"""

from __future__ import annotations

import math
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from enum import Enum

from order_desk.order import OrderRecord
from order_desk.store import RecordStore

Predicate = Callable[[OrderRecord], bool]

DEFAULT_PAGE_SIZE = 10
DEFAULT_DISPLAY_CAP = 50


def is_confirmed(record: OrderRecord) -> bool:
    return record.confirmed


def is_pending(record: OrderRecord) -> bool:
    return not record.confirmed


class View(Enum):
    """Which partition of the store a listing shows."""

    ALL = "all"
    CONFIRMED = "confirmed"
    PENDING = "pending"

    @property
    def predicate(self) -> Predicate | None:
        if self is View.CONFIRMED:
            return is_confirmed
        if self is View.PENDING:
            return is_pending
        return None

    @property
    def title(self) -> str:
        return {
            View.ALL: "TRANSACTION LIST",
            View.CONFIRMED: "CONFIRMED TRANSACTIONS",
            View.PENDING: "PENDING TRANSACTIONS",
        }[self]


def sort_newest_first(records: Sequence[OrderRecord]) -> list[OrderRecord]:
    """Timestamp descending. Stable: equal timestamps keep input order."""
    return sorted(records, key=lambda r: r.timestamp, reverse=True)


@dataclass(frozen=True)
class PageSet:
    """Filtered, sorted records split into fixed-size pages."""

    records: tuple[OrderRecord, ...]
    page_size: int = DEFAULT_PAGE_SIZE

    def __post_init__(self) -> None:
        if self.page_size < 1:
            raise ValueError("page_size must be at least 1")

    @property
    def count(self) -> int:
        return len(self.records)

    @property
    def empty(self) -> bool:
        return not self.records

    @property
    def total_pages(self) -> int:
        """ceil(count / page_size); 0 when there are no records."""
        return math.ceil(self.count / self.page_size)

    def page(self, index: int) -> tuple[OrderRecord, ...]:
        """Records on page `index` (0-based)."""
        if not 0 <= index < self.total_pages:
            raise IndexError(f"page {index} out of range (0..{self.total_pages - 1})")
        start = index * self.page_size
        return self.records[start:min(start + self.page_size, self.count)]


def build_pages(
    records: Sequence[OrderRecord],
    predicate: Predicate | None = None,
    page_size: int = DEFAULT_PAGE_SIZE,
) -> PageSet:
    """Filter (preserving order), sort newest-first, and page."""
    selected = [r for r in records if predicate(r)] if predicate is not None else list(records)
    return PageSet(records=tuple(sort_newest_first(selected)), page_size=page_size)


class QueryPipeline:
    """
    Loads from a store through the display cap and builds pages for a view.
    The cap limits what is shown, not what is stored.
    """

    def __init__(
        self,
        store: RecordStore,
        *,
        page_size: int = DEFAULT_PAGE_SIZE,
        display_cap: int = DEFAULT_DISPLAY_CAP,
    ) -> None:
        if page_size < 1:
            raise ValueError("page_size must be at least 1")
        if display_cap < 1:
            raise ValueError("display_cap must be at least 1")
        self.store = store
        self.page_size = page_size
        self.display_cap = display_cap

    def load(self, view: View = View.ALL) -> PageSet:
        records = self.store.load_all(self.display_cap)
        return build_pages(records, view.predicate, self.page_size)


class Pager:
    """
    Current-page state over a PageSet. next/previous clamp at the ends and
    report False instead of wrapping.
    """

    def __init__(self, page_set: PageSet) -> None:
        self.page_set = page_set
        self.current = 0

    @property
    def empty(self) -> bool:
        return self.page_set.empty

    @property
    def total_pages(self) -> int:
        return self.page_set.total_pages

    @property
    def on_last_page(self) -> bool:
        return self.current >= self.total_pages - 1

    @property
    def on_first_page(self) -> bool:
        return self.current == 0

    def records(self) -> tuple[OrderRecord, ...]:
        return self.page_set.page(self.current)

    def next(self) -> bool:
        if self.on_last_page:
            return False
        self.current += 1
        return True

    def previous(self) -> bool:
        if self.on_first_page:
            return False
        self.current -= 1
        return True

    def reload(self, page_set: PageSet) -> None:
        """Swap in freshly built pages; back to page 0 if the current page is gone."""
        self.page_set = page_set
        if self.current >= page_set.total_pages:
            self.current = 0
