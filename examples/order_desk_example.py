"""
Order desk example: enter orders, list them newest-first, submit pending.

Shows: RecordStore (seeded on first load), QueryPipeline views and paging,
ConfirmationWorkflow. Uses a throwaway store under the system temp directory.
"""

from __future__ import annotations

import tempfile
from pathlib import Path

from order_desk import (
    Action,
    ConfirmationWorkflow,
    OrderRecord,
    OrderType,
    Pager,
    QueryPipeline,
    RecordStore,
    View,
)
from desk_shell.report import render_page


def main() -> None:
    with tempfile.TemporaryDirectory() as tmp:
        store = RecordStore(Path(tmp) / "transactions.dat")
        print(f"Seeded {len(store.load_all())} historical orders")

        store.append(OrderRecord.create(123456, "JDS", Action.BUY, 100, 84.25, "GM", OrderType.LIMIT))
        store.append(OrderRecord.create(234567, "JDS", Action.SELL, 25, 129.50, "IBM", OrderType.MARKET))

        pipeline = QueryPipeline(store, page_size=5)
        pager = Pager(pipeline.load(View.PENDING))
        print(render_page(pager, View.PENDING))

        result = ConfirmationWorkflow(store).submit_all_pending()
        print(f"\n{result.status.value}: {result.message}")

        pager = Pager(pipeline.load(View.CONFIRMED))
        print(f"Confirmed: {pager.page_set.count} orders over {pager.total_pages} pages")


if __name__ == "__main__":
    main()
