"""
Page rendering: turn a page of orders into the text table the shell prints.
"""

from __future__ import annotations

from collections.abc import Sequence

import pandas as pd

from order_desk.order import OrderRecord
from order_desk.query import Pager, View

WIDTH = 79
COLUMNS = ["Acct#", "Timestamp", "Broker", "Action", "Qty", "Price", "Ticker", "Type"]
TIMESTAMP_FORMAT = "%m/%d/%y %H:%M"


def orders_frame(records: Sequence[OrderRecord], *, with_status: bool = False) -> pd.DataFrame:
    """One row per order, display-formatted, in the given order."""
    columns = COLUMNS + (["Status"] if with_status else [])
    rows = []
    for r in records:
        row = {
            "Acct#": r.customer_account_no,
            "Timestamp": r.created_at.strftime(TIMESTAMP_FORMAT),
            "Broker": r.broker_id[:10],
            "Action": r.action.name,
            "Qty": r.quantity,
            "Price": f"${r.price:.2f}",
            "Ticker": r.ticker,
            "Type": r.order_type.name,
        }
        if with_status:
            row["Status"] = "CONFIRMED" if r.confirmed else "PENDING"
        rows.append(row)
    return pd.DataFrame(rows, columns=columns)


def render_page(pager: Pager, view: View = View.ALL) -> str:
    """Title bar, table for the current page, and the total line."""
    title = f"{view.title} - Page {pager.current + 1} of {pager.total_pages}"
    frame = orders_frame(pager.records(), with_status=view is View.ALL)
    lines = [
        "=" * WIDTH,
        title.center(WIDTH).rstrip(),
        "=" * WIDTH,
        "",
        frame.to_string(index=False),
        "",
        "-" * WIDTH,
        f"Total transactions: {pager.page_set.count}",
    ]
    return "\n".join(lines)
