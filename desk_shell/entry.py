"""
New-order entry: a fixed sequence of labeled prompts, one per field.

Bad answers re-prompt with the validation message. The cancel keyword at any
prompt abandons the order without saving. End of input stops quietly.
"""

from __future__ import annotations

import time
from collections.abc import Callable
from datetime import datetime
from typing import Any, TextIO

from order_desk.errors import CancelledByUser, ValidationError
from order_desk.order import OrderRecord
from order_desk.store import RecordStore
from order_desk.validation import (
    CANCEL_KEYWORD,
    is_cancel,
    parse_account_no,
    parse_action,
    parse_broker_id,
    parse_order_type,
    parse_price,
    parse_quantity,
    parse_ticker,
)

# (record field, prompt, parser) in prompt order
PROMPTS: list[tuple[str, str, Callable[[str], Any]]] = [
    ("customer_account_no", "Customer Account No. (6 digits): ", parse_account_no),
    ("broker_id", "Broker ID (3-15 chars): ", parse_broker_id),
    ("action", "Order Action (BUY/SELL): ", parse_action),
    ("quantity", "Quantity (1-9999 shares): ", parse_quantity),
    ("price", "Price ($0.01-$9999.99): ", parse_price),
    ("ticker", "Ticker Symbol (1-7 letters): ", parse_ticker),
    ("order_type", "Order Type (MARKET/LIMIT): ", parse_order_type),
]


class OrderEntry:
    """Collects one order from the operator and appends it to the store."""

    def __init__(
        self,
        store: RecordStore,
        stdin: TextIO,
        stdout: TextIO,
        *,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.store = store
        self.stdin = stdin
        self.stdout = stdout
        self.clock = clock

    def _ask(self, prompt: str, parse: Callable[[str], Any]) -> Any:
        while True:
            self.stdout.write(prompt)
            self.stdout.flush()
            line = self.stdin.readline()
            if not line:
                raise EOFError
            answer = line.rstrip("\r\n")
            if is_cancel(answer):
                raise CancelledByUser
            try:
                return parse(answer)
            except ValidationError as exc:
                self.stdout.write(f"Error: {exc}\n")

    def run(self) -> OrderRecord | None:
        """
        Prompt for every field and save the order.

        Returns the saved record, or None if input ended first. Raises
        CancelledByUser on the cancel keyword and RecordStoreError if the
        order could not be written.
        """
        started = self.clock()
        self.stdout.write("=====================================\n")
        self.stdout.write("         NEW TRANSACTION\n")
        self.stdout.write("=====================================\n\n")
        self.stdout.write(f"Date: {datetime.fromtimestamp(started):%d/%m/%Y Time: %H:%M}\n\n")
        self.stdout.write(f"Type '{CANCEL_KEYWORD}' at any prompt to cancel\n\n")

        values: dict[str, Any] = {}
        try:
            for name, prompt, parse in PROMPTS:
                values[name] = self._ask(prompt, parse)
        except EOFError:
            return None

        record = OrderRecord.create(**values, clock=lambda: started)
        self.store.append(record)
        return record
