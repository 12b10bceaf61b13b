"""
Fixed-layout binary codec for order records.

One record per 60-byte slot, no header, no delimiters. Field order and widths
are a stable on-disk format: changing them breaks every existing store.

    customer_account_no  uint32
    timestamp            int64   seconds since epoch
    broker_id            16 bytes ASCII, zero-padded (15 visible + terminator)
    action               int32   Action value
    quantity             uint32
    price                float64
    ticker               8 bytes ASCII, zero-padded (7 visible + terminator)
    order_type           int32   OrderType value
    confirmed            int32   0 or 1
"""

from __future__ import annotations

from collections.abc import Iterable

import numpy as np

from order_desk.errors import RecordDecodeError
from order_desk.order import Action, OrderRecord, OrderType

RECORD_DTYPE = np.dtype(
    [
        ("customer_account_no", "<u4"),
        ("timestamp", "<i8"),
        ("broker_id", "S16"),
        ("action", "<i4"),
        ("quantity", "<u4"),
        ("price", "<f8"),
        ("ticker", "S8"),
        ("order_type", "<i4"),
        ("confirmed", "<i4"),
    ]
)
RECORD_SIZE = RECORD_DTYPE.itemsize


def encode(records: Iterable[OrderRecord]) -> bytes:
    """Serialize records into consecutive slots."""
    rows = [
        (
            r.customer_account_no,
            r.timestamp,
            r.broker_id.encode("ascii"),
            r.action.value,
            r.quantity,
            r.price,
            r.ticker.encode("ascii"),
            r.order_type.value,
            1 if r.confirmed else 0,
        )
        for r in records
    ]
    return np.array(rows, dtype=RECORD_DTYPE).tobytes()


def _decode_row(row: np.void, slot: int) -> OrderRecord:
    try:
        return OrderRecord(
            customer_account_no=int(row["customer_account_no"]),
            timestamp=int(row["timestamp"]),
            broker_id=bytes(row["broker_id"]).decode("ascii"),
            action=Action(int(row["action"])),
            quantity=int(row["quantity"]),
            price=float(row["price"]),
            ticker=bytes(row["ticker"]).decode("ascii"),
            order_type=OrderType(int(row["order_type"])),
            confirmed=bool(row["confirmed"]),
            slot=slot,
        )
    except ValueError as exc:
        # Covers bad ASCII, unknown enum tags and out-of-range fields.
        raise RecordDecodeError(f"Slot {slot} is not a valid order record: {exc}") from exc


def decode(data: bytes, limit: int | None = None) -> list[OrderRecord]:
    """
    Deserialize whole slots from data. A trailing partial slot is end-of-data,
    not an error. At most `limit` records are returned when given.
    """
    whole = len(data) // RECORD_SIZE
    if limit is not None:
        whole = min(whole, max(limit, 0))
    if whole == 0:
        return []
    rows = np.frombuffer(data, dtype=RECORD_DTYPE, count=whole)
    return [_decode_row(row, i) for i, row in enumerate(rows)]
