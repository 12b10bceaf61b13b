"""
Seed data: ten historical orders from October 1988.

Written to a store that does not exist yet so the desk is usable before any
order has been entered. All seed orders are already confirmed.
"""

from __future__ import annotations

from order_desk.order import Action, OrderRecord, OrderType

# 1988-10-01 00:00:00 UTC
BASE_TIMESTAMP = 591_667_200

_DAY = 86_400
_HOUR = 3_600
_MINUTE = 60


def _at(day_offset: int, hour: int, minute: int = 0) -> int:
    return BASE_TIMESTAMP + day_offset * _DAY + hour * _HOUR + minute * _MINUTE


def seed_records() -> list[OrderRecord]:
    """The ten seed orders, oldest first."""
    B, S = Action.BUY, Action.SELL
    M, L = OrderType.MARKET, OrderType.LIMIT
    rows = [
        # account, timestamp, broker, action, qty, price, ticker, type
        (123456, _at(2, 9, 30), "MER", B, 100, 84.25, "GM", L),
        (234567, _at(4, 14, 30), "DLJ", S, 50, 129.50, "IBM", M),
        (345678, _at(6, 10, 15), "GS", B, 200, 44.75, "GE", L),
        (456789, _at(10, 11), "MS", B, 150, 45.50, "XON", M),
        (567890, _at(13, 15, 45), "BSC", B, 300, 42.25, "KO", L),
        (678901, _at(17, 10, 20), "PWJ", B, 200, 52.75, "F", M),
        (789012, _at(19, 13, 10), "LEH", S, 100, 28.50, "T", L),
        (890123, _at(23, 9, 30), "SLB", B, 75, 58.25, "MRK", M),
        (901234, _at(25, 16), "DWR", S, 125, 89.75, "PG", L),
        (112345, _at(27, 11, 55), "EFH", B, 150, 44.50, "GE", M),
    ]
    return [
        OrderRecord(
            customer_account_no=account,
            timestamp=ts,
            broker_id=broker,
            action=action,
            quantity=qty,
            price=price,
            ticker=ticker,
            order_type=order_type,
            confirmed=True,
        )
        for account, ts, broker, action, qty, price, ticker, order_type in rows
    ]
