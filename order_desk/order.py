"""
OrderRecord: one brokerage transaction as entered by a broker.

Immutable. The only state change a stored record ever sees is confirmation,
which produces a confirmed copy rather than mutating in place.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum
from typing import Callable

from order_desk.errors import ValidationError

ACCOUNT_MIN = 100_000
ACCOUNT_MAX = 999_999
# Entry requires 3 characters; stored records (including the 1988 seeds) may be shorter.
BROKER_ID_MIN = 3
BROKER_ID_STORED_MIN = 1
BROKER_ID_MAX = 15
QUANTITY_MIN = 1
QUANTITY_MAX = 9_999
PRICE_MIN = 0.01
PRICE_MAX = 9_999.99
TICKER_MIN = 1
TICKER_MAX = 7


class Action(Enum):
    BUY = 0
    SELL = 1


class OrderType(Enum):
    MARKET = 0
    LIMIT = 1


def is_printable_ascii(text: str) -> bool:
    """Space through tilde only. NUL would be lost in the zero-padded buffer."""
    return all(" " <= ch <= "~" for ch in text)


def _is_ticker(text: str) -> bool:
    return TICKER_MIN <= len(text) <= TICKER_MAX and all("A" <= ch <= "Z" for ch in text)


def _has_cents_only(price: float) -> bool:
    cents = price * 100
    return abs(cents - round(cents)) < 1e-6


@dataclass(frozen=True)
class OrderRecord:
    """
    A single order. Field values are checked on construction; an OrderRecord
    that exists is well-formed.

    `slot` is the record's offset in the store when it was loaded (None until
    persisted). It is positional identity only and takes no part in equality.
    """

    customer_account_no: int
    timestamp: int
    broker_id: str
    action: Action
    quantity: int
    price: float
    ticker: str
    order_type: OrderType
    confirmed: bool = False
    slot: int | None = field(default=None, compare=False)

    def __post_init__(self) -> None:
        if not ACCOUNT_MIN <= self.customer_account_no <= ACCOUNT_MAX:
            raise ValidationError("Account number must be 6 digits")
        if not BROKER_ID_STORED_MIN <= len(self.broker_id) <= BROKER_ID_MAX:
            raise ValidationError(f"Broker ID must be at most {BROKER_ID_MAX} characters")
        if not is_printable_ascii(self.broker_id):
            raise ValidationError("Broker ID must contain only printable ASCII characters")
        if not isinstance(self.action, Action):
            raise ValidationError("Must be BUY or SELL")
        if not QUANTITY_MIN <= self.quantity <= QUANTITY_MAX:
            raise ValidationError(f"Quantity must be between {QUANTITY_MIN} and {QUANTITY_MAX}")
        if not PRICE_MIN <= self.price <= PRICE_MAX or not _has_cents_only(self.price):
            raise ValidationError(f"Price must be between ${PRICE_MIN:.2f} and ${PRICE_MAX:.2f}")
        if not _is_ticker(self.ticker):
            raise ValidationError("Ticker must be 1 to 7 letters (A-Z)")
        if not isinstance(self.order_type, OrderType):
            raise ValidationError("Must be MARKET or LIMIT")

    @classmethod
    def create(
        cls,
        customer_account_no: int,
        broker_id: str,
        action: Action,
        quantity: int,
        price: float,
        ticker: str,
        order_type: OrderType,
        *,
        clock: Callable[[], float] = time.time,
    ) -> OrderRecord:
        """New pending order stamped with the current wall-clock second."""
        return cls(
            customer_account_no=customer_account_no,
            timestamp=int(clock()),
            broker_id=broker_id,
            action=action,
            quantity=quantity,
            price=price,
            ticker=ticker,
            order_type=order_type,
            confirmed=False,
        )

    @property
    def created_at(self) -> datetime:
        """Timestamp as a local datetime."""
        return datetime.fromtimestamp(self.timestamp)

    def confirm(self) -> OrderRecord:
        if self.confirmed:
            return self
        return replace(self, confirmed=True)
