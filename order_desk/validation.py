"""
Parsers for operator input, one per order field.

Each takes the raw text of one prompt answer and returns the typed value, or
raises ValidationError carrying the message to show before re-prompting.
"""

from __future__ import annotations

import re
from decimal import Decimal

from order_desk.errors import ValidationError
from order_desk.order import (
    ACCOUNT_MAX,
    ACCOUNT_MIN,
    BROKER_ID_MAX,
    BROKER_ID_MIN,
    PRICE_MAX,
    PRICE_MIN,
    QUANTITY_MAX,
    QUANTITY_MIN,
    TICKER_MAX,
    TICKER_MIN,
    Action,
    OrderType,
    is_printable_ascii,
)

CANCEL_KEYWORD = "exit"

_PRICE_RE = re.compile(r"\d+(?:\.\d+)?")


def is_cancel(text: str) -> bool:
    """True if the answer is the reserved cancel keyword (any case)."""
    return text.strip().lower() == CANCEL_KEYWORD


def _parse_int(text: str, low: int, high: int, message: str) -> int:
    text = text.strip()
    if not (text.isascii() and text.isdigit()):
        raise ValidationError(message)
    value = int(text)
    if not low <= value <= high:
        raise ValidationError(message)
    return value


def parse_account_no(text: str) -> int:
    return _parse_int(text, ACCOUNT_MIN, ACCOUNT_MAX, "Account number must be 6 digits")


def parse_broker_id(text: str) -> str:
    text = text.strip()
    if not BROKER_ID_MIN <= len(text) <= BROKER_ID_MAX:
        raise ValidationError(
            f"Broker ID must be between {BROKER_ID_MIN} and {BROKER_ID_MAX} characters"
        )
    if not is_printable_ascii(text):
        raise ValidationError("Broker ID must contain only printable ASCII characters")
    return text


def parse_action(text: str) -> Action:
    try:
        return Action[text.strip().upper()]
    except KeyError:
        raise ValidationError("Must be BUY or SELL") from None


def parse_quantity(text: str) -> int:
    return _parse_int(
        text,
        QUANTITY_MIN,
        QUANTITY_MAX,
        f"Quantity must be between {QUANTITY_MIN} and {QUANTITY_MAX}",
    )


def parse_price(text: str) -> float:
    """
    Plain dollar amount, e.g. "84.25", "84.250" or "$12". Digits with at most
    one decimal point; the value must be a whole number of cents.
    """
    message = f"Price must be between ${PRICE_MIN:.2f} and ${PRICE_MAX:.2f}"
    raw = text.strip().removeprefix("$")
    if not raw.isascii() or _PRICE_RE.fullmatch(raw) is None:
        raise ValidationError(message)
    if len(raw.partition(".")[2].rstrip("0")) > 2:
        raise ValidationError("Price must have at most 2 decimal places")
    value = Decimal(raw)
    if not Decimal(str(PRICE_MIN)) <= value <= Decimal(str(PRICE_MAX)):
        raise ValidationError(message)
    return float(value)


def parse_ticker(text: str) -> str:
    ticker = text.strip().upper()
    if not TICKER_MIN <= len(ticker) <= TICKER_MAX:
        raise ValidationError(f"Ticker must be between {TICKER_MIN} and {TICKER_MAX} characters")
    if not all("A" <= ch <= "Z" for ch in ticker):
        raise ValidationError("Ticker must contain only letters")
    return ticker


def parse_order_type(text: str) -> OrderType:
    try:
        return OrderType[text.strip().upper()]
    except KeyError:
        raise ValidationError("Must be MARKET or LIMIT") from None
