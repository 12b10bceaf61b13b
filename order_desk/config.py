"""
Desk configuration: role, store location, and display limits.

Passed explicitly to the shell and query pipeline. Environment variables
override defaults; explicit keyword overrides win over both.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from order_desk.query import DEFAULT_DISPLAY_CAP, DEFAULT_PAGE_SIZE, View
from order_desk.store import DEFAULT_STORE_NAME

STORE_ENV = "ORDER_DESK_STORE"
PAGE_SIZE_ENV = "ORDER_DESK_PAGE_SIZE"
DISPLAY_CAP_ENV = "ORDER_DESK_DISPLAY_CAP"
ANIMATION_ENV = "ORDER_DESK_ANIMATION_SECONDS"

# Listings on the main menu, in menu order. Same for both roles.
MENU_VIEWS: tuple[View, ...] = (View.CONFIRMED, View.PENDING)


class Role(Enum):
    """Who is at the terminal. Brokers enter orders; the market confirms them."""

    BROKER = "broker"
    MARKET = "market"

    @classmethod
    def parse(cls, text: str) -> Role:
        try:
            return cls(text.strip().lower())
        except ValueError:
            raise ValueError(f"Unknown role {text!r}; expected 'broker' or 'market'") from None

    @property
    def can_enter_orders(self) -> bool:
        return self is Role.BROKER

    @property
    def can_submit(self) -> bool:
        return self is Role.MARKET


@dataclass(frozen=True)
class DeskConfig:
    role: Role
    store_path: Path = Path(DEFAULT_STORE_NAME)
    page_size: int = DEFAULT_PAGE_SIZE
    display_cap: int = DEFAULT_DISPLAY_CAP
    animation_seconds: float = 1.5
    clear_lines: int = 25

    def __post_init__(self) -> None:
        if self.page_size < 1:
            raise ValueError("page_size must be at least 1")
        if self.display_cap < 1:
            raise ValueError("display_cap must be at least 1")
        if self.animation_seconds < 0:
            raise ValueError("animation_seconds must not be negative")
        if self.clear_lines < 0:
            raise ValueError("clear_lines must not be negative")

    @classmethod
    def from_env(cls, role: Role | str, **overrides) -> DeskConfig:
        """Build config from ORDER_DESK_* environment variables plus overrides."""
        if isinstance(role, str):
            role = Role.parse(role)
        values: dict = {}
        if STORE_ENV in os.environ:
            values["store_path"] = Path(os.environ[STORE_ENV])
        for env, key, kind in (
            (PAGE_SIZE_ENV, "page_size", int),
            (DISPLAY_CAP_ENV, "display_cap", int),
            (ANIMATION_ENV, "animation_seconds", float),
        ):
            raw = os.environ.get(env)
            if raw is None or raw.strip() == "":
                continue
            try:
                values[key] = kind(raw)
            except ValueError:
                raise ValueError(f"{env} must be a number, got {raw!r}") from None
        values.update({k: v for k, v in overrides.items() if v is not None})
        if "store_path" in values:
            values["store_path"] = Path(values["store_path"])
        return cls(role=role, **values)
