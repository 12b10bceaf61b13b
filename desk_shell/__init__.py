"""
Terminal front end for order-desk.

Role-based menu, field-by-field order entry, and paged listings with
navigation and bulk submit.
"""

from desk_shell.shell import DeskShell
from desk_shell.entry import OrderEntry
from desk_shell.report import orders_frame, render_page
from desk_shell.cli import main

__all__ = [
    "DeskShell",
    "OrderEntry",
    "orders_frame",
    "render_page",
    "main",
]
