"""
order-desk: order entry and browsing for a small brokerage desk.

Fixed-layout record store, newest-first paged listings, and bulk confirmation
of pending orders. No terminal I/O here; see desk_shell for the interactive side.
"""

__version__ = "0.1.0"

from order_desk.errors import CancelledByUser, RecordDecodeError, RecordStoreError, ValidationError
from order_desk.order import Action, OrderRecord, OrderType
from order_desk.store import RecordStore
from order_desk.query import PageSet, Pager, QueryPipeline, View, build_pages
from order_desk.confirmation import ConfirmationWorkflow, SubmitResult, SubmitStatus
from order_desk.config import DeskConfig, Role

__all__ = [
    "Action",
    "CancelledByUser",
    "ConfirmationWorkflow",
    "DeskConfig",
    "OrderRecord",
    "OrderType",
    "PageSet",
    "Pager",
    "QueryPipeline",
    "RecordDecodeError",
    "RecordStore",
    "RecordStoreError",
    "Role",
    "SubmitResult",
    "SubmitStatus",
    "ValidationError",
    "View",
    "build_pages",
]
