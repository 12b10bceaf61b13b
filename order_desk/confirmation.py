"""
Confirmation workflow: the market side confirms every pending order at once.

All-or-nothing over the whole store: load everything (no display cap), flip
pending to confirmed, rewrite the file. Not atomic with respect to another
process appending meanwhile.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from order_desk.errors import RecordStoreError
from order_desk.store import RecordStore

logger = logging.getLogger(__name__)


class SubmitStatus(Enum):
    SUBMITTED = "submitted"
    NOTHING_PENDING = "nothing_pending"
    FAILED = "failed"


@dataclass(frozen=True)
class SubmitResult:
    """Outcome of a bulk submit. Immutable."""

    status: SubmitStatus
    confirmed_count: int = 0
    message: str | None = None
    timestamp: datetime | None = None

    @property
    def ok(self) -> bool:
        return self.status != SubmitStatus.FAILED


class ConfirmationWorkflow:
    def __init__(self, store: RecordStore) -> None:
        self.store = store

    def pending_count(self) -> int:
        return sum(1 for r in self.store.load_all() if not r.confirmed)

    def submit_all_pending(self) -> SubmitResult:
        """
        Confirm every pending order and rewrite the store.

        Storage failures are returned as a FAILED result, not raised. After a
        failed rewrite the file holds whatever the failed write left behind.
        """
        try:
            records = self.store.load_all()
        except RecordStoreError as exc:
            logger.warning("Submit aborted: %s", exc)
            return SubmitResult(SubmitStatus.FAILED, message=str(exc), timestamp=datetime.now())

        pending = sum(1 for r in records if not r.confirmed)
        if pending == 0:
            logger.info("Submit: no pending orders")
            return SubmitResult(
                SubmitStatus.NOTHING_PENDING,
                message="No pending transactions to submit",
                timestamp=datetime.now(),
            )

        try:
            self.store.rewrite_all(r.confirm() for r in records)
        except RecordStoreError as exc:
            logger.warning("Submit failed after confirming %d orders in memory: %s", pending, exc)
            return SubmitResult(SubmitStatus.FAILED, message=str(exc), timestamp=datetime.now())

        logger.info("Submitted %d pending orders", pending)
        return SubmitResult(
            SubmitStatus.SUBMITTED,
            confirmed_count=pending,
            message=f"{pending} transaction(s) submitted",
            timestamp=datetime.now(),
        )
