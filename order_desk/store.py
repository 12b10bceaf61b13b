"""
Record store: a flat file of fixed-size order slots.

Append-only for new orders; whole-file rewrite for bulk confirmation. The store
assumes it is the only writer for the duration of any operation. There is no
locking, and a rewrite truncates in place (no temp-file-and-rename), so a
failed or concurrent rewrite can lose data.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable
from pathlib import Path

from order_desk import codec
from order_desk.errors import RecordDecodeError, RecordStoreError
from order_desk.order import OrderRecord
from order_desk.seed import seed_records

logger = logging.getLogger(__name__)

DEFAULT_STORE_NAME = "transactions.dat"


class RecordStore:
    """
    Persistent sequence of OrderRecords at a single path (default:
    transactions.dat in the working directory). The store itself is unbounded;
    callers cap how much they load.
    """

    def __init__(self, path: str | os.PathLike[str] = DEFAULT_STORE_NAME) -> None:
        self.path = Path(path)

    def __repr__(self) -> str:
        return f"RecordStore({str(self.path)!r})"

    def exists(self) -> bool:
        return self.path.exists()

    def ensure_initialized(self) -> bool:
        """
        Create the store with the seed orders if it does not exist.
        Returns True if the store was created. Never touches an existing store.
        """
        if self.exists():
            return False
        seeds = seed_records()
        try:
            # "xb" fails instead of overwriting if the file appeared meanwhile.
            with open(self.path, "xb") as fh:
                fh.write(codec.encode(seeds))
        except FileExistsError:
            return False
        except OSError as exc:
            logger.warning("Could not initialize record store %s: %s", self.path, exc)
            raise RecordStoreError(f"Could not create {self.path}: {exc}") from exc
        logger.info("Initialized record store %s with %d seed orders", self.path, len(seeds))
        return True

    def append(self, record: OrderRecord) -> None:
        """Write one record as a single slot at end of file."""
        data = codec.encode([record])
        try:
            with open(self.path, "ab") as fh:
                fh.write(data)
        except OSError as exc:
            logger.warning("Append to %s failed: %s", self.path, exc)
            raise RecordStoreError(f"Could not save order to {self.path}: {exc}") from exc
        logger.info(
            "Appended order: account=%s, %s %s %s @ %.2f",
            record.customer_account_no,
            record.action.name,
            record.quantity,
            record.ticker,
            record.price,
        )

    def load_all(self, limit: int | None = None) -> list[OrderRecord]:
        """
        Read up to `limit` records (all when None) in on-disk order. A store
        that does not exist yet is first initialized with the seed orders.
        """
        self.ensure_initialized()
        try:
            with open(self.path, "rb") as fh:
                if limit is None:
                    data = fh.read()
                else:
                    data = fh.read(max(limit, 0) * codec.RECORD_SIZE)
        except OSError as exc:
            logger.warning("Could not read record store %s: %s", self.path, exc)
            raise RecordStoreError(f"Could not open {self.path}: {exc}") from exc
        try:
            return codec.decode(data, limit)
        except RecordDecodeError as exc:
            raise RecordStoreError(f"Corrupt record store {self.path}: {exc}") from exc

    def rewrite_all(self, records: Iterable[OrderRecord]) -> None:
        """Replace the whole store with exactly `records`."""
        records = list(records)
        data = codec.encode(records)
        try:
            with open(self.path, "wb") as fh:
                fh.write(data)
        except OSError as exc:
            logger.warning("Rewrite of %s failed; on-disk contents may be incomplete: %s", self.path, exc)
            raise RecordStoreError(f"Could not rewrite {self.path}: {exc}") from exc
        logger.info("Rewrote record store %s with %d orders", self.path, len(records))

    def count(self) -> int:
        """Number of whole slots on disk (0 if the store does not exist)."""
        try:
            return self.path.stat().st_size // codec.RECORD_SIZE
        except FileNotFoundError:
            return 0
        except OSError as exc:
            raise RecordStoreError(f"Could not stat {self.path}: {exc}") from exc
