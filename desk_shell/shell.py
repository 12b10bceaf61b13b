"""
Interactive desk shell: main menu, new-order entry, and paged listings.

Single-threaded and blocking: each command runs to completion before the next
line is read. Storage problems are reported and the shell keeps running; end
of input leaves the current screen (and, at the main menu, the program).
"""

from __future__ import annotations

import logging
import sys
import time
from collections.abc import Callable
from typing import TextIO

from order_desk.config import MENU_VIEWS, DeskConfig
from order_desk.confirmation import ConfirmationWorkflow, SubmitStatus
from order_desk.errors import CancelledByUser, RecordStoreError
from order_desk.query import PageSet, Pager, QueryPipeline, View
from order_desk.store import RecordStore

from desk_shell.entry import OrderEntry
from desk_shell.report import render_page

logger = logging.getLogger(__name__)

BANNER = "====================================="
PROGRESS_STEPS = 10


class DeskShell:
    """
    Text front end for one role. Brokers enter orders and browse; the market
    browses and bulk-submits pending orders.
    """

    def __init__(
        self,
        config: DeskConfig,
        *,
        store: RecordStore | None = None,
        stdin: TextIO | None = None,
        stdout: TextIO | None = None,
        clock: Callable[[], float] = time.time,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.config = config
        self.store = store or RecordStore(config.store_path)
        self.stdin = stdin or sys.stdin
        self.stdout = stdout or sys.stdout
        self.clock = clock
        self.sleep = sleep
        self.pipeline = QueryPipeline(
            self.store,
            page_size=config.page_size,
            display_cap=config.display_cap,
        )
        self.workflow = ConfirmationWorkflow(self.store)

    # --- I/O helpers ---

    def _write(self, text: str = "") -> None:
        self.stdout.write(text + "\n")

    def _prompt(self, text: str) -> str | None:
        """Show prompt, return the answer without newline, or None at end of input."""
        self.stdout.write(text)
        self.stdout.flush()
        line = self.stdin.readline()
        if not line:
            return None
        return line.rstrip("\r\n")

    def _pause(self, message: str = "") -> bool:
        """Wait for Enter. False at end of input."""
        prefix = f"{message} " if message else ""
        return self._prompt(f"{prefix}Press Enter to continue...") is not None

    def clear_screen(self) -> None:
        self.stdout.write("\n" * self.config.clear_lines)
        self.stdout.flush()

    def progress(self, label: str) -> None:
        """Cosmetic dotted delay. Ctrl-C skips it; nothing depends on it."""
        self.stdout.write(label)
        self.stdout.flush()
        step = self.config.animation_seconds / PROGRESS_STEPS
        try:
            for _ in range(PROGRESS_STEPS):
                if step > 0:
                    self.sleep(step)
                self.stdout.write(".")
                self.stdout.flush()
        except KeyboardInterrupt:
            pass
        self._write()

    # --- Main menu ---

    def _menu(self) -> list[tuple[str, Callable[[], bool]]]:
        """(label, action) pairs numbered from 1. Actions return False to quit."""
        options: list[tuple[str, Callable[[], bool]]] = []
        if self.config.role.can_enter_orders:
            options.append(("New transaction", self.new_transaction))
        for view in MENU_VIEWS:
            label = f"{view.value.capitalize()} transactions"
            options.append((label, lambda v=view: self.browse(v)))
        return options

    def show_main_menu(self, options: list[tuple[str, Callable[[], bool]]]) -> None:
        self.clear_screen()
        self._write(BANNER)
        self._write(f"  STOCK TRADING SYSTEM - {self.config.role.name} MENU")
        self._write(BANNER)
        self._write()
        if self.config.role.can_submit:
            try:
                self._write(f"Pending transactions awaiting submit: {self.workflow.pending_count()}\n")
            except RecordStoreError as exc:
                logger.warning("Could not count pending orders: %s", exc)
        for number, (label, _) in enumerate(options, start=1):
            self._write(f"{number}. {label}")
        self._write("0. Exit")
        self._write()

    def run(self) -> int:
        """Main loop. Returns the process exit code."""
        logger.info("Desk shell started: role=%s, store=%s", self.config.role.value, self.store.path)
        options = self._menu()
        numbers = ", ".join(str(n) for n in range(1, len(options) + 1))
        while True:
            self.show_main_menu(options)
            answer = self._prompt("Select an option: ")
            if answer is None:
                break
            try:
                choice = int(answer.strip())
            except ValueError:
                self._write("\nInvalid input. Please enter a number.")
                if not self._pause():
                    break
                continue
            if choice == 0:
                break
            if not 1 <= choice <= len(options):
                self.clear_screen()
                self._write(f"\nInvalid option. Please select {numbers}, or 0.")
                if not self._pause():
                    break
                continue
            self.clear_screen()
            _, action = options[choice - 1]
            if not action():
                break
        logger.info("Desk shell exiting")
        return 0

    # --- Flows ---

    def new_transaction(self) -> bool:
        """Order entry flow. False only if input ended."""
        entry = OrderEntry(self.store, self.stdin, self.stdout, clock=self.clock)
        try:
            record = entry.run()
        except CancelledByUser:
            self._write("\nTransaction cancelled.")
            return self._pause()
        except RecordStoreError as exc:
            self._write(f"\nError: Could not save transaction to file. ({exc})\n")
            return self._pause()
        if record is None:
            return False
        self._write("\nTransaction saved successfully!\n")
        return self._pause()

    def _commands(self, view: View) -> str:
        commands = ["[N]ext page", "[P]revious page", "[R]eload"]
        if self._can_submit(view):
            commands.append("[S]ubmit all")
        commands.append("[M]ain menu")
        return "Commands: " + ", ".join(commands)

    def _can_submit(self, view: View) -> bool:
        return self.config.role.can_submit and view is View.PENDING

    def _load(self, view: View) -> PageSet | None:
        try:
            return self.pipeline.load(view)
        except RecordStoreError as exc:
            logger.warning("Listing failed: %s", exc)
            self._write(f"Error: {exc}")
            return None

    def browse(self, view: View = View.ALL) -> bool:
        """Paged listing for a view. False only if input ended."""
        page_set = self._load(view)
        if page_set is None:
            return self._pause()
        if page_set.empty:
            self.clear_screen()
            self._write("No transactions found.")
            return self._pause()

        pager = Pager(page_set)
        while True:
            self.clear_screen()
            self._write(render_page(pager, view))
            self._write(self._commands(view))
            answer = self._prompt("Enter command: ")
            if answer is None:
                return False
            command = answer.strip().upper()[:1]

            if command == "N":
                if not pager.next() and not self._pause("Already on last page."):
                    return False
            elif command == "P":
                if not pager.previous() and not self._pause("Already on first page."):
                    return False
            elif command == "M":
                return True
            elif command in ("R", "S"):
                if command == "S":
                    if not self._can_submit(view):
                        if not self._pause("Invalid command."):
                            return False
                        continue
                    if not self.submit_all():
                        return False
                page_set = self._load(view)
                if page_set is None:
                    return self._pause()
                if page_set.empty:
                    self.clear_screen()
                    self._write("No transactions found.")
                    return self._pause()
                pager.reload(page_set)
            elif not self._pause("Invalid command."):
                return False

    def submit_all(self) -> bool:
        """Confirm every pending order. False only if input ended."""
        self.progress("Submitting transactions")
        result = self.workflow.submit_all_pending()
        if result.status is SubmitStatus.FAILED:
            self._write(f"Error: Submit failed. {result.message}")
        else:
            self._write(result.message or "")
        return self._pause()
