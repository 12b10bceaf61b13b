"""
Tests for desk_shell: scripted sessions through the menu, order entry,
listings and bulk submit, plus the command-line contract.
"""

import io
from datetime import datetime

import pytest

from order_desk import Action, DeskConfig, OrderRecord, OrderType, RecordStore, Role, View, build_pages
from order_desk.query import Pager
from desk_shell import DeskShell, orders_frame, render_page
from desk_shell.cli import main

NOW = 1_700_000_000


def _session(tmp_path, role: Role, script: str, store: RecordStore | None = None):
    config = DeskConfig(
        role=role,
        store_path=tmp_path / "transactions.dat",
        animation_seconds=0,
        clear_lines=0,
    )
    out = io.StringIO()
    shell = DeskShell(config, store=store, stdin=io.StringIO(script), stdout=out, clock=lambda: NOW)
    code = shell.run()
    return code, out.getvalue(), shell.store


def _pending(ts: int) -> OrderRecord:
    return OrderRecord.create(345678, "GSC", Action.BUY, 200, 44.75, "GE", OrderType.LIMIT, clock=lambda: ts)


# --- Main menu ---


def test_exit_immediately(tmp_path):
    code, out, _ = _session(tmp_path, Role.BROKER, "0\n")
    assert code == 0
    assert "1. New transaction" in out
    assert "2. Confirmed transactions" in out
    assert "3. Pending transactions" in out
    assert "0. Exit" in out


def test_market_menu_has_no_order_entry(tmp_path):
    _, out, _ = _session(tmp_path, Role.MARKET, "0\n")
    assert "New transaction" not in out
    assert "1. Confirmed transactions" in out
    assert "2. Pending transactions" in out
    assert "Pending transactions awaiting submit: 0" in out


def test_end_of_input_at_menu_exits_cleanly(tmp_path):
    code, _, _ = _session(tmp_path, Role.BROKER, "")
    assert code == 0


def test_invalid_menu_choices_reprompt(tmp_path):
    code, out, _ = _session(tmp_path, Role.BROKER, "9\n\nabc\n\n0\n")
    assert code == 0
    assert "Invalid option. Please select 1, 2, 3, or 0." in out
    assert "Invalid input. Please enter a number." in out


# --- New transaction ---


def test_new_transaction_saved(tmp_path):
    script = "1\n123456\nJDS\nbuy\n100\n84.25\ngm\nlimit\n\n0\n"
    code, out, store = _session(tmp_path, Role.BROKER, script)
    assert code == 0
    assert "Transaction saved successfully!" in out
    assert f"Date: {datetime.fromtimestamp(NOW):%d/%m/%Y}" in out
    [saved] = store.load_all()
    assert saved.customer_account_no == 123456
    assert saved.broker_id == "JDS"
    assert saved.action == Action.BUY
    assert saved.quantity == 100
    assert saved.price == 84.25
    assert saved.ticker == "GM"
    assert saved.order_type == OrderType.LIMIT
    assert saved.timestamp == NOW
    assert saved.confirmed is False


def test_new_transaction_reprompts_on_bad_input(tmp_path):
    script = "1\n99999\n123456\nAB\nJDS\nhold\nsell\n0\n5\n0.001\n1.50\nAB1\nT\nstop\nmarket\n\n0\n"
    _, out, store = _session(tmp_path, Role.BROKER, script)
    assert "Error: Account number must be 6 digits" in out
    assert "Error: Broker ID must be between 3 and 15 characters" in out
    assert "Error: Must be BUY or SELL" in out
    assert "Error: Quantity must be between 1 and 9999" in out
    assert "Error: Price must have at most 2 decimal places" in out
    assert "Error: Ticker must contain only letters" in out
    assert "Error: Must be MARKET or LIMIT" in out
    [saved] = store.load_all()
    assert saved.action == Action.SELL
    assert saved.quantity == 5
    assert saved.ticker == "T"
    assert saved.order_type == OrderType.MARKET


def test_new_transaction_rejects_control_characters_in_broker_id(tmp_path):
    script = "1\n123456\nAB\x00\nJDS\nbuy\n100\n84.25\ngm\nlimit\n\n0\n"
    _, out, store = _session(tmp_path, Role.BROKER, script)
    assert "Error: Broker ID must contain only printable ASCII characters" in out
    [saved] = store.load_all()
    assert saved.broker_id == "JDS"


def test_new_transaction_cancel(tmp_path):
    _, out, store = _session(tmp_path, Role.BROKER, "1\n123456\nEXIT\n\n0\n")
    assert "Transaction cancelled." in out
    assert not store.exists()


def test_new_transaction_end_of_input(tmp_path):
    code, _, store = _session(tmp_path, Role.BROKER, "1\n123456\nJDS\n")
    assert code == 0
    assert not store.exists()


def test_new_transaction_save_failure_keeps_running(tmp_path):
    store = RecordStore(tmp_path / "missing" / "transactions.dat")
    script = "1\n123456\nJDS\nbuy\n100\n84.25\ngm\nlimit\n\n0\n"
    code, out, _ = _session(tmp_path, Role.BROKER, script, store=store)
    assert code == 0
    assert "Error: Could not save transaction to file." in out


# --- Listings ---


def test_browse_confirmed_seeds(tmp_path):
    _, out, _ = _session(tmp_path, Role.BROKER, "2\nN\n\nP\n\nX\n\nM\n0\n")
    assert "CONFIRMED TRANSACTIONS - Page 1 of 1" in out
    assert "Total transactions: 10" in out
    assert "Already on last page." in out
    assert "Already on first page." in out
    assert "Invalid command." in out
    assert "[S]ubmit all" not in out


def test_browse_empty_view(tmp_path):
    _, out, _ = _session(tmp_path, Role.BROKER, "3\n\n0\n")
    assert "No transactions found." in out


def test_browse_pages(tmp_path):
    store = RecordStore(tmp_path / "transactions.dat")
    store.ensure_initialized()
    for i in range(15):
        store.append(_pending(NOW + i))
    _, out, _ = _session(tmp_path, Role.BROKER, "3\nN\nM\n0\n", store=store)
    assert "PENDING TRANSACTIONS - Page 1 of 2" in out
    assert "PENDING TRANSACTIONS - Page 2 of 2" in out
    assert "Total transactions: 15" in out


def test_broker_cannot_submit(tmp_path):
    store = RecordStore(tmp_path / "transactions.dat")
    store.ensure_initialized()
    store.append(_pending(NOW))
    _, out, store = _session(tmp_path, Role.BROKER, "3\nS\n\nM\n0\n", store=store)
    assert "Invalid command." in out
    assert sum(1 for r in store.load_all() if not r.confirmed) == 1


def test_market_submit_all(tmp_path):
    store = RecordStore(tmp_path / "transactions.dat")
    store.ensure_initialized()
    store.append(_pending(NOW))
    store.append(_pending(NOW + 60))
    code, out, store = _session(tmp_path, Role.MARKET, "2\nS\n\n\n0\n", store=store)
    assert code == 0
    assert "[S]ubmit all" in out
    assert "Submitting transactions" in out
    assert "2 transaction(s) submitted" in out
    assert "No transactions found." in out
    loaded = store.load_all()
    assert len(loaded) == 12
    assert all(r.confirmed for r in loaded)


def test_reload_picks_up_new_orders(tmp_path):
    store = RecordStore(tmp_path / "transactions.dat")
    store.ensure_initialized()
    store.append(_pending(NOW))

    class AppendingInput(io.StringIO):
        """Appends an order when the reload command is read, as another terminal would."""

        def readline(self, *args):
            line = super().readline(*args)
            if line == "R\n":
                store.append(_pending(NOW + 1))
            return line

    config = DeskConfig(role=Role.MARKET, store_path=store.path, animation_seconds=0, clear_lines=0)
    out = io.StringIO()
    DeskShell(config, store=store, stdin=AppendingInput("2\nR\nM\n0\n"), stdout=out).run()
    text = out.getvalue()
    assert "Total transactions: 1" in text
    assert "Total transactions: 2" in text


# --- Report ---


def test_orders_frame_formats_rows():
    record = _pending(NOW)
    frame = orders_frame([record])
    assert list(frame.columns) == ["Acct#", "Timestamp", "Broker", "Action", "Qty", "Price", "Ticker", "Type"]
    row = frame.iloc[0]
    assert row["Price"] == "$44.75"
    assert row["Action"] == "BUY"
    assert row["Type"] == "LIMIT"
    assert row["Timestamp"] == datetime.fromtimestamp(NOW).strftime("%m/%d/%y %H:%M")


def test_orders_frame_status_column():
    frame = orders_frame([_pending(NOW), _pending(NOW).confirm()], with_status=True)
    assert list(frame["Status"]) == ["PENDING", "CONFIRMED"]


def test_render_page_title_and_total():
    pager = Pager(build_pages([_pending(NOW + i) for i in range(12)], page_size=10))
    pager.next()
    text = render_page(pager, View.PENDING)
    assert "PENDING TRANSACTIONS - Page 2 of 2" in text
    assert "Total transactions: 12" in text


# --- CLI ---


def test_cli_requires_role(capsys):
    with pytest.raises(SystemExit) as exc:
        main([])
    assert exc.value.code != 0
    assert "usage" in capsys.readouterr().err


def test_cli_rejects_unknown_role(capsys):
    with pytest.raises(SystemExit) as exc:
        main(["trader"])
    assert exc.value.code != 0
    assert "usage" in capsys.readouterr().err


def test_cli_rejects_extra_role(capsys):
    with pytest.raises(SystemExit) as exc:
        main(["broker", "market"])
    assert exc.value.code != 0


def test_cli_runs_shell(tmp_path, monkeypatch):
    monkeypatch.setattr("sys.stdin", io.StringIO("0\n"))
    assert main(["BROKER", "--store", str(tmp_path / "t.dat")]) == 0
