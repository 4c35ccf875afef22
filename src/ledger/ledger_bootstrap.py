"""
Ledger Bootstrap
Opens the spreadsheet, makes sure the Orders tab and its header row exist,
and hands back a ready OrderLedger.

connect_order_ledger() raises LedgerInitError on any failure.
open_order_ledger() is the startup helper for workflows that can live
without the ledger: it logs the failure and returns a DisabledOrderLedger.
"""
from typing import List, Tuple

import config
from ledger.order_ledger import HEADER_ROW, DisabledOrderLedger, OrderLedger
from ledger.sheet_store import SheetStore
from utils.logger import get_logger


class LedgerInitError(Exception):
    """Raised when the ledger sheet cannot be opened or provisioned."""


def ensure_ledger_sheet(store: SheetStore, sheet_name: str = None, logger=None) -> None:
    """
    Create the ledger tab if missing and write the header row if row 1 is empty.

    A non-empty row 1 is left untouched; use validate_ledger_structure()
    to check it against ORDER_LEDGER_COLUMNS.
    """
    sheet_name = sheet_name or config.ORDER_LEDGER_SHEET_NAME
    logger = logger or get_logger()
    columns = config.ORDER_LEDGER_COLUMNS

    if sheet_name not in store.list_sheets():
        store.create_sheet(sheet_name, rows=1000, cols=len(columns))
        logger.info(f"Created sheet: {sheet_name}", component="Bootstrap")

    existing = store.read_range(sheet_name, HEADER_ROW, 1, HEADER_ROW, len(columns))
    if not existing or not any(existing[0]):
        store.write_range(sheet_name, HEADER_ROW, 1, [list(columns)])
        logger.info(f"Headers added to '{sheet_name}'", component="Bootstrap")


def validate_ledger_structure(store: SheetStore, sheet_name: str = None) -> Tuple[bool, List[str]]:
    """
    Check that the ledger tab exists and its header matches the schema.

    Returns:
        Tuple of (is_valid, list_of_issues).
    """
    sheet_name = sheet_name or config.ORDER_LEDGER_SHEET_NAME
    issues: List[str] = []

    try:
        if sheet_name not in store.list_sheets():
            return (False, [f"Missing tab: {sheet_name}"])
        rows = store.read_range(sheet_name, HEADER_ROW, 1, HEADER_ROW, len(config.ORDER_LEDGER_COLUMNS))
    except Exception as e:
        return (False, [f"Cannot read sheet '{sheet_name}': {e}"])

    headers = rows[0] if rows else []
    for position, expected in enumerate(config.ORDER_LEDGER_COLUMNS):
        actual = headers[position] if position < len(headers) else ''
        if actual != expected:
            issues.append(
                f"Tab '{sheet_name}': column {position + 1} is '{actual}', expected '{expected}'"
            )

    return (len(issues) == 0, issues)


def connect_order_ledger(sheet_id: str = None, sheet_name: str = None,
                         store: SheetStore = None, logger=None) -> OrderLedger:
    """
    Build a ready-to-use OrderLedger.

    Args:
        sheet_id: Spreadsheet key, defaults to ORDER_LEDGER_SHEET_ID
        sheet_name: Tab title, defaults to ORDER_LEDGER_SHEET_NAME
        store: Pre-built SheetStore (skips authentication)
        logger: LedgerLogger override

    Raises:
        LedgerInitError: credentials, spreadsheet or header bootstrap failed
    """
    logger = logger or get_logger()
    sheet_name = sheet_name or config.ORDER_LEDGER_SHEET_NAME
    try:
        if store is None:
            store = SheetStore.open(sheet_id)
        ensure_ledger_sheet(store, sheet_name, logger=logger)
    except Exception as e:
        raise LedgerInitError(f"Google Sheets initialization failed: {e}") from e

    logger.info(f"Order ledger ready on tab '{sheet_name}'", component="Bootstrap")
    return OrderLedger(store, sheet_name=sheet_name, logger=logger)


def open_order_ledger(sheet_id: str = None, sheet_name: str = None,
                      store: SheetStore = None, logger=None):
    """
    Like connect_order_ledger(), but never raises.

    Returns:
        OrderLedger, or DisabledOrderLedger when initialization failed
    """
    logger = logger or get_logger()
    try:
        return connect_order_ledger(sheet_id, sheet_name, store=store, logger=logger)
    except LedgerInitError as e:
        logger.error(str(e), component="Bootstrap")
        return DisabledOrderLedger(reason=str(e), logger=logger)
