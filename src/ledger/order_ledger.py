"""
Order Ledger
Keeps one row per customer order in the Orders tab and moves it through
PENDING_CONFIRMATION -> CONFIRMED (or any other status the chat flow sets).

Guardrails:
- Rows are only appended or overwritten in place, never deleted or reordered.
- Every public method returns a result instead of raising: the ledger is an
  auxiliary record and must not break the order or chat workflow.
- Lookups are linear scans over the sheet; there is no index.
- Status updates are read-modify-write without a version check, so two
  concurrent updates of the same row resolve as last-write-wins.
"""
from typing import Callable, Dict, List, Optional

import config
from ledger.ledger_models import OrderRecord, UpdateOutcome, record_from_order, utc_now_iso
from ledger.phone_match import normalize_phone, phones_match
from ledger.sheet_store import SheetStore
from utils.logger import get_logger

COLUMN_COUNT = len(config.ORDER_LEDGER_COLUMNS)
COL_ORDER_ID = config.ORDER_LEDGER_COLUMNS.index('order_id') + 1  # A
COL_LAST_MESSAGE = config.ORDER_LEDGER_COLUMNS.index('last_customer_message') + 1  # H

HEADER_ROW = 1
FIRST_DATA_ROW = 2


class OrderLedger:
    """Order rows in a Google Sheet tab, addressed through a SheetStore."""

    def __init__(
        self,
        store: SheetStore,
        sheet_name: str = None,
        logger=None,
        phone_normalizer: Callable[[str], str] = normalize_phone,
        phone_matcher: Callable[[str, str], bool] = phones_match,
        clock: Callable[[], str] = utc_now_iso,
    ):
        self.store = store
        self.sheet_name = sheet_name or config.ORDER_LEDGER_SHEET_NAME
        self.logger = logger or get_logger()
        self.normalize_phone = phone_normalizer
        self.phones_match = phone_matcher
        self.clock = clock

    # ─────────────────────────────────────────────────────────────
    # Internal helpers
    # ─────────────────────────────────────────────────────────────

    def _locate(self, order_id: str) -> Optional[int]:
        """
        Sheet row number of the first data row whose order_id matches. Raises on I/O errors.

        Ids are compared as strings, the way add_order writes them.
        """
        wanted = '' if order_id is None else str(order_id)
        column = self.store.read_range(self.sheet_name, HEADER_ROW, COL_ORDER_ID, None, COL_ORDER_ID)
        for idx, row in enumerate(column):
            if idx == 0:
                continue  # Skip header
            if row and row[0] == wanted:
                return idx + HEADER_ROW
        return None

    def _read_row(self, row_num: int) -> OrderRecord:
        rows = self.store.read_range(self.sheet_name, row_num, 1, row_num, COLUMN_COUNT)
        return OrderRecord.from_row(rows[0] if rows else [])

    def _write_row(self, row_num: int, record: OrderRecord) -> None:
        self.store.write_range(self.sheet_name, row_num, 1, [record.to_row()])

    # ─────────────────────────────────────────────────────────────
    # Public methods
    # ─────────────────────────────────────────────────────────────

    def add_order(self, order: Dict) -> bool:
        """
        Append a new PENDING_CONFIRMATION row for an upstream order.

        There is no duplicate check: appending the same order twice leaves
        two rows, so callers that retry need their own idempotency guard.

        Args:
            order: Commerce order payload (_id/id, orderSerial/serial, items, ...)

        Returns:
            True if the row was appended, False otherwise
        """
        try:
            record = record_from_order(order, created_at=self.clock())
            self.store.append_row(self.sheet_name, record.to_row())
            self.logger.log_order_appended(record.order_number, record.order_id)
            return True
        except Exception as e:
            self.logger.log_store_error("add_order", str(e))
            return False

    def find_row_by_order_id(self, order_id: str) -> Optional[int]:
        """
        Find the 1-based sheet row holding an order.

        Returns:
            Row number, or None when the order is absent or the sheet
            could not be read
        """
        try:
            return self._locate(order_id)
        except Exception as e:
            self.logger.log_store_error("find_row_by_order_id", str(e))
            return None

    def get_order(self, order_id: str) -> Optional[OrderRecord]:
        """Fetch the full record for an order, or None."""
        try:
            row_num = self._locate(order_id)
            if row_num is None:
                self.logger.log_order_not_found(order_id)
                return None
            return self._read_row(row_num)
        except Exception as e:
            self.logger.log_store_error("get_order", str(e))
            return None

    def update_order_status(self, order_id: str, status: str,
                            additional_data: Optional[Dict] = None) -> UpdateOutcome:
        """
        Set an order's status and derive confirmed_at.

        confirmed_at is stamped on the first move into CONFIRMED and kept on
        later updates. An explicit additional_data['confirmed_at'] (or the
        commerce payload spelling 'confirmedAt') always overwrites it.

        Args:
            order_id: Ledger order_id
            status: New status value (free-form)
            additional_data: Optional overrides, currently only confirmed_at

        Returns:
            UpdateOutcome.UPDATED, NOT_FOUND (no write made) or FAILED
        """
        additional_data = additional_data or {}
        try:
            row_num = self._locate(order_id)
            if row_num is None:
                self.logger.log_order_not_found(order_id)
                return UpdateOutcome.NOT_FOUND

            record = self._read_row(row_num)
            record.status = status

            if status == config.ORDER_STATUS_CONFIRMED and not record.confirmed_at:
                record.confirmed_at = self.clock()

            override = additional_data.get('confirmed_at') or additional_data.get('confirmedAt')
            if override:
                record.confirmed_at = override

            self._write_row(row_num, record)
            self.logger.log_status_updated(order_id, status, row_num)
            return UpdateOutcome.UPDATED
        except Exception as e:
            self.logger.log_store_error("update_order_status", str(e))
            return UpdateOutcome.FAILED

    def update_last_message(self, order_id: str, message: str) -> UpdateOutcome:
        """Overwrite only the last_customer_message cell of an order."""
        try:
            row_num = self._locate(order_id)
            if row_num is None:
                self.logger.log_order_not_found(order_id)
                return UpdateOutcome.NOT_FOUND

            self.store.write_range(self.sheet_name, row_num, COL_LAST_MESSAGE, [[message or '']])
            self.logger.info(f"Updated last message for order {order_id}", component="Ledger")
            return UpdateOutcome.UPDATED
        except Exception as e:
            self.logger.log_store_error("update_last_message", str(e))
            return UpdateOutcome.FAILED

    def get_pending_order_by_phone(self, phone: str) -> Optional[OrderRecord]:
        """
        Most recent PENDING_CONFIRMATION order for a phone number.

        The input may carry spaces, punctuation or a country code. Rows are
        scanned newest-first and created_at decides between several
        matches; ISO-8601 strings sort chronologically.
        """
        try:
            rows: List[List[str]] = self.store.read_range(
                self.sheet_name, FIRST_DATA_ROW, 1, None, COLUMN_COUNT
            )
        except Exception as e:
            self.logger.log_store_error("get_pending_order_by_phone", str(e))
            return None

        wanted = self.normalize_phone(phone)
        latest: Optional[OrderRecord] = None

        for row in reversed(rows):
            record = OrderRecord.from_row(row)
            if record.status != config.ORDER_STATUS_PENDING:
                continue
            if not self.phones_match(self.normalize_phone(record.phone), wanted):
                continue
            if latest is None or record.created_at > latest.created_at:
                latest = record

        if latest:
            self.logger.info(
                f"Found pending order {latest.order_number} for phone {phone}",
                component="Ledger"
            )
        return latest


class DisabledOrderLedger:
    """
    Stand-in used when the ledger could not be opened.

    Every operation logs a warning and reports failure, so order and chat
    workflows keep running without the sheet.
    """

    def __init__(self, reason: str = '', logger=None):
        self.reason = reason
        self.logger = logger or get_logger()

    def _skip(self, operation: str):
        self.logger.warning(
            f"Ledger not initialized - skipping {operation}",
            component="Ledger"
        )

    def add_order(self, order: Dict) -> bool:
        self._skip("add_order")
        return False

    def find_row_by_order_id(self, order_id: str) -> Optional[int]:
        self._skip("find_row_by_order_id")
        return None

    def get_order(self, order_id: str) -> Optional[OrderRecord]:
        self._skip("get_order")
        return None

    def update_order_status(self, order_id: str, status: str,
                            additional_data: Optional[Dict] = None) -> UpdateOutcome:
        self._skip("update_order_status")
        return UpdateOutcome.FAILED

    def update_last_message(self, order_id: str, message: str) -> UpdateOutcome:
        self._skip("update_last_message")
        return UpdateOutcome.FAILED

    def get_pending_order_by_phone(self, phone: str) -> Optional[OrderRecord]:
        self._skip("get_pending_order_by_phone")
        return None
