"""
Order Ledger Data Models

Pure definitions -- no side effects, no imports of external services.
"""
from dataclasses import dataclass, fields
from datetime import datetime, timezone
from enum import Enum
from typing import Dict, List, Optional

import config


class UpdateOutcome(Enum):
    """Result of an in-place ledger update. Truthy only when the write happened."""
    UPDATED = 'UPDATED'
    NOT_FOUND = 'NOT_FOUND'
    FAILED = 'FAILED'

    def __bool__(self):
        return self is UpdateOutcome.UPDATED


@dataclass
class OrderRecord:
    """Represents a single row in the Orders Google Sheet tab."""
    order_id: str
    order_number: str = ''
    customer_name: str = ''
    phone: str = ''
    total_amount: str = '0'
    items_summary: str = ''
    status: str = config.ORDER_STATUS_PENDING
    last_customer_message: str = ''
    confirmed_at: str = ''
    created_at: str = ''

    def to_row(self) -> List[str]:
        """Convert to a list matching ORDER_LEDGER_COLUMNS order."""
        return ['' if value is None else str(value)
                for value in (getattr(self, name) for name in config.ORDER_LEDGER_COLUMNS)]

    @classmethod
    def from_row(cls, row: list) -> 'OrderRecord':
        """
        Create an OrderRecord from a sheet row (list of strings).

        The Sheets API drops trailing empty cells, so short rows are padded
        with empty strings; cells past the last column are ignored.
        """
        values = list(row[:len(config.ORDER_LEDGER_COLUMNS)])
        values += [''] * (len(config.ORDER_LEDGER_COLUMNS) - len(values))
        return cls(**dict(zip(config.ORDER_LEDGER_COLUMNS, values)))

    def to_dict(self) -> Dict[str, str]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


def utc_now_iso() -> str:
    """
    Current UTC time as ISO-8601 with milliseconds and a Z suffix.

    Example: 2026-10-18T09:15:02.123Z
    """
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec='milliseconds').replace('+00:00', 'Z')


def _size_option(item: Dict) -> Optional[str]:
    for option in item.get('options') or []:
        if option.get('name') == 'Size':
            return option.get('value')
    return None


def build_items_summary(items: Optional[List[Dict]]) -> str:
    """
    Human readable line-item summary, e.g. "Shirt (M) x2, Cap x1".

    Not meant to be parsed back.
    """
    parts = []
    for item in items or []:
        size = _size_option(item)
        size_part = f" ({size})" if size else ''
        parts.append(f"{item.get('title', '')}{size_part} x{item.get('quantity', '')}")
    return ', '.join(parts)


def record_from_order(order: Dict, created_at: Optional[str] = None) -> OrderRecord:
    """
    Build a fresh PENDING_CONFIRMATION record from an upstream order payload.

    Accepts the commerce platform shape (_id, orderSerial, customer,
    shippingAddress, totalPrice, items) and plain id/serial aliases.
    """
    customer = order.get('customer') or {}
    shipping = order.get('shippingAddress') or {}
    total = order.get('totalPrice') or {}

    order_id = order.get('_id') or order.get('id')
    order_number = order.get('orderSerial') or order.get('serial')

    return OrderRecord(
        order_id='' if order_id is None else str(order_id),
        order_number='' if order_number is None else str(order_number),
        customer_name=customer.get('name') or '',
        phone=shipping.get('phone') or customer.get('phone') or '',
        total_amount=str(total.get('amount') or 0),
        items_summary=build_items_summary(order.get('items')),
        status=config.ORDER_STATUS_PENDING,
        last_customer_message='',
        confirmed_at='',
        created_at=created_at or utc_now_iso(),
    )
