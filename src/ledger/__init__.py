"""
Order ledger on Google Sheets
Append, look up and update customer order rows in the Orders tab
"""

from .ledger_models import OrderRecord, UpdateOutcome
from .order_ledger import OrderLedger, DisabledOrderLedger
from .ledger_bootstrap import LedgerInitError, connect_order_ledger, open_order_ledger

__all__ = [
    'OrderRecord',
    'UpdateOutcome',
    'OrderLedger',
    'DisabledOrderLedger',
    'LedgerInitError',
    'connect_order_ledger',
    'open_order_ledger',
]
