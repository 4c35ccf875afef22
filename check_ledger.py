#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Check the Orders ledger tab: header layout, row count and,
optionally, the pending order a phone number resolves to.

Usage:
    python check_ledger.py
    python check_ledger.py --phone "+1 (555) 123-4567"
"""
import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(os.path.abspath(__file__)), 'src'))

import config
from ledger.ledger_bootstrap import LedgerInitError, connect_order_ledger, validate_ledger_structure
from ledger.order_ledger import FIRST_DATA_ROW


def main(argv):
    phone = None
    if len(argv) >= 2 and argv[0] == '--phone':
        phone = argv[1]

    print("\n" + "=" * 80)
    print(f"Checking ledger tab '{config.ORDER_LEDGER_SHEET_NAME}'")
    print("=" * 80 + "\n")

    try:
        ledger = connect_order_ledger()
    except LedgerInitError as e:
        print(f"[ERROR] {e}")
        return 1

    is_valid, issues = validate_ledger_structure(ledger.store, ledger.sheet_name)
    if is_valid:
        print("[OK] Header matches schema")
    else:
        print(f"[FAIL] {len(issues)} issue(s):")
        for issue in issues:
            print(f"  - {issue}")

    rows = ledger.store.read_range(ledger.sheet_name, FIRST_DATA_ROW, 1, None, 1)
    print(f"[INFO] {len(rows)} order row(s)")

    if phone:
        record = ledger.get_pending_order_by_phone(phone)
        if record:
            print(f"\nPending order for {phone}:")
            for key, value in record.to_dict().items():
                print(f"  {key}: {value}")
        else:
            print(f"\n[INFO] No pending order for {phone}")

    print("\n" + "=" * 80)
    return 0 if is_valid else 2


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
