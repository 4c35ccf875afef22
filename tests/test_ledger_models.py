"""
Tests for ledger.ledger_models and ledger.phone_match

Pure functions only, no Sheets access.
"""
import os
import re
import sys
import unittest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

import config
from ledger.ledger_models import (
    OrderRecord,
    UpdateOutcome,
    build_items_summary,
    record_from_order,
    utc_now_iso,
)
from ledger.phone_match import normalize_phone, phones_match, strict_phones_match


class TestOrderRecord(unittest.TestCase):
    def test_to_row_follows_column_order(self):
        record = OrderRecord(order_id='o1', order_number='1001', phone='555', created_at='t')
        row = record.to_row()

        self.assertEqual(len(row), len(config.ORDER_LEDGER_COLUMNS))
        self.assertEqual(row[0], 'o1')
        self.assertEqual(row[3], '555')
        self.assertEqual(row[6], 'PENDING_CONFIRMATION')
        self.assertEqual(row[9], 't')

    def test_none_renders_empty(self):
        record = OrderRecord(order_id='o1', customer_name=None)
        self.assertEqual(record.to_row()[2], '')

    def test_from_short_row_pads_with_empty(self):
        record = OrderRecord.from_row(['o1', '1001'])

        self.assertEqual(record.order_id, 'o1')
        self.assertEqual(record.status, '')
        self.assertEqual(record.created_at, '')

    def test_from_row_ignores_extra_cells(self):
        row = [str(i) for i in range(12)]
        record = OrderRecord.from_row(row)
        self.assertEqual(record.created_at, '9')

    def test_to_dict(self):
        record = OrderRecord(order_id='o1')
        self.assertEqual(list(record.to_dict()), config.ORDER_LEDGER_COLUMNS)


class TestUpdateOutcome(unittest.TestCase):
    def test_only_updated_is_truthy(self):
        self.assertTrue(UpdateOutcome.UPDATED)
        self.assertFalse(UpdateOutcome.NOT_FOUND)
        self.assertFalse(UpdateOutcome.FAILED)


class TestItemsSummary(unittest.TestCase):
    def test_size_option_included(self):
        items = [{'title': 'Shirt', 'quantity': 2, 'options': [{'name': 'Size', 'value': 'M'}]}]
        self.assertEqual(build_items_summary(items), 'Shirt (M) x2')

    def test_other_options_ignored(self):
        items = [
            {'title': 'Mug', 'quantity': 1, 'options': [{'name': 'Color', 'value': 'Red'}]},
            {'title': 'Cap', 'quantity': 3},
        ]
        self.assertEqual(build_items_summary(items), 'Mug x1, Cap x3')

    def test_no_items(self):
        self.assertEqual(build_items_summary(None), '')
        self.assertEqual(build_items_summary([]), '')


class TestRecordFromOrder(unittest.TestCase):
    def test_commerce_shape(self):
        order = {
            '_id': 'abc',
            'orderSerial': 1001,
            'customer': {'name': 'Dana', 'phone': '111'},
            'shippingAddress': {'phone': '222'},
            'totalPrice': {'amount': 25},
            'items': [],
        }
        record = record_from_order(order, created_at='2026-10-18T10:00:00.000Z')

        self.assertEqual(record.order_id, 'abc')
        self.assertEqual(record.order_number, '1001')
        self.assertEqual(record.customer_name, 'Dana')
        self.assertEqual(record.phone, '222')
        self.assertEqual(record.total_amount, '25')
        self.assertEqual(record.status, 'PENDING_CONFIRMATION')
        self.assertEqual(record.confirmed_at, '')
        self.assertEqual(record.last_customer_message, '')

    def test_fallbacks(self):
        record = record_from_order({'id': 'o1', 'serial': 'S1', 'customer': {'phone': '111'}})

        self.assertEqual(record.order_id, 'o1')
        self.assertEqual(record.order_number, 'S1')
        self.assertEqual(record.phone, '111')
        self.assertEqual(record.customer_name, '')
        self.assertEqual(record.total_amount, '0')
        self.assertNotEqual(record.created_at, '')


class TestTimestamps(unittest.TestCase):
    def test_iso_utc_with_millis(self):
        self.assertRegex(utc_now_iso(), re.compile(r'^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}Z$'))


class TestPhoneMatch(unittest.TestCase):
    def test_normalize_strips_non_digits(self):
        self.assertEqual(normalize_phone('+1 (555) 123-4567'), '15551234567')
        self.assertEqual(normalize_phone(None), '')

    def test_formatted_input_matches_stored_digits(self):
        self.assertTrue(phones_match(normalize_phone('5551234567'), normalize_phone('+1 (555) 123-4567')))

    def test_stored_country_code_matches(self):
        self.assertTrue(phones_match('15551234567', '5551234567'))

    def test_different_numbers(self):
        self.assertFalse(phones_match('5551234567', '5559876543'))

    def test_empty_is_contained_in_every_number(self):
        self.assertTrue(phones_match('', '5551234567'))
        self.assertTrue(phones_match('5551234567', ''))

    def test_strict_match_rejects_empty(self):
        self.assertFalse(strict_phones_match('', '5551234567'))
        self.assertFalse(strict_phones_match('5551234567', ''))
        self.assertFalse(strict_phones_match('', ''))
        self.assertTrue(strict_phones_match('15551234567', '5551234567'))


if __name__ == '__main__':
    unittest.main()
