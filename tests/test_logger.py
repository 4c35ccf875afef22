"""
Tests for utils.logger

Log files go to a temporary directory, never to the project tree.
"""
import os
import shutil
import sys
import tempfile
import unittest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from utils.logger import LedgerLogger


class TestLedgerLogger(unittest.TestCase):
    def setUp(self):
        self.log_dir = tempfile.mkdtemp()
        self.logger = LedgerLogger(name="Order-Ledger-Test", log_dir=self.log_dir, log_level="DEBUG")

    def tearDown(self):
        for handler in list(self.logger.logger.handlers):
            handler.close()
        self.logger.logger.handlers.clear()
        shutil.rmtree(self.log_dir, ignore_errors=True)

    def _read(self, filename):
        with open(os.path.join(self.log_dir, filename), encoding='utf-8') as f:
            return f.read()

    def test_component_prefix_in_main_log(self):
        self.logger.log_status_updated('o1', 'CONFIRMED', 2)

        content = self._read('order_ledger.log')
        self.assertIn('[INFO] [Order-Ledger-Test] [Ledger] Order o1 - Status set to CONFIRMED (row 2)', content)

    def test_errors_also_go_to_error_log(self):
        self.logger.info("just info")
        self.logger.log_store_error("add_order", "API quota exceeded")

        errors = self._read('errors.log')
        self.assertIn('[Ledger] add_order failed: API quota exceeded', errors)
        self.assertNotIn('just info', errors)


if __name__ == '__main__':
    unittest.main()
