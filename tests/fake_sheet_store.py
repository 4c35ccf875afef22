"""
In-memory stand-in for ledger.sheet_store.SheetStore.

Mimics the Sheets API read shape: trailing empty cells of a row and
trailing empty rows are dropped from read results.
"""


class FakeSheetStore:
    def __init__(self, sheets=None):
        self.sheets = {name: [list(r) for r in rows] for name, rows in (sheets or {}).items()}
        self.reads = []
        self.writes = []
        self.appends = []
        self.fail_on = set()

    def _maybe_fail(self, operation):
        if operation in self.fail_on:
            raise Exception("API quota exceeded")

    def list_sheets(self):
        self._maybe_fail('list_sheets')
        return list(self.sheets)

    def create_sheet(self, title, rows=1000, cols=26):
        self._maybe_fail('create_sheet')
        self.sheets[title] = []

    def read_range(self, sheet_name, first_row, first_col=1, last_row=None, last_col=None):
        self._maybe_fail('read_range')
        self.reads.append((sheet_name, first_row, first_col, last_row, last_col))
        grid = self.sheets[sheet_name]
        last_row = last_row if last_row is not None else len(grid)
        last_col = last_col or first_col

        out = []
        for r in range(first_row, last_row + 1):
            row = grid[r - 1] if r - 1 < len(grid) else []
            cells = [row[c - 1] if c - 1 < len(row) else '' for c in range(first_col, last_col + 1)]
            while cells and cells[-1] == '':
                cells.pop()
            out.append(cells)
        while out and not out[-1]:
            out.pop()
        return out

    def write_range(self, sheet_name, first_row, first_col, rows):
        self._maybe_fail('write_range')
        self.writes.append((sheet_name, first_row, first_col, [list(r) for r in rows]))
        grid = self.sheets[sheet_name]
        for offset, values in enumerate(rows):
            r = first_row - 1 + offset
            while len(grid) <= r:
                grid.append([])
            row = grid[r]
            for c_offset, value in enumerate(values):
                c = first_col - 1 + c_offset
                while len(row) <= c:
                    row.append('')
                row[c] = value

    def append_row(self, sheet_name, row):
        self._maybe_fail('append_row')
        self.appends.append((sheet_name, list(row)))
        self.sheets[sheet_name].append(list(row))

    # Test helpers

    def data_rows(self, sheet_name):
        return self.sheets[sheet_name][1:]
