"""
Sheet Store
Thin range-addressed wrapper around a gspread Spreadsheet.

Rows and columns are 1-indexed. Every call is one Sheets API round trip;
retries and timeouts are left to gspread's HTTP client. Errors from gspread
propagate to the caller.
"""
from typing import List, Optional

import gspread
from google.oauth2.service_account import Credentials

import config


def get_column_letter(col_num: int) -> str:
    """
    Convert column number to Excel-style column letter
    1 -> A, 26 -> Z, 27 -> AA, etc.
    """
    result = ""
    while col_num > 0:
        col_num -= 1
        result = chr(col_num % 26 + 65) + result
        col_num //= 26
    return result


def a1_range(sheet_name: str, first_row: int, first_col: int = 1,
             last_row: Optional[int] = None, last_col: Optional[int] = None) -> str:
    """
    Render an A1 range on a named tab.

    last_row=None leaves the range open to the bottom of the sheet:
    a1_range('Orders', 2, 1, None, 10) -> "'Orders'!A2:J"
    """
    title = sheet_name.replace("'", "''")
    start = f"{get_column_letter(first_col)}{first_row}"
    end_col = get_column_letter(last_col or first_col)
    end = f"{end_col}{last_row}" if last_row is not None else end_col
    return f"'{title}'!{start}:{end}"


def _get_client():
    """Create a gspread client from a service account file or ADC."""
    creds_path = config.get_credentials_path()
    if creds_path:
        creds = Credentials.from_service_account_file(creds_path, scopes=config.SHEETS_SCOPES)
        return gspread.authorize(creds)
    else:
        import google.auth

        credentials, _ = google.auth.default(scopes=config.SHEETS_SCOPES)
        return gspread.authorize(credentials)


class SheetStore:
    """
    Read, overwrite and append rows on the tabs of one spreadsheet.

    For tests, pass a fake spreadsheet to the constructor; `open()` is the
    production path that authenticates and opens the sheet by key.
    """

    def __init__(self, spreadsheet, value_input_option: str = None):
        self.spreadsheet = spreadsheet
        self.value_input_option = value_input_option or config.SHEETS_VALUE_INPUT_OPTION

    @classmethod
    def open(cls, sheet_id: str = None) -> 'SheetStore':
        """Authenticate and open the spreadsheet (defaults to ORDER_LEDGER_SHEET_ID)."""
        target_sheet_id = sheet_id or config.ORDER_LEDGER_SHEET_ID
        if not target_sheet_id:
            raise ValueError("ORDER_LEDGER_SHEET_ID or GOOGLE_SHEET_ID must be set")
        client = _get_client()
        return cls(client.open_by_key(target_sheet_id))

    def read_range(self, sheet_name: str, first_row: int, first_col: int = 1,
                   last_row: Optional[int] = None, last_col: Optional[int] = None) -> List[List[str]]:
        """
        Read a block of cells.

        Trailing empty rows and trailing empty cells of each row are omitted
        by the API, so callers must tolerate short rows.
        """
        rng = a1_range(sheet_name, first_row, first_col, last_row, last_col)
        response = self.spreadsheet.values_get(rng)
        return response.get('values', [])

    def write_range(self, sheet_name: str, first_row: int, first_col: int,
                    rows: List[List[str]]) -> None:
        """Overwrite exactly the cells covered by `rows`, anchored at (first_row, first_col)."""
        if not rows:
            return
        width = max(len(r) for r in rows)
        rng = a1_range(
            sheet_name,
            first_row,
            first_col,
            first_row + len(rows) - 1,
            first_col + width - 1,
        )
        self.spreadsheet.values_update(
            rng,
            params={'valueInputOption': self.value_input_option},
            body={'values': rows},
        )

    def append_row(self, sheet_name: str, row: List[str]) -> None:
        """Insert one row after the last populated row of the tab's table."""
        rng = a1_range(sheet_name, 1, 1, None, max(len(row), 1))
        self.spreadsheet.values_append(
            rng,
            params={
                'valueInputOption': self.value_input_option,
                'insertDataOption': 'INSERT_ROWS',
            },
            body={'values': [row]},
        )

    def list_sheets(self) -> List[str]:
        """Titles of all tabs in the spreadsheet."""
        return [ws.title for ws in self.spreadsheet.worksheets()]

    def create_sheet(self, title: str, rows: int = 1000, cols: int = 26):
        return self.spreadsheet.add_worksheet(title=title, rows=rows, cols=cols)
