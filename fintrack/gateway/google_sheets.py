"""
Google Sheets Gateway Implementation

Google Sheets serves as the hosted backend: one worksheet per collection,
one record per row, a header row naming the columns. Non-technical
operators can inspect and fix data directly in the spreadsheet.

TRADEOFFS:
- Not suitable for high-volume data (fine for a small business ledger)
- No server-side joins (we expand foreign keys in Python after reading)
- No server-side ordering or filtering (also done in Python)

The implementation follows the DataGateway interface, so callers never
know which backend they are talking to.
"""

from datetime import date, datetime, timezone
from typing import Any, Optional
from uuid import uuid4

import gspread
from google.oauth2.service_account import Credentials

from fintrack.config import GoogleSheetsSettings, get_settings
from fintrack.gateway.interface import (
    Collection,
    DataGateway,
    GatewayError,
    Ordering,
    TRANSACTION_JOINS,
    apply_filters,
    apply_order,
    expand_joins,
)


# Column layout of each worksheet
COLUMNS = {
    Collection.CATEGORIES: [
        "id",
        "name",
        "type",
        "parent_id",
        "is_fixed",
        "created_at",
        "updated_at",
    ],
    Collection.EMPLOYEES: [
        "id",
        "name",
        "department",
        "position",
        "created_at",
        "updated_at",
    ],
    Collection.CONTRACTORS: [
        "id",
        "name",
        "type",
        "contact_person",
        "contact_email",
        "created_at",
        "updated_at",
    ],
    Collection.TRANSACTIONS: [
        "id",
        "type",
        "amount",
        "category_id",
        "employee_id",
        "contractor_id",
        "description",
        "date",
        "created_at",
        "updated_at",
    ],
}

# Empty cells in these columns mean "not set"
NULLABLE_COLUMNS = {"parent_id", "employee_id", "contractor_id", "description", "date"}
BOOLEAN_COLUMNS = {"is_fixed"}
FLOAT_COLUMNS = {"amount"}

SCOPES = [
    "https://www.googleapis.com/auth/spreadsheets",
    "https://www.googleapis.com/auth/drive",
]


class GoogleSheetsClient:
    """
    Low-level Google Sheets client wrapper.

    Handles authentication and worksheet lookup. Worksheets that do not
    exist yet are created with their header row.
    """

    def __init__(self, settings: Optional[GoogleSheetsSettings] = None):
        self._client: Optional[gspread.Client] = None
        self._spreadsheet: Optional[gspread.Spreadsheet] = None
        self._settings = settings or get_settings().google_sheets

    def connect(self) -> gspread.Client:
        """
        Establish connection to Google Sheets.

        Uses service account credentials for authentication.
        """
        if self._client is None:
            try:
                credentials = Credentials.from_service_account_file(
                    self._settings.credentials_path,
                    scopes=SCOPES,
                )
                self._client = gspread.authorize(credentials)
            except FileNotFoundError as e:
                raise GatewayError(
                    f"Google credentials file not found: {self._settings.credentials_path}",
                    operation="connect",
                ) from e
            except Exception as e:
                raise GatewayError(
                    f"Failed to connect to Google Sheets: {e}",
                    operation="connect",
                ) from e

        return self._client

    def get_spreadsheet(self) -> gspread.Spreadsheet:
        """Get the configured spreadsheet."""
        if self._spreadsheet is None:
            client = self.connect()
            try:
                self._spreadsheet = client.open_by_key(
                    self._settings.spreadsheet_id
                )
            except gspread.SpreadsheetNotFound as e:
                raise GatewayError(
                    f"Spreadsheet not found: {self._settings.spreadsheet_id}",
                    operation="connect",
                ) from e
        return self._spreadsheet

    def sheet_name(self, collection: Collection) -> str:
        return getattr(self._settings, f"{collection.value}_sheet_name")

    def get_worksheet(self, collection: Collection) -> gspread.Worksheet:
        """Get or create the worksheet backing a collection."""
        spreadsheet = self.get_spreadsheet()
        title = self.sheet_name(collection)
        try:
            sheet = spreadsheet.worksheet(title)
        except gspread.WorksheetNotFound:
            columns = COLUMNS[collection]
            sheet = spreadsheet.add_worksheet(
                title=title,
                rows=1000,
                cols=len(columns),
            )
            sheet.append_row(columns)
        return sheet


class GoogleSheetsGateway(DataGateway):
    """
    Google Sheets implementation of the data gateway.

    Each collection lives in its own worksheet. Ids are UUID strings and
    timestamps ISO-8601 strings, both written by this class on insert.
    """

    def __init__(self, client: Optional[GoogleSheetsClient] = None):
        self._client = client or GoogleSheetsClient()

    def _record_to_row(self, collection: Collection, record: dict) -> list:
        """Convert a record to a spreadsheet row."""
        row = []
        for column in COLUMNS[collection]:
            value = record.get(column)
            if value is None:
                row.append("")
            elif isinstance(value, bool):
                row.append("true" if value else "false")
            else:
                row.append(str(value))
        return row

    def _row_to_record(self, collection: Collection, row: list) -> dict:
        """
        Convert a spreadsheet row to a record.

        Raises ValueError for rows that cannot be decoded.
        """
        def safe_get(index: int, default: str = "") -> str:
            try:
                return row[index] if row[index] else default
            except IndexError:
                return default

        record: dict[str, Any] = {}
        for index, column in enumerate(COLUMNS[collection]):
            raw = safe_get(index)
            if column in BOOLEAN_COLUMNS:
                record[column] = raw.strip().lower() == "true"
            elif column in FLOAT_COLUMNS:
                record[column] = float(raw) if raw else None
            elif column in NULLABLE_COLUMNS:
                record[column] = raw or None
            else:
                record[column] = raw
        return record

    def _read_all(self, collection: Collection) -> list[dict]:
        """Read every decodable row of a worksheet, in sheet order."""
        sheet = self._client.get_worksheet(collection)
        all_rows = sheet.get_all_values()[1:]  # Skip header

        records = []
        for row in all_rows:
            if not row or not row[0]:  # Skip empty rows
                continue
            try:
                records.append(self._row_to_record(collection, row))
            except ValueError:
                continue  # Skip malformed rows
        return records

    async def select(
        self,
        collection: Collection,
        filters: Optional[dict[str, Any]] = None,
        order: Optional[Ordering] = None,
    ) -> list[dict]:
        """Read a collection, expanding joins for transactions."""
        try:
            collection = Collection(collection)
            records = self._read_all(collection)

            if collection == Collection.TRANSACTIONS:
                related = {
                    target: self._read_all(target)
                    for _, target in TRANSACTION_JOINS.values()
                }
                records = expand_joins(records, related)

            return apply_order(apply_filters(records, filters), order)
        except GatewayError:
            raise
        except Exception as e:
            raise GatewayError(
                f"Failed to read {collection}: {e}",
                operation="select",
                collection=str(getattr(collection, "value", collection)),
            ) from e

    async def insert(self, collection: Collection, record: dict) -> dict:
        """Append a record as a new row."""
        try:
            collection = Collection(collection)
            now = datetime.now(timezone.utc).isoformat()
            stored = {
                **record,
                "id": str(uuid4()),
                "created_at": now,
                "updated_at": now,
            }
            if collection == Collection.TRANSACTIONS and not stored.get("date"):
                stored["date"] = date.today().isoformat()

            row = self._record_to_row(collection, stored)
            sheet = self._client.get_worksheet(collection)
            sheet.append_row(row, value_input_option="RAW")
            return self._row_to_record(collection, row)
        except GatewayError:
            raise
        except Exception as e:
            raise GatewayError(
                f"Failed to insert into {collection}: {e}",
                operation="insert",
                collection=str(getattr(collection, "value", collection)),
            ) from e
