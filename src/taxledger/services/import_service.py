"""
Import Service

Reads an uploaded CSV / Excel ledger into validated TransactionRows.
"""
import io
import math
import os
import re
import zipfile
from datetime import date, datetime
from typing import Dict, List, Optional, Tuple

import pandas as pd
import xlrd

from ..config import setup_logger
from ..exceptions import MalformedRowError, UnsupportedFileError
from ..models import TransactionRow
from ..utils import parse_iso_date


logger = setup_logger(name="ImportService")

# Sheet column -> TransactionRow field, in sheet order
LEDGER_COLUMNS = {
    "share": "share",
    "openingDate": "opening_date",
    "openingQty": "opening_qty",
    "openingAmt": "opening_amt",
    "purchaseDate": "purchase_date",
    "purchaseQty": "purchase_qty",
    "purchaseAmt": "purchase_amt",
    "saleDate": "sale_date",
    "saleQty": "sale_qty",
    "saleAmt": "sale_amt",
}

HEADER_ALIASES = {
    "stock": "share",
    "symbol": "share",
    "scrip": "share",
    "sharename": "share",
}
for _column, _field in LEDGER_COLUMNS.items():
    HEADER_ALIASES[re.sub(r"[^a-z]", "", _column.lower())] = _field
for _prefix in ("opening", "purchase", "sale"):
    HEADER_ALIASES[f"{_prefix}quantity"] = f"{_prefix}_qty"
    HEADER_ALIASES[f"{_prefix}amount"] = f"{_prefix}_amt"
    HEADER_ALIASES[f"{_prefix}value"] = f"{_prefix}_amt"

DATE_FIELDS = ("opening_date", "purchase_date", "sale_date")
NUMBER_FIELDS = ("opening_qty", "opening_amt", "purchase_qty", "purchase_amt", "sale_qty", "sale_amt")

SUPPORTED_EXTENSIONS = (".csv", ".xlsx", ".xls")

# pandas engine per Excel extension
EXCEL_ENGINES = {".xlsx": "openpyxl", ".xls": "xlrd"}

# DD-MM-YYYY, DD/MM/YYYY, DD.MM.YYYY
DAY_FIRST_DATE = re.compile(r"^\d{1,2}[-/.]\d{1,2}[-/.]\d{4}$")


def normalize_header(header) -> Optional[str]:
    """Map 'Opening Date', 'opening_date', 'openingDate' to 'opening_date'"""
    key = re.sub(r"[^a-z]", "", str(header).lower())
    return HEADER_ALIASES.get(key)


class ImportService:

    def read_upload(self, stream, filename: str) -> List[TransactionRow]:
        """
        Read an uploaded file into rows.

        Parameters:
            stream: Binary file-like object
            filename (str): Original filename, used for the format

        Returns:
            list: TransactionRow in file order

        Raises:
            UnsupportedFileError: Unknown extension, unreadable or empty file
            MalformedRowError: One or more rows failed validation
        """
        df = self.read_frame(stream, filename)
        return self.parse_frame(df)

    @staticmethod
    def read_frame(stream, filename: str) -> pd.DataFrame:
        extension = os.path.splitext(filename or "")[1].lower()
        if extension not in SUPPORTED_EXTENSIONS:
            raise UnsupportedFileError(
                f"Unsupported file type '{extension or filename}'. Use .xlsx, .xls or .csv"
            )

        content = stream.read()
        if not content:
            raise UnsupportedFileError("Uploaded file is empty")

        try:
            if extension == ".csv":
                df = pd.read_csv(io.BytesIO(content), dtype=object, skipinitialspace=True)
            else:
                df = pd.read_excel(io.BytesIO(content), engine=EXCEL_ENGINES[extension])
        except (ValueError, zipfile.BadZipFile, xlrd.XLRDError) as e:
            raise UnsupportedFileError(f"Could not read {filename}: {e}") from e

        logger.info(f"Read {filename}: {df.shape[0]} rows, columns {list(df.columns)}")
        return df

    def parse_frame(self, df: pd.DataFrame) -> List[TransactionRow]:
        columns = {}
        for column in df.columns:
            field = normalize_header(column)
            if field and field not in columns.values():
                columns[column] = field

        if "share" not in columns.values():
            raise MalformedRowError(
                "Missing 'share' column",
                errors=[{"row": 1, "message": "header has no share column"}],
            )

        df = df[list(columns)].rename(columns=columns).dropna(how="all")
        if df.empty:
            raise UnsupportedFileError("Uploaded file has no transaction rows")

        rows = []
        errors = []
        for index, record in df.iterrows():
            # +2: header line and 1-based numbering
            row_number = int(index) + 2
            row, row_errors = self.parse_record(record.to_dict(), row_number)
            if row_errors:
                errors.extend(row_errors)
            else:
                rows.append(row)

        if errors:
            logger.warning(f"Rejected upload with {len(errors)} row errors")
            raise MalformedRowError(
                f"{len(errors)} invalid value(s) in uploaded ledger", errors=errors
            )
        return rows

    @staticmethod
    def parse_record(record: Dict, row_number: int) -> Tuple[Optional[TransactionRow], List[Dict]]:
        errors = []
        values = {}

        share = record.get("share")
        share = "" if _is_blank(share) else str(share).strip()
        if not share:
            errors.append({"row": row_number, "field": "share", "message": "missing share"})

        for field in NUMBER_FIELDS:
            raw = record.get(field)
            try:
                value = 0.0 if _is_blank(raw) else float(str(raw).replace(",", ""))
            except ValueError:
                errors.append({"row": row_number, "field": field, "message": f"not a number: {raw}"})
                continue
            if not math.isfinite(value):
                errors.append({"row": row_number, "field": field, "message": f"not a finite number: {raw}"})
                continue
            if value < 0:
                errors.append({"row": row_number, "field": field, "message": f"negative value: {raw}"})
            values[field] = value

        for field in DATE_FIELDS:
            raw = record.get(field)
            try:
                values[field] = _to_date(raw)
            except ValueError:
                errors.append({"row": row_number, "field": field, "message": f"unparsable date: {raw}"})

        if errors:
            return None, errors
        return TransactionRow(share=share, row_number=row_number, **values), []


def _is_blank(value) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return bool(pd.isna(value))


def _to_date(value) -> Optional[date]:
    if _is_blank(value):
        return None
    if isinstance(value, pd.Timestamp):
        return value.date()
    if isinstance(value, (datetime, date)):
        return parse_iso_date(value)
    value = str(value).strip()
    if DAY_FIRST_DATE.match(value):
        # as exported by Indian brokers
        return pd.to_datetime(re.sub(r"[/.]", "-", value), format="%d-%m-%Y").date()
    return parse_iso_date(value)
