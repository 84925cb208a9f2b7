"""
Export Service

Spreadsheet exports of the carry-forward rows and the current ledger.
"""
import io
from datetime import date

import pandas as pd

from ..models import Ledger
from ..schemas import (
    TransactionRowSchema, TransactionSchema, ClosingBalanceSchema, SummarySchema, CapitalGainsSchema
)
from .carry_forward_service import CarryForwardExporter
from .import_service import LEDGER_COLUMNS


XLSX_MIMETYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
CSV_MIMETYPE = "text/csv"


class ExportService:

    @staticmethod
    def next_year_frame(ledger: Ledger, opening_date: date) -> pd.DataFrame:
        rows = CarryForwardExporter.next_year_rows(ledger.closing_balances, opening_date)
        records = TransactionRowSchema(many=True).dump(rows)
        return pd.DataFrame(records, columns=list(LEDGER_COLUMNS))

    def next_year_file(self, ledger: Ledger, opening_date: date, fmt: str = "xlsx"):
        """
        Carry-forward rows in the upload layout, ready to re-import.

        Returns:
            tuple: (BytesIO, mimetype, filename)
        """
        df = self.next_year_frame(ledger, opening_date)
        next_year = f"{opening_date.year}-{opening_date.year + 1}"
        if fmt == "csv":
            buffer = io.BytesIO(df.to_csv(index=False).encode("utf-8"))
            return buffer, CSV_MIMETYPE, f"opening_balances_{next_year}.csv"

        buffer = io.BytesIO()
        with pd.ExcelWriter(buffer, engine="openpyxl") as writer:
            df.to_excel(writer, sheet_name="Opening Balances", index=False)
        buffer.seek(0)
        return buffer, XLSX_MIMETYPE, f"opening_balances_{next_year}.xlsx"

    @staticmethod
    def current_report_file(ledger: Ledger):
        """
        Multi-sheet workbook of the current ledger.

        Returns:
            tuple: (BytesIO, mimetype, filename)
        """
        transactions = pd.DataFrame(TransactionSchema(many=True).dump(ledger.transactions))
        balances = pd.DataFrame(
            ClosingBalanceSchema(many=True, exclude=("transactions",)).dump(ledger.closing_balances)
        )
        summary = pd.DataFrame(
            list(SummarySchema().dump(ledger.summary).items()), columns=["metric", "value"]
        )

        gains = CapitalGainsSchema().dump(ledger.capital_gains)
        gains_rows = []
        for key, value in gains.items():
            if isinstance(value, dict):
                gains_rows.extend((f"{key}.{k}", v) for k, v in value.items())
            else:
                gains_rows.append((key, value))
        capital_gains = pd.DataFrame(gains_rows, columns=["metric", "value"])

        buffer = io.BytesIO()
        with pd.ExcelWriter(buffer, engine="openpyxl") as writer:
            transactions.to_excel(writer, sheet_name="Transactions", index=False)
            balances.to_excel(writer, sheet_name="Closing Balances", index=False)
            summary.to_excel(writer, sheet_name="Summary", index=False)
            capital_gains.to_excel(writer, sheet_name="Capital Gains", index=False)
        buffer.seek(0)
        filename = f"capital_gains_{ledger.tax_config.financial_year}.xlsx"
        return buffer, XLSX_MIMETYPE, filename
