"""
Carry Forward Service

Projects closing balances into next financial year's opening rows.
"""
from datetime import date
from typing import Iterable, List

from ..models import ClosingBalance, TransactionRow


class CarryForwardExporter:

    @staticmethod
    def next_year_rows(balances: Iterable[ClosingBalance], opening_date: date) -> List[TransactionRow]:
        """
        One opening row per share still held.

        Parameters:
            balances: Closing balances of the current year
            opening_date: First day of the next financial year

        Returns:
            list: TransactionRow with only the opening triple set
        """
        return [
            TransactionRow(
                share=balance.share,
                opening_date=opening_date,
                opening_qty=balance.closing_qty,
                opening_amt=balance.closing_amt,
                row_number=number,
            )
            for number, balance in enumerate(
                (b for b in balances if b.closing_qty != 0), start=1
            )
        ]
