"""Transaction ledger: daily income/expense views over a transactions table.

The ledger wraps a pandas DataFrame of transactions (as produced by the CSV
importer) and exposes the sparse per-day maps the trend aggregation consumes,
plus per-category spending used by budget usage and financial advice.
"""

from __future__ import annotations

from datetime import date
from typing import Dict, List, Optional, Tuple

import numpy as np
import pandas as pd

TRANSFER_CATEGORY_LABELS = {'transfer', 'transfers', 'internal transfer'}


class TransactionLedger:
    """Income and expense views over transaction rows."""

    def __init__(self, data: Optional[pd.DataFrame] = None):
        """Initialize with transaction data.

        Args:
            data: DataFrame with ``Transaction Date`` and ``Amount`` columns and
                an optional ``Category`` column.  Rows with an unparseable
                date are dropped; unparseable amounts count as zero.
        """
        self.data = data.copy() if data is not None else pd.DataFrame()
        self._prepare_data()

    @classmethod
    def from_records(cls, records: List[Dict]) -> 'TransactionLedger':
        return cls(pd.DataFrame(records))

    def _prepare_data(self) -> None:
        if self.data.empty or 'Transaction Date' not in self.data.columns:
            self.data = pd.DataFrame(columns=['Transaction Date', 'Amount', 'Category', 'Flow Category'])
            return

        self.data['Transaction Date'] = pd.to_datetime(
            self.data['Transaction Date'], errors='coerce', format='mixed'
        )
        self.data = self.data.dropna(subset=['Transaction Date']).copy()
        self.data['Transaction Date'] = self.data['Transaction Date'].dt.normalize()
        self.data['Amount'] = pd.to_numeric(
            self.data.get('Amount', pd.Series(0.0, index=self.data.index)), errors='coerce'
        ).fillna(0.0)
        self.data['Category'] = (
            self.data.get('Category', pd.Series('Uncategorized', index=self.data.index))
            .fillna('Uncategorized')
            .astype(str)
        )

        is_transfer = self.data['Category'].str.strip().str.lower().isin(TRANSFER_CATEGORY_LABELS)
        self.data['Flow Category'] = np.where(
            is_transfer,
            'Transfer',
            np.where(self.data['Amount'] > 0, 'Income', 'Expense'),
        )

    def _rows(self, flow: str) -> pd.DataFrame:
        rows = self.data[self.data['Flow Category'] == flow]
        return rows[rows['Amount'] != 0]

    def _daily_totals(self, flow: str) -> Dict[date, float]:
        rows = self._rows(flow)
        if rows.empty:
            return {}
        totals = rows.groupby(rows['Transaction Date'].dt.date)['Amount'].sum().abs()
        return {day: float(amount) for day, amount in totals.items()}

    def daily_incomes(self) -> Dict[date, float]:
        """Return total income per day, only for days with income."""
        return self._daily_totals('Income')

    def daily_expenses(self) -> Dict[date, float]:
        """Return total spending per day as positive amounts, only for days with spending."""
        return self._daily_totals('Expense')

    def category_expenses(self) -> Dict[str, float]:
        """Return total spending per category as positive amounts, largest first."""
        rows = self._rows('Expense')
        if rows.empty:
            return {}
        totals = rows.groupby('Category')['Amount'].sum().abs().sort_values(ascending=False)
        return {category: float(amount) for category, amount in totals.items()}

    def dates(self) -> List[date]:
        """Return the distinct transaction dates in ascending order."""
        if self.data.empty:
            return []
        return sorted(set(self.data['Transaction Date'].dt.date))

    def date_span(self) -> Optional[Tuple[date, date]]:
        """Return ``(first, last)`` transaction dates, or ``None`` for an empty ledger."""
        days = self.dates()
        if not days:
            return None
        return days[0], days[-1]

    def __len__(self) -> int:
        return len(self.data)
