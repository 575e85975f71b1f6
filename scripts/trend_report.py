#!/usr/bin/env python3
"""Print the income/expense trend for a transactions CSV, optionally saving the chart."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Optional

import pandas as pd

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from finance_core import configure_logging, load_settings
from finance_core.budgets import daily_budget
from finance_core.ledger import TransactionLedger
from finance_core.trends import DEFAULT_RANGE, RANGE_LABELS, report_window, trend_frame
from finance_core.visualization import create_trend_chart


def main(
    csv_path: Path,
    time_range: str = DEFAULT_RANGE,
    interval: str = 'Daily',
    monthly_budget: float = 0.0,
    html_path: Optional[Path] = None,
) -> None:
    settings = load_settings()
    ledger = TransactionLedger(pd.read_csv(csv_path))
    start, end = report_window(time_range)
    frame = trend_frame(
        ledger.daily_incomes(),
        ledger.daily_expenses(),
        start,
        end,
        interval,
        monthly_budget=monthly_budget,
        daily_budget=daily_budget(monthly_budget, end),
    )
    if frame.empty:
        print("No periods in range.")
        return

    table = frame.copy()
    table.index = [period.label() for period in table.index]
    print(f"Financial Trends - {interval} ({time_range})")
    print(table.round(2).to_string())

    if html_path is not None:
        title = f"Financial Trends - {interval} ({time_range})"
        create_trend_chart(frame, title, settings.currency_symbol).write_html(str(html_path))
        print(f"\nChart written to {html_path}")


if __name__ == '__main__':
    parser = argparse.ArgumentParser(description='Show income, expenses and budget per period.')
    parser.add_argument('csv', type=Path, help='Transactions CSV with Transaction Date and Amount columns')
    parser.add_argument('--range', dest='time_range', default=DEFAULT_RANGE, choices=RANGE_LABELS)
    parser.add_argument(
        '--interval',
        default='Daily',
        choices=['Daily', 'Weekly', 'Fortnightly', 'Monthly', 'Quarterly', 'Yearly'],
    )
    parser.add_argument('--monthly-budget', type=float, default=0.0)
    parser.add_argument('--html', type=Path, default=None, help='Write the chart to this HTML file')
    parser.add_argument('--log-level', default=None)
    args = parser.parse_args()
    configure_logging(args.log_level)
    main(args.csv, args.time_range, args.interval, args.monthly_budget, args.html)
