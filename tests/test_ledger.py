from datetime import date

import pandas as pd

from finance_core.ledger import TransactionLedger


def sample_df():
    return pd.DataFrame([
        {'Transaction Date': '2024-01-01', 'Description': 'Rent Apts', 'Amount': -1500, 'Category': 'Housing'},
        {'Transaction Date': '2024-01-02', 'Description': 'Salary', 'Amount': 5000, 'Category': 'Income'},
        {'Transaction Date': '2024-01-02', 'Description': 'Bonus', 'Amount': 250, 'Category': 'Income'},
        {'Transaction Date': '2024-01-03', 'Description': 'Transfer', 'Amount': -200, 'Category': 'Transfer'},
        {'Transaction Date': '2024-01-05 14:30', 'Description': 'Groceries', 'Amount': '-42.50', 'Category': 'Food'},
        {'Transaction Date': '2024-01-05', 'Description': 'Cafe', 'Amount': -7.5, 'Category': None},
        {'Transaction Date': 'not a date', 'Description': 'Broken', 'Amount': -1, 'Category': 'Food'},
    ])


def test_daily_incomes_sum_per_day():
    ledger = TransactionLedger(sample_df())
    assert ledger.daily_incomes() == {date(2024, 1, 2): 5250.0}


def test_daily_expenses_are_positive_and_exclude_transfers():
    ledger = TransactionLedger(sample_df())
    assert ledger.daily_expenses() == {date(2024, 1, 1): 1500.0, date(2024, 1, 5): 50.0}


def test_category_expenses_largest_first():
    ledger = TransactionLedger(sample_df())
    expenses = ledger.category_expenses()
    assert list(expenses) == ['Housing', 'Food', 'Uncategorized']
    assert expenses['Food'] == 42.5


def test_dates_and_span_skip_unparseable_rows():
    ledger = TransactionLedger(sample_df())
    assert len(ledger) == 6
    assert ledger.dates() == [date(2024, 1, 1), date(2024, 1, 2), date(2024, 1, 3), date(2024, 1, 5)]
    assert ledger.date_span() == (date(2024, 1, 1), date(2024, 1, 5))


def test_empty_ledger():
    ledger = TransactionLedger()
    assert ledger.daily_incomes() == {}
    assert ledger.daily_expenses() == {}
    assert ledger.category_expenses() == {}
    assert ledger.date_span() is None


def test_from_records():
    ledger = TransactionLedger.from_records([
        {'Transaction Date': '2024-03-01', 'Amount': 10},
    ])
    assert ledger.daily_incomes() == {date(2024, 3, 1): 10.0}
