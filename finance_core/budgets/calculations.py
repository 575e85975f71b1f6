"""Budget calculation utilities.

Totals, per-category usage against spending, and current-vs-suggested
comparison frames for the budget views.
"""

from __future__ import annotations

from datetime import date
from typing import Dict, Mapping, Optional

import pandas as pd

WARNING_PERCENT = 80.0
OVER_PERCENT = 100.0


def total_budget(budgets: Mapping[str, float]) -> float:
    """Sum an allocation.

    Example:
        >>> total_budget({'Food': 100, 'Rent': 1000})
        1100.0
    """
    return float(sum(float(v) for v in budgets.values()))


def percent_of(spent: float, budget: float) -> float:
    """Return spending as a percentage of ``budget``; 0.0 when nothing is budgeted."""
    return spent / budget * 100.0 if budget > 0 else 0.0


def usage_status(percent_used: float) -> str:
    """Classify budget usage as ``Good`` (<80%), ``Warning`` (80-100%) or ``Over``."""
    if percent_used < WARNING_PERCENT:
        return 'Good'
    if percent_used < OVER_PERCENT:
        return 'Warning'
    return 'Over'


def budget_usage(budgets: Mapping[str, float], expenses: Mapping[str, float]) -> pd.DataFrame:
    """Compare each category's budget with its spending.

    Args:
        budgets: Dictionary mapping category names to budget amounts
        expenses: Dictionary mapping category names to amounts spent (positive)

    Returns:
        DataFrame with columns: Category, Budget, Spent, Percent Used, Status.
        Only budgeted categories are included.  ``Percent Used`` is 0.0
        for zero budgets.
    """
    columns = ['Category', 'Budget', 'Spent', 'Percent Used', 'Status']
    if not budgets:
        return pd.DataFrame(columns=columns)

    rows = []
    for category, budget in budgets.items():
        budget = float(budget)
        spent = abs(float(expenses.get(category, 0.0)))
        percent_used = percent_of(spent, budget)
        rows.append({
            'Category': category,
            'Budget': budget,
            'Spent': spent,
            'Percent Used': percent_used,
            'Status': usage_status(percent_used),
        })
    return pd.DataFrame(rows, columns=columns)


def budget_comparison(current: Mapping[str, float], suggested: Mapping[str, float]) -> pd.DataFrame:
    """Line up current and suggested budgets per category.

    Returns:
        DataFrame with columns: Category, Current, Suggested, Difference
        (suggested minus current), in the order of ``current``.  Categories
        missing from ``suggested`` keep their current amount.
    """
    columns = ['Category', 'Current', 'Suggested', 'Difference']
    rows = []
    for category, amount in current.items():
        amount = float(amount)
        proposal = float(suggested.get(category, amount))
        rows.append({
            'Category': category,
            'Current': amount,
            'Suggested': proposal,
            'Difference': proposal - amount,
        })
    return pd.DataFrame(rows, columns=columns)


def daily_budget(monthly_budget: float, day: Optional[date] = None) -> float:
    """Spread a monthly budget evenly over the days of the month containing ``day``.

    Example:
        >>> daily_budget(300, date(2024, 4, 15))
        10.0
    """
    month = pd.Timestamp(day if day is not None else date.today())
    return float(monthly_budget) / month.days_in_month


def budget_summary(budgets: Mapping[str, float], expenses: Mapping[str, float]) -> Dict[str, float]:
    """Return overall budget, spending, remaining amount and percentage used."""
    budget = total_budget(budgets)
    spent = float(sum(abs(float(v)) for v in expenses.values()))
    return {
        'budget': budget,
        'spent': spent,
        'remaining': budget - spent,
        'percent_used': percent_of(spent, budget),
    }
