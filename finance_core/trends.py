"""Income/expense trend aggregation and budget projection.

These helpers turn sparse per-day income and expense maps into dense
per-period series for the trend chart, and compute the comparable budget
value ("budget line") for each period size.
"""

from __future__ import annotations

from datetime import date, timedelta
from typing import Any, Mapping, Optional, Tuple

import pandas as pd

from .logging_setup import get_logger
from .periods import Granularity, as_date, calendar_days, period_for

_logger = get_logger("finance_core.trends")

# Average-ratio approximations used for the budget line.  Kept literal so
# charts match what users have seen before.
WEEKS_PER_MONTH = 4.33
FORTNIGHTS_PER_MONTH = 2.165

DEFAULT_RANGE = "Last 30 days"
RANGE_LABELS = (
    "Last 7 days",
    "Last 30 days",
    "Last 90 days",
    "This month",
    "Last month",
    "This year",
)


def _daily_series(values: Optional[Mapping[Any, Any]]) -> pd.Series:
    """Normalise a sparse ``date -> amount`` mapping into a float Series keyed by ``date``."""
    totals: dict = {}
    for key, amount in (values or {}).items():
        day = as_date(key)
        totals[day] = totals.get(day, 0.0) + float(amount)
    return pd.Series(totals, dtype=float)


def _empty_series(name: str) -> pd.Series:
    return pd.Series(dtype=float, name=name, index=pd.Index([], dtype=object, name="Period"))


def aggregate_series(
    daily_income: Optional[Mapping[Any, Any]],
    daily_expense: Optional[Mapping[Any, Any]],
    start: Any,
    end: Any,
    granularity: Any,
) -> Tuple[pd.Series, pd.Series]:
    """Fold per-day income and expense values into per-period totals.

    Every calendar day in ``[start, end]`` is visited, not just the days
    present in the inputs, so each period the range touches appears in the
    output even when it holds no transactions.  Missing days count as zero.

    Args:
        daily_income: Sparse mapping of date to income amount
        daily_expense: Sparse mapping of date to expense amount
        start: First day of the range (inclusive)
        end: Last day of the range (inclusive)
        granularity: Period size for the buckets

    Returns:
        Tuple of (income, expenses) Series indexed by :class:`PeriodKey`
        in ascending order.  Both are empty when ``start > end``.

    Example:
        >>> income, expenses = aggregate_series(
        ...     {date(2024, 1, 2): 100.0}, {}, date(2024, 1, 1), date(2024, 2, 29), 'Monthly')
        >>> list(income.values)
        [100.0, 0.0]
    """
    kind = Granularity.parse(granularity)
    days = calendar_days(start, end)
    if not days:
        return _empty_series("Income"), _empty_series("Expenses")

    frame = pd.DataFrame(
        {
            "Income": _daily_series(daily_income).reindex(days, fill_value=0.0),
            "Expenses": _daily_series(daily_expense).reindex(days, fill_value=0.0),
        },
        index=days,
    ).fillna(0.0)
    frame["Period"] = [period_for(day, kind) for day in days]

    # Days are ascending, so first-appearance order is chronological.
    grouped = frame.groupby("Period", sort=False)[["Income", "Expenses"]].sum()
    _logger.debug("Aggregated %d days into %d %s buckets", len(days), len(grouped), kind.value)
    return grouped["Income"].astype(float), grouped["Expenses"].astype(float)


def project_budget(monthly_budget: float, daily_budget: float, kind: Any) -> float:
    """Return the budget figure comparable to one period of the given size.

    Args:
        monthly_budget: Total monthly budget
        daily_budget: Daily budget, used as-is for daily periods
        kind: Period granularity

    Returns:
        Projected budget for a single period

    Example:
        >>> project_budget(1000, 40, Granularity.QUARTER)
        3000.0
    """
    kind = Granularity.parse(kind)
    monthly_budget = float(monthly_budget)
    if kind is Granularity.DAY:
        return float(daily_budget)
    if kind is Granularity.WEEK:
        return monthly_budget / WEEKS_PER_MONTH
    if kind is Granularity.MONTH:
        return monthly_budget
    if kind is Granularity.QUARTER:
        return monthly_budget * 3
    if kind is Granularity.YEAR:
        return monthly_budget * 12
    return monthly_budget / FORTNIGHTS_PER_MONTH


def trend_frame(
    daily_income: Optional[Mapping[Any, Any]],
    daily_expense: Optional[Mapping[Any, Any]],
    start: Any,
    end: Any,
    granularity: Any,
    monthly_budget: float = 0.0,
    daily_budget: float = 0.0,
) -> pd.DataFrame:
    """Build the income, expense and budget-line series for the trend chart.

    Returns:
        DataFrame indexed by :class:`PeriodKey` with columns
        ``Income``, ``Expenses`` and ``Budget``.  Empty when the range is empty.
    """
    income, expenses = aggregate_series(daily_income, daily_expense, start, end, granularity)
    frame = pd.DataFrame({"Income": income, "Expenses": expenses})
    frame.index.name = "Period"
    frame["Budget"] = project_budget(monthly_budget, daily_budget, granularity)
    return frame.astype(float)


def range_start(label: str, today: Optional[date] = None) -> date:
    """Resolve a report time-range label to its first day.

    Unknown labels behave like ``"Last 30 days"``.
    """
    today = as_date(today) if today is not None else date.today()
    if label == "Last 7 days":
        return today - timedelta(days=7)
    if label == "Last 90 days":
        return today - timedelta(days=90)
    if label == "This month":
        return today.replace(day=1)
    if label == "Last month":
        previous = today.replace(day=1) - timedelta(days=1)
        return previous.replace(day=1)
    if label == "This year":
        return today.replace(month=1, day=1)
    return today - timedelta(days=30)


def report_window(label: str = DEFAULT_RANGE, today: Optional[date] = None) -> Tuple[date, date]:
    """Return ``(start, end)`` for a report range, ending today."""
    end = as_date(today) if today is not None else date.today()
    return range_start(label, end), end
