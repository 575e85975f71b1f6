"""Calendar period keys and date bucketing.

A :class:`PeriodKey` names one calendar bucket (a day, ISO week, fortnight,
month, quarter or year).  :func:`period_for` maps a date onto its bucket and
:func:`enumerate_periods` lists every bucket a date range touches, which is
what the trend aggregation in :mod:`finance_core.trends` iterates over.

Fortnights are built from ISO week numbers: weeks 1-2 form fortnight 0,
weeks 3-4 fortnight 1 and so on.  No adjustment is made when a 53-week ISO
year rolls into the next one, so the last fortnight of such a year holds a
single week.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from enum import Enum
from typing import Any, List

import pandas as pd


class Granularity(str, Enum):
    """Bucket size used when aggregating a time series."""

    DAY = "day"
    WEEK = "week"
    FORTNIGHT = "fortnight"
    MONTH = "month"
    QUARTER = "quarter"
    YEAR = "year"

    @classmethod
    def parse(cls, value: Any) -> "Granularity":
        """Resolve a granularity from an enum, a name or a report interval label.

        Unknown labels fall back to :attr:`DAY`, matching the report screen
        which charts daily values when the interval is not recognised.
        """
        if isinstance(value, cls):
            return value
        text = str(value or "").strip().lower()
        return _INTERVAL_LABELS.get(text, cls.DAY)


_INTERVAL_LABELS = {
    "day": Granularity.DAY,
    "daily": Granularity.DAY,
    "week": Granularity.WEEK,
    "weekly": Granularity.WEEK,
    "fortnight": Granularity.FORTNIGHT,
    "fortnightly": Granularity.FORTNIGHT,
    "month": Granularity.MONTH,
    "monthly": Granularity.MONTH,
    "quarter": Granularity.QUARTER,
    "quarterly": Granularity.QUARTER,
    "year": Granularity.YEAR,
    "yearly": Granularity.YEAR,
}

# strftime patterns used for chart axis labels
AXIS_FORMATS = {
    Granularity.DAY: "%b %d",
    Granularity.WEEK: "%b %d",
    Granularity.FORTNIGHT: "%b %d",
    Granularity.MONTH: "%b %Y",
    Granularity.QUARTER: "%Y",
    Granularity.YEAR: "%Y",
}


@dataclass(frozen=True, order=True)
class PeriodKey:
    """A normalized calendar bucket.

    Ordering compares ``(kind, year, index)``, so keys of the same kind sort
    chronologically.  Keys of different kinds are never mixed in one series.
    """

    kind: Granularity
    year: int
    index: int = field(default=0)

    def start_date(self) -> date:
        """Return the first calendar day covered by the bucket."""
        if self.kind is Granularity.DAY:
            return date(self.year, 1, 1) + timedelta(days=self.index - 1)
        if self.kind is Granularity.WEEK:
            return date.fromisocalendar(self.year, self.index, 1)
        if self.kind is Granularity.FORTNIGHT:
            return date.fromisocalendar(self.year, self.representative_week, 1)
        if self.kind is Granularity.MONTH:
            return date(self.year, self.index, 1)
        if self.kind is Granularity.QUARTER:
            return date(self.year, 3 * (self.index - 1) + 1, 1)
        return date(self.year, 1, 1)

    @property
    def representative_week(self) -> int:
        """ISO week that anchors a fortnight (always the odd week of the pair)."""
        return self.index * 2 + 1

    def label(self) -> str:
        if self.kind is Granularity.DAY:
            return self.start_date().isoformat()
        if self.kind is Granularity.WEEK:
            return f"{self.year}-W{self.index:02d}"
        if self.kind is Granularity.FORTNIGHT:
            return f"{self.year}-W{self.representative_week:02d}"
        if self.kind is Granularity.MONTH:
            return f"{self.year}-{self.index:02d}"
        if self.kind is Granularity.QUARTER:
            return f"{self.year}-Q{self.index}"
        return str(self.year)

    def axis_label(self) -> str:
        return self.start_date().strftime(AXIS_FORMATS[self.kind])

    def __str__(self) -> str:
        return self.label()


def as_date(value: Any) -> date:
    """Coerce ``date``/``datetime``/``Timestamp``/ISO string values to a ``date``."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return pd.Timestamp(value).date()


def period_for(day: Any, granularity: Any) -> PeriodKey:
    """Return the bucket that contains ``day`` for the given granularity.

    Args:
        day: A calendar date (``datetime`` and ``Timestamp`` values are
            truncated to their date)
        granularity: A :class:`Granularity` or anything :meth:`Granularity.parse`
            accepts

    Returns:
        The enclosing :class:`PeriodKey`

    Example:
        >>> period_for(date(2024, 1, 9), Granularity.FORTNIGHT)
        PeriodKey(kind=<Granularity.FORTNIGHT: 'fortnight'>, year=2024, index=0)
    """
    day = as_date(day)
    kind = Granularity.parse(granularity)

    if kind is Granularity.DAY:
        return PeriodKey(kind, day.year, day.timetuple().tm_yday)
    if kind in (Granularity.WEEK, Granularity.FORTNIGHT):
        iso_year, iso_week, _ = day.isocalendar()
        if kind is Granularity.WEEK:
            return PeriodKey(kind, iso_year, iso_week)
        return PeriodKey(kind, iso_year, (iso_week - 1) // 2)
    if kind is Granularity.MONTH:
        return PeriodKey(kind, day.year, day.month)
    if kind is Granularity.QUARTER:
        return PeriodKey(kind, day.year, (day.month - 1) // 3 + 1)
    return PeriodKey(kind, day.year, 0)


def calendar_days(start: Any, end: Any) -> List[date]:
    """List every calendar day from ``start`` to ``end`` inclusive."""
    start, end = as_date(start), as_date(end)
    if start > end:
        return []
    return [ts.date() for ts in pd.date_range(start, end, freq="D")]


def enumerate_periods(start: Any, end: Any, granularity: Any) -> List[PeriodKey]:
    """List every bucket touched by the inclusive range ``[start, end]``.

    The result is ascending and contains each bucket once, including buckets
    for which no data exists.  A reversed range yields an empty list.
    """
    kind = Granularity.parse(granularity)
    periods: List[PeriodKey] = []
    for day in calendar_days(start, end):
        key = period_for(day, kind)
        if not periods or periods[-1] != key:
            periods.append(key)
    return periods
