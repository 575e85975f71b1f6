"""Top-level package for the personal finance core.

The primary modules are:

* ``periods`` – calendar period keys and date bucketing
* ``trends`` – income/expense aggregation and budget-line projection
* ``ledger`` – daily income/expense views over transaction rows
* ``budgets`` – budget storage, calculations and AI-suggested reallocation
* ``advice`` – AI-generated financial advice
* ``visualization`` – Plotly figures for the trend report and budget comparison

A host application typically builds the shared pieces once at startup::

    from finance_core import EventChannel, configure_logging, load_settings
    from finance_core.budgets import BudgetStore

    configure_logging()
    settings = load_settings()
    events = EventChannel()
    store = BudgetStore.for_user("alice", events)
"""

from . import periods  # noqa: F401  # re-exported for convenience
from . import trends  # noqa: F401  # re-exported for convenience
from . import budgets  # noqa: F401  # re-exported for convenience
from .config import AppSettings, Theme, load_settings
from .events import EventChannel, RefreshType
from .logging_setup import configure_logging, get_logger
from .periods import Granularity, PeriodKey, enumerate_periods, period_for
from .trends import aggregate_series, project_budget, trend_frame

__all__ = [
    "periods",
    "trends",
    "budgets",
    "AppSettings",
    "Theme",
    "load_settings",
    "EventChannel",
    "RefreshType",
    "configure_logging",
    "get_logger",
    "Granularity",
    "PeriodKey",
    "enumerate_periods",
    "period_for",
    "aggregate_series",
    "project_budget",
    "trend_frame",
]
