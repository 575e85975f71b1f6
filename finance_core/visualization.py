"""Plotly figure builders for the trend report and budget comparison.

Each function accepts a frame produced elsewhere in the package and returns a
``plotly.graph_objects.Figure`` that the host UI can render.  Empty input
produces an empty figure titled "No data to display".
"""

from __future__ import annotations

from typing import Optional

import pandas as pd
import plotly.express as px
import plotly.graph_objects as go

from .periods import AXIS_FORMATS, Granularity

SERIES_STYLES = {
    "Income": {"color": "rgb(0, 150, 0)", "width": 2.5, "dash": "solid"},
    "Expenses": {"color": "rgb(200, 0, 0)", "width": 2.5, "dash": "solid"},
    "Budget": {"color": "rgb(0, 100, 180)", "width": 2.0, "dash": "dash"},
}


def _empty_figure() -> go.Figure:
    fig = go.Figure()
    fig.update_layout(title="No data to display")
    return fig


def create_trend_chart(
    frame: pd.DataFrame,
    title: Optional[str] = None,
    currency_symbol: str = "$",
) -> go.Figure:
    """Draw income, expenses and the budget line over time.

    Parameters
    ----------
    frame : pandas.DataFrame
        Output of :func:`finance_core.trends.trend_frame`, indexed by
        ``PeriodKey`` with ``Income``, ``Expenses`` and ``Budget`` columns.
    title : str, optional
        Chart title.  Defaults to ``"Financial Trends"``.
    currency_symbol : str
        Symbol shown in the y-axis title.

    Returns
    -------
    plotly.graph_objects.Figure
        Line chart with one marker per period.
    """
    if frame.empty:
        return _empty_figure()

    periods = list(frame.index)
    x_values = [period.start_date() for period in periods]
    hover = [period.label() for period in periods]

    fig = go.Figure()
    for column, style in SERIES_STYLES.items():
        if column not in frame.columns:
            continue
        fig.add_trace(
            go.Scatter(
                x=x_values,
                y=frame[column].tolist(),
                name=column,
                mode="lines+markers",
                text=hover,
                line={"color": style["color"], "width": style["width"], "dash": style["dash"]},
            )
        )

    kind = getattr(periods[0], "kind", Granularity.DAY)
    fig.update_layout(
        title=title or "Financial Trends",
        xaxis_title="Date",
        yaxis_title=f"Amount ({currency_symbol})",
        plot_bgcolor="white",
    )
    fig.update_xaxes(tickformat=AXIS_FORMATS[kind], gridcolor="rgb(220, 220, 220)")
    fig.update_yaxes(gridcolor="rgb(220, 220, 220)")
    return fig


def create_budget_comparison_chart(comparison: pd.DataFrame, title: Optional[str] = None) -> go.Figure:
    """Grouped bars of current vs suggested budget per category.

    Parameters
    ----------
    comparison : pandas.DataFrame
        Output of :func:`finance_core.budgets.budget_comparison`.
    title : str, optional
        Chart title.

    Returns
    -------
    plotly.graph_objects.Figure
        Grouped bar chart.
    """
    if comparison.empty:
        return _empty_figure()
    long = comparison.melt(
        id_vars="Category",
        value_vars=["Current", "Suggested"],
        var_name="Budget",
        value_name="Amount",
    )
    fig = px.bar(long, x="Category", y="Amount", color="Budget", barmode="group")
    fig.update_layout(
        title=title or "Current vs Suggested Budget",
        xaxis_title="Category",
        yaxis_title="Amount",
    )
    return fig
