"""Budget-specific utilities and business logic.

This module provides all budget-related functionality including:
- Budget storage (the authoritative allocation)
- Budget calculations (totals, usage, comparisons)
- AI-suggested reallocation (sanitizing, parsing and reconciling replies)
"""

from .storage import BudgetStore
from .calculations import (
    total_budget,
    percent_of,
    usage_status,
    budget_usage,
    budget_comparison,
    daily_budget,
    budget_summary,
)
from .suggestions import (
    sanitize_response,
    parse_suggestion_payload,
    reconcile_allocation,
    format_allocation,
    build_suggestion_prompt,
    suggest_budgets,
    apply_suggestions,
)

__all__ = [
    # Storage
    'BudgetStore',
    # Calculations
    'total_budget',
    'percent_of',
    'usage_status',
    'budget_usage',
    'budget_comparison',
    'daily_budget',
    'budget_summary',
    # Suggestions
    'sanitize_response',
    'parse_suggestion_payload',
    'reconcile_allocation',
    'format_allocation',
    'build_suggestion_prompt',
    'suggest_budgets',
    'apply_suggestions',
]
