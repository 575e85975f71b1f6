#!/usr/bin/env python3
"""Show (and optionally apply) an AI-suggested reallocation of a user's budget."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from finance_core import EventChannel, configure_logging
from finance_core.ai import OpenAICompletion
from finance_core.budgets import BudgetStore, apply_suggestions, budget_comparison, suggest_budgets, total_budget


def main(username: str, apply: bool = False) -> None:
    store = BudgetStore.for_user(username, EventChannel())
    current = store.load()
    if not current:
        print(f"No budgets saved for {username}.")
        return

    completion = OpenAICompletion()
    suggested = apply_suggestions(store, completion) if apply else suggest_budgets(current, completion)

    comparison = budget_comparison(current, suggested)
    print(comparison.round(2).to_string(index=False))
    print(f"\nTotal: {total_budget(current):.2f} -> {total_budget(suggested):.2f}")
    if apply:
        print("Suggestions applied." if suggested != current else "Budgets unchanged.")


if __name__ == '__main__':
    parser = argparse.ArgumentParser(description='Suggest a budget reallocation.')
    parser.add_argument('username')
    parser.add_argument('--apply', action='store_true', help='Save the suggestion as the new budget')
    parser.add_argument('--log-level', default=None)
    args = parser.parse_args()
    configure_logging(args.log_level)
    main(args.username, apply=args.apply)
