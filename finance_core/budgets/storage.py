"""Budget storage: the authoritative category budget allocation.

A :class:`BudgetStore` keeps one user's category budgets in a JSON file and
publishes :attr:`RefreshType.BUDGETS` on its event channel after every write.
Writes always replace the whole allocation; concurrent writers race and the
last write wins.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, Mapping, Optional

from ..config import BUDGET_FILENAME, user_data_dir
from ..events import EventChannel, RefreshType
from ..file_operations import safe_filename, write_json
from ..logging_setup import get_logger

_logger = get_logger("finance_core.budgets.storage")


class BudgetStore:
    """Handles budget file storage operations."""

    def __init__(self, path: Path, events: Optional[EventChannel] = None):
        """Initialize budget storage.

        Args:
            path: JSON file holding the allocation (created on first write)
            events: Channel notified after each write.  A private channel is
                used when omitted.
        """
        self.path = Path(path)
        self.events = events if events is not None else EventChannel()

    @classmethod
    def for_user(
        cls,
        username: str,
        events: Optional[EventChannel] = None,
        base_dir: Optional[Path] = None,
    ) -> 'BudgetStore':
        """Open the store for ``username`` under the configured data directory."""
        directory = user_data_dir(safe_filename(username, default='default'), base_dir)
        return cls(directory / BUDGET_FILENAME, events)

    def load(self) -> Dict[str, float]:
        """Load the current allocation.

        Returns:
            Ordered mapping of category to budget amount.  A missing or
            corrupt file yields an empty allocation; unreadable entries are
            skipped.
        """
        if not self.path.exists():
            return {}

        try:
            with self.path.open('r', encoding='utf-8') as handle:
                data = json.load(handle)
        except (json.JSONDecodeError, OSError) as e:
            _logger.warning("Could not load budgets from %s: %s", self.path, e)
            return {}

        entries = data.get('budgets') if isinstance(data, dict) else None
        if not isinstance(entries, dict):
            return {}

        budgets: Dict[str, float] = {}
        for category, amount in entries.items():
            if amount is None:
                continue
            try:
                budgets[str(category)] = float(amount)
            except (ValueError, TypeError):
                _logger.warning("Skipping budget %r with non-numeric amount %r", category, amount)
        return budgets

    def replace(self, budgets: Mapping[str, float]) -> Dict[str, float]:
        """Persist ``budgets`` as the complete allocation.

        Raises:
            ValueError: If a category name is empty
            OSError: If the file cannot be written
        """
        normalized: Dict[str, float] = {}
        for category, amount in budgets.items():
            if not category or not str(category).strip():
                raise ValueError("Budget category name cannot be empty")
            normalized[str(category)] = float(amount)

        payload = {
            'budgets': normalized,
            'saved_at': datetime.now(timezone.utc).isoformat(),
            'version': 1,
        }
        try:
            write_json(self.path, payload)
        except OSError as e:
            raise OSError(f"Failed to save budgets to {self.path}: {e}") from e

        _logger.info("Saved %d budget categories to %s", len(normalized), self.path)
        self.events.publish(RefreshType.BUDGETS)
        return normalized

    def update_category(self, category: str, amount: float) -> Dict[str, float]:
        """Add or change one category's budget and persist the full allocation."""
        if not category or not category.strip():
            raise ValueError("Budget category name cannot be empty")
        budgets = self.load()
        budgets[category] = float(amount)
        return self.replace(budgets)

    def delete_category(self, category: str) -> bool:
        """Remove a category.  Returns ``False`` when it did not exist."""
        budgets = self.load()
        if category not in budgets:
            return False
        del budgets[category]
        self.replace(budgets)
        return True

    def total(self) -> float:
        return float(sum(self.load().values()))
