"""AI-suggested budget reallocation.

The AI service is asked to redistribute the current total across the existing
categories and answer with a JSON object.  Its reply is cleaned with
:func:`sanitize_response`, parsed with :func:`parse_suggestion_payload` and
merged into the current allocation with :func:`reconcile_allocation`, which
keeps exactly the current category set.

Any failure along the way (service error, malformed reply) yields the current
allocation unchanged, so the suggestion panel and "apply" action always work
with a complete allocation.
"""

from __future__ import annotations

import json
from typing import Any, Dict, Mapping

from ..ai import MalformedPayloadError, TextCompletion
from ..logging_setup import get_logger
from .storage import BudgetStore

_logger = get_logger("finance_core.budgets.suggestions")

CODE_FENCE = '```'


def sanitize_response(raw: str) -> str:
    """Strip code fences and a leading ``json`` tag from an AI reply.

    Steps, each applied only when it matches:

    1. Trim surrounding whitespace.
    2. Leading fence: drop everything through the first newline (the fence
       and its language tag).  With no newline nothing remains.
    3. Trailing fence: drop from its last occurrence onward.
    4. Leading ``json`` label: skip ahead to the first ``{`` if there is one.

    The result is not validated.

    Example:
        >>> sanitize_response('```json\\n{"a":1}\\n```')
        '{"a":1}'
    """
    result = (raw or '').strip()

    if result.startswith(CODE_FENCE):
        newline = result.find('\n')
        result = result[newline + 1:].strip() if newline != -1 else ''

    if result.endswith(CODE_FENCE):
        result = result[:result.rfind(CODE_FENCE)].strip()

    if result.startswith('json'):
        brace = result.find('{')
        if brace != -1:
            result = result[brace:].strip()

    return result


def parse_suggestion_payload(text: str) -> Dict[str, Any]:
    """Parse sanitized reply text into a category mapping.

    Raises:
        MalformedPayloadError: If the text is not a JSON object
    """
    try:
        payload = json.loads(text)
    except (TypeError, ValueError) as e:
        raise MalformedPayloadError(f"Suggestion is not valid JSON: {e}") from e
    if not isinstance(payload, dict):
        raise MalformedPayloadError(f"Suggestion is a JSON {type(payload).__name__}, expected an object")
    return payload


def reconcile_allocation(current: Mapping[str, float], payload: Any) -> Dict[str, float]:
    """Merge a suggested allocation into the current category set.

    Args:
        current: Authoritative category budgets; its keys and order are the template
        payload: Suggested ``category -> amount`` mapping, or a failure marker
            (an exception instance, ``None`` or anything that is not a mapping)

    Returns:
        A new allocation holding exactly the categories of ``current``: the
        suggested amount where the payload has that exact key, otherwise the
        current amount.  Unknown payload categories are dropped.  On a failure
        marker, or if any amount is not numeric, a copy of ``current`` is
        returned; amounts are left as they are when ``current`` itself holds
        one that is not numeric.

    Example:
        >>> reconcile_allocation({'Food': 100, 'Rent': 1000}, {'Food': 150, 'Extra': 9999})
        {'Food': 150.0, 'Rent': 1000.0}
    """
    try:
        fallback = {category: float(amount) for category, amount in current.items()}
    except (TypeError, ValueError):
        fallback = dict(current)
    if not isinstance(payload, Mapping):
        if isinstance(payload, BaseException):
            _logger.warning("Keeping current budgets; suggestion failed: %s", payload)
        return fallback

    reconciled: Dict[str, float] = {}
    try:
        for category, amount in current.items():
            value = payload[category] if category in payload else amount
            if isinstance(value, bool):
                raise TypeError(f"boolean amount for {category!r}")
            reconciled[category] = float(value)
    except (TypeError, ValueError) as e:
        _logger.warning("Keeping current budgets; suggested amounts are malformed: %s", e)
        return fallback

    dropped = [key for key in payload if key not in current]
    if dropped:
        _logger.info("Ignoring suggested categories not in the budget: %s", ', '.join(map(str, dropped)))
    return reconciled


def format_allocation(budgets: Mapping[str, float]) -> str:
    """Render an allocation as ``"Category: amount; Category: amount"``."""
    return '; '.join(f"{category}: {float(amount)}" for category, amount in budgets.items())


def build_suggestion_prompt(budgets: Mapping[str, float]) -> str:
    """Build the prompt asking for a total-preserving reallocation."""
    total = sum(float(v) for v in budgets.values())
    return (
        f"The current budget allocation is: {format_allocation(budgets)}. "
        f"The total budget is {total:.2f}. "
        "Keeping the total amount unchanged, redistribute the total budget across these categories "
        "to give a more reasonable allocation. "
        "Answer in JSON format, where each key is a category name and each value is its amount, "
        "and output nothing else."
    )


def suggest_budgets(current: Mapping[str, float], completion: TextCompletion) -> Dict[str, float]:
    """Ask the AI service for a reallocation of ``current``.

    Never raises: any failure is logged and the current allocation is
    returned as a copy.
    """
    if not current:
        return {}
    try:
        reply = completion.complete(build_suggestion_prompt(current))
        payload = parse_suggestion_payload(sanitize_response(reply))
    except Exception as e:
        _logger.warning("Budget suggestion failed, keeping current budgets: %s", e)
        return reconcile_allocation(current, e)

    suggested = reconcile_allocation(current, payload)
    suggested_total = sum(suggested.values())
    current_total = sum(float(v) for v in current.values())
    if abs(suggested_total - current_total) > 0.01:
        _logger.info("Suggested total %.2f differs from current total %.2f", suggested_total, current_total)
    return suggested


def apply_suggestions(store: BudgetStore, completion: TextCompletion) -> Dict[str, float]:
    """Replace the stored allocation with a fresh AI suggestion.

    The store is read once and written once; it is left untouched when the
    suggestion falls back to the current allocation.
    """
    current = store.load()
    suggested = suggest_budgets(current, completion)
    if suggested == current:
        return suggested
    return store.replace(suggested)
