"""Financial advice generated by the AI service from category spending."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Mapping, Optional

from .ai import TextCompletion
from .events import EventChannel, RefreshType
from .ledger import TransactionLedger
from .logging_setup import get_logger

_logger = get_logger("finance_core.advice")

DEFAULT_ADVICE = ""

SEASONAL_EVENTS = (
    "New Year's Day (January 1); Spring Festival (first to third day of the first lunar month); "
    "Ching Ming Festival (April 4); Labor Day (May 1); Dragon Boat Festival; "
    "Mid-Autumn Festival; National Day (October 1 to 3); "
    "11.11 and 6.18 shopping festivals, back-to-school season, Father's and Mother's Day."
)


@dataclass(frozen=True)
class Advice:
    text: str = DEFAULT_ADVICE
    generated_at: datetime = field(default_factory=datetime.now)

    def formatted_time(self) -> str:
        return self.generated_at.strftime("%b %d, %Y %H:%M")


def build_advice_prompt(category_expenses: Mapping[str, float], start: date, end: date) -> str:
    """Build the coaching prompt from spending per category over ``[start, end]``."""
    data_block = "\n".join(f"{category}: {float(amount):.2f}" for category, amount in category_expenses.items())
    return "\n".join([
        "You are a bilingual personal-finance coach for a Chinese user.",
        f"Data range: {start.isoformat()} to {end.isoformat()}",
        "Expenses by category:",
        data_block,
        "",
        "1) Carefully check for seasonal spending spikes common in China, and point them out.",
        f"   e.g. {SEASONAL_EVENTS}",
        "2) If any category looks abnormally high for the season, point it out and give 1-2 actionable tips.",
        "3) Give 3-4 concise sentences in total. Except the advice, do not output anything else, "
        "and write plain text without any markdown symbols like **.",
    ])


class AdviceService:
    """Keeps the latest advice and regenerates it on demand.

    The previous advice stays in place whenever regeneration is not possible,
    so views always have something to show.
    """

    def __init__(
        self,
        completion: TextCompletion,
        events: Optional[EventChannel] = None,
        initial: Optional[Advice] = None,
    ):
        self.completion = completion
        self.events = events if events is not None else EventChannel()
        self._advice = initial or Advice()

    @property
    def advice(self) -> Advice:
        return self._advice

    def set_advice(self, text: str) -> Advice:
        self._advice = Advice(text=text)
        self.events.publish(RefreshType.ADVICE)
        return self._advice

    def regenerate(self, ledger: TransactionLedger) -> Advice:
        """Ask for fresh advice based on ``ledger``.

        Returns:
            The new advice, or the previous advice when the ledger is empty or
            the AI service fails.  Never raises.
        """
        span = ledger.date_span()
        if span is None:
            _logger.info("No transactions; keeping existing advice")
            return self._advice

        prompt = build_advice_prompt(ledger.category_expenses(), *span)
        try:
            text = self.completion.complete(prompt).strip()
        except Exception as e:
            _logger.warning("Failed to generate advice, keeping previous advice: %s", e)
            return self._advice

        if not text:
            _logger.warning("AI service returned empty advice; keeping previous advice")
            return self._advice
        return self.set_advice(text)
