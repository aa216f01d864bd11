"""
Exclusion and repeat-purchase handling for quote line items.
"""

import logging
from collections import Counter
from enum import Enum
from typing import Iterable

from .config import EXCLUDED_PART_NUMBERS
from .models import QuoteLineItem

logger = logging.getLogger(__name__)


class FilterDecision(Enum):
    EXCLUDE = "exclude"
    DEDUP_SKIP = "dedup-skip"
    PROCEED = "proceed"


def describe_item(item: QuoteLineItem) -> str:
    """Operator-facing label used in the diagnostic lists."""
    return f"{item.part_number} - {item.description}"


class ItemFilter:
    """
    Decides whether a quote line reaches the catalog.

    Repeated purchases of the same part always proceed. Skipping every repeat,
    or only repeats with a quantity of one, drops units the customer paid
    for, so neither is done here; DEDUP_SKIP is never returned.
    """

    def __init__(self, excluded_part_numbers: Iterable[str] = EXCLUDED_PART_NUMBERS):
        self.excluded_part_numbers = tuple(excluded_part_numbers)

    def is_excluded(self, part_number: str) -> bool:
        return any(excluded in part_number for excluded in self.excluded_part_numbers)

    def classify(self, item: QuoteLineItem) -> FilterDecision:
        if self.is_excluded(item.part_number):
            logger.info(f"❌ EXCLUDED: {item.part_number}")
            return FilterDecision.EXCLUDE
        return FilterDecision.PROCEED


class OccurrenceTracker:
    """Counts how many times each resolved catalog part has been emitted."""

    def __init__(self):
        self._counts = Counter()

    def record(self, key: str) -> int:
        """Count one more occurrence of a part and return its ordinal."""
        self._counts[key] += 1
        return self._counts[key]

    def occurrences(self, key: str) -> int:
        return self._counts[key]

    def repeated(self):
        return {key: count for key, count in self._counts.items() if count > 1}
