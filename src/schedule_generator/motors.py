"""
Motor detection and sequential motor labels.
"""

import re
import logging
from dataclasses import replace
from fractions import Fraction
from typing import Any, Iterable, Optional

from .config import MOTOR_KEYWORDS
from .electrical import to_decimal
from .models import ScheduleLineItem

logger = logging.getLogger(__name__)

# "1/2", "3/4 HP", "1-1/2", "1 1/2"
FRACTION_HP_PATTERN = re.compile(r'^(?:(\d+)[\s-]+)?(\d+)\s*/\s*(\d+)$')


def parse_horsepower(value: Any) -> Optional[Fraction]:
    """Parse a horsepower cell, including fractional ratings; None for blanks and junk."""
    if value is None or isinstance(value, bool):
        return None

    text = re.sub(r'\s*HP$', '', str(value).strip().upper())
    match = FRACTION_HP_PATTERN.match(text)
    if match:
        whole, numerator, denominator = match.groups()
        if int(denominator) == 0:
            return None
        return int(whole or 0) + Fraction(int(numerator), int(denominator))

    number = to_decimal(text)
    if number is None:
        return None
    return Fraction(number)


def is_motor(description: str, hp: Any, keywords: Iterable[str] = MOTOR_KEYWORDS) -> bool:
    """A row is a motor when it says so or carries a horsepower rating."""
    description_upper = (description or '').upper()
    if any(keyword.upper() in description_upper for keyword in keywords):
        return True
    return parse_horsepower(hp) is not None


class MotorCounter:
    """Hands out M-1, M-2, ... in the order rows are emitted."""

    def __init__(self, keywords: Iterable[str] = MOTOR_KEYWORDS):
        self.keywords = tuple(keywords)
        self.count = 0

    def label(self, row: ScheduleLineItem) -> ScheduleLineItem:
        """Return the row with its motor label attached, if it is a motor."""
        if not is_motor(row.description, row.electrical.hp, self.keywords):
            return row

        self.count += 1
        motor_label = f"M-{self.count}"
        logger.debug(f"{row.item_number} {row.part_number} → {motor_label}")

        # Motor sub-component rows carry their motor number in the # column
        if row.is_sub_component:
            return replace(row, motor_label=motor_label, quantity=self.count)
        return replace(row, motor_label=motor_label)
