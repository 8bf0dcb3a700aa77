"""Pure input normalization for line item fields.

Malformed input is never rejected: amounts that do not parse become 0 and
frequencies outside the known codes become Monthly.
"""

import re
from decimal import Decimal, InvalidOperation
from typing import Any

from budgetsheet.domain.models import Frequency

ZERO = Decimal("0")

# Largest accepted order of magnitude; totals stay well inside the default
# 28-digit decimal context after multiplying and rounding to cents.
MAX_AMOUNT_EXPONENT = 15

# Leading numeric prefix, e.g. "12.50 $CA" -> "12.50"
_NUMBER_PREFIX = re.compile(r"^\s*([+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?)")
_INTEGER_PREFIX = re.compile(r"^\s*([+-]?\d+)")

_FREQUENCY_ALIASES = {
    "weekly": Frequency.WEEKLY,
    "week": Frequency.WEEKLY,
    "biweekly": Frequency.BIWEEKLY,
    "every-2-weeks": Frequency.BIWEEKLY,
    "every_three_weeks": Frequency.EVERY_THREE_WEEKS,
    "every-3-weeks": Frequency.EVERY_THREE_WEEKS,
    "triweekly": Frequency.EVERY_THREE_WEEKS,
    "monthly": Frequency.MONTHLY,
    "month": Frequency.MONTHLY,
}


def parse_amount(value: Any) -> Decimal:
    """Normalize a raw amount to a non-negative decimal.

    Strings are read up to the end of their leading number, so "12.5abc"
    gives 12.5. Anything without a usable number, negative values,
    non-finite values and amounts of 10**16 or more all give 0.

    Args:
        value: Raw amount (str, int, float, Decimal or None).

    Returns:
        Non-negative Decimal amount.
    """
    if value is None or isinstance(value, bool):
        return ZERO

    if isinstance(value, Decimal):
        amount = value
    elif isinstance(value, int):
        amount = Decimal(value)
    elif isinstance(value, float):
        amount = Decimal(repr(value)) if value == value else ZERO
    elif isinstance(value, str):
        match = _NUMBER_PREFIX.match(value)
        if not match:
            return ZERO
        try:
            amount = Decimal(match.group(1))
        except InvalidOperation:
            return ZERO
    else:
        return ZERO

    if not amount.is_finite() or amount < 0 or amount.adjusted() > MAX_AMOUNT_EXPONENT:
        return ZERO
    return amount


def parse_frequency(value: Any) -> Frequency:
    """Normalize a raw frequency code.

    Accepts Frequency members, integer codes, numeric strings ("1".."4") and
    names such as "weekly" or "every-3-weeks".

    Args:
        value: Raw frequency.

    Returns:
        Matching Frequency, or Frequency.MONTHLY when unrecognized.
    """
    if isinstance(value, Frequency):
        return value

    code: int | None = None
    if isinstance(value, bool) or value is None:
        code = None
    elif isinstance(value, int):
        code = value
    elif isinstance(value, float) and value.is_integer():
        code = int(value)
    elif isinstance(value, str):
        alias = _FREQUENCY_ALIASES.get(value.strip().lower())
        if alias is not None:
            return alias
        match = _INTEGER_PREFIX.match(value)
        if match:
            code = int(match.group(1))

    if code is None:
        return Frequency.MONTHLY
    try:
        return Frequency(code)
    except ValueError:
        return Frequency.MONTHLY
