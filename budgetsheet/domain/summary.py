"""Pure functions for budget aggregation.

This module contains the functional core of the engine:
- No I/O operations (no database, no console, no files)
- No side effects
- Pure data transformations
- Easy to test

Amounts are Decimals. The frequency multipliers are the literal values
4.3, 2.15 and 1.43 and are kept as exact decimals.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum

from budgetsheet.domain.models import Frequency, LineItem

WEEKS_PER_MONTH = Decimal("4.3")

MONTHLY_MULTIPLIERS: dict[Frequency, Decimal] = {
    Frequency.WEEKLY: WEEKS_PER_MONTH,
    Frequency.BIWEEKLY: Decimal("2.15"),
    Frequency.EVERY_THREE_WEEKS: Decimal("1.43"),
    Frequency.MONTHLY: Decimal("1"),
}

_CENTS = Decimal("0.01")


class BalanceSign(str, Enum):
    """Presentation sign of a balance."""

    POSITIVE = "positive"
    NEGATIVE = "negative"


@dataclass(frozen=True)
class BudgetSummary:
    """Immutable totals and balances derived from a sheet."""

    monthly_income_total: Decimal
    monthly_expense_total: Decimal
    weekly_income_total: Decimal
    weekly_expense_total: Decimal
    monthly_balance: Decimal
    weekly_balance: Decimal

    @property
    def balance_sign(self) -> BalanceSign:
        return balance_sign(self.monthly_balance)

    @property
    def weekly_balance_sign(self) -> BalanceSign:
        return balance_sign(self.weekly_balance)


def monthly_equivalent(amount: Decimal, frequency: Frequency | int) -> Decimal:
    """Convert an amount to its monthly equivalent.

    Args:
        amount: Amount per period.
        frequency: Recurrence period. Unknown codes are treated as monthly.

    Returns:
        Estimated amount per month.
    """
    try:
        multiplier = MONTHLY_MULTIPLIERS[Frequency(frequency)]
    except ValueError:
        return amount
    if multiplier == 1:
        return amount
    return amount * multiplier


def total_monthly(items: Iterable[LineItem]) -> Decimal:
    """Sum the monthly equivalents of a collection of items."""
    return sum((monthly_equivalent(item.amount, item.frequency) for item in items), Decimal("0"))


def compute_summary(income_items: Iterable[LineItem], expense_items: Iterable[LineItem]) -> BudgetSummary:
    """Compute totals and balances for a sheet.

    Args:
        income_items: Income line items.
        expense_items: Expense line items.

    Returns:
        BudgetSummary with monthly and weekly totals and balances.
    """
    monthly_income = total_monthly(income_items)
    monthly_expenses = total_monthly(expense_items)
    weekly_income = monthly_income / WEEKS_PER_MONTH
    weekly_expenses = monthly_expenses / WEEKS_PER_MONTH

    return BudgetSummary(
        monthly_income_total=monthly_income,
        monthly_expense_total=monthly_expenses,
        weekly_income_total=weekly_income,
        weekly_expense_total=weekly_expenses,
        monthly_balance=monthly_income - monthly_expenses,
        weekly_balance=weekly_income - weekly_expenses,
    )


def balance_sign(balance: Decimal) -> BalanceSign:
    """Positive for zero or more, negative otherwise."""
    return BalanceSign.POSITIVE if balance >= 0 else BalanceSign.NEGATIVE


def format_amount(amount: Decimal, currency: str | None = None) -> str:
    """Format an amount with two decimals.

    Args:
        amount: Amount to format.
        currency: Optional label appended after the number (e.g. "$CA").

    Returns:
        Formatted string (e.g. "-34.88" or "2150.00 $CA").
    """
    rounded = amount.quantize(_CENTS, rounding=ROUND_HALF_UP)
    if rounded == 0:
        rounded = abs(rounded)
    text = f"{rounded:.2f}"
    if currency:
        return f"{text} {currency}"
    return text
