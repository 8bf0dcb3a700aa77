"""Tests for budgetsheet.domain.summary pure functions."""

from decimal import Decimal

import pytest

from budgetsheet.domain.models import Frequency, LineItem
from budgetsheet.domain.normalize import parse_amount
from budgetsheet.domain.summary import (
    BalanceSign,
    balance_sign,
    compute_summary,
    format_amount,
    monthly_equivalent,
)


class TestMonthlyEquivalent:
    """Tests for monthly_equivalent."""

    @pytest.mark.parametrize("amount", ["0", "1", "19.99", "2000", "123456.78"])
    def test_monthly_is_identity(self, amount: str) -> None:
        """Monthly amounts are already monthly."""
        assert monthly_equivalent(Decimal(amount), Frequency.MONTHLY) == Decimal(amount)

    def test_weekly_uses_4_3(self) -> None:
        """Weekly amounts are multiplied by exactly 4.3."""
        assert monthly_equivalent(Decimal("500"), Frequency.WEEKLY) == Decimal("2150")
        assert monthly_equivalent(Decimal("0.10"), Frequency.WEEKLY) == Decimal("0.43")

    def test_biweekly_uses_2_15(self) -> None:
        """Biweekly amounts are multiplied by exactly 2.15."""
        assert monthly_equivalent(Decimal("1000"), Frequency.BIWEEKLY) == Decimal("2150")
        assert monthly_equivalent(Decimal("1"), Frequency.BIWEEKLY) == Decimal("2.15")

    def test_every_three_weeks_uses_1_43(self) -> None:
        """Every-3-weeks amounts are multiplied by exactly 1.43, not 52/36."""
        assert monthly_equivalent(Decimal("100"), Frequency.EVERY_THREE_WEEKS) == Decimal("143")
        assert monthly_equivalent(Decimal("1"), Frequency.EVERY_THREE_WEEKS) == Decimal("1.43")

    def test_integer_codes_accepted(self) -> None:
        """Plain integer codes behave like the enum."""
        assert monthly_equivalent(Decimal("10"), 1) == Decimal("43")

    @pytest.mark.parametrize("code", [0, 5, 99, -1])
    def test_unknown_code_is_identity(self, code: int) -> None:
        """Unknown codes fall back to monthly."""
        assert monthly_equivalent(Decimal("42.5"), code) == Decimal("42.5")


class TestComputeSummary:
    """Tests for compute_summary."""

    def test_empty_sheet_is_zero_and_positive(self) -> None:
        """No items gives zero everywhere and a positive sign."""
        summary = compute_summary([], [])

        assert summary.monthly_income_total == 0
        assert summary.monthly_expense_total == 0
        assert summary.weekly_income_total == 0
        assert summary.weekly_expense_total == 0
        assert summary.monthly_balance == 0
        assert summary.weekly_balance == 0
        assert summary.balance_sign is BalanceSign.POSITIVE
        assert summary.weekly_balance_sign is BalanceSign.POSITIVE

    def test_salary_and_weekly_rent(self) -> None:
        """Monthly salary against weekly rent ends slightly negative."""
        income = [LineItem("Salary", Decimal("2000"), Frequency.MONTHLY)]
        expenses = [LineItem("Rent", Decimal("500"), Frequency.WEEKLY)]

        summary = compute_summary(income, expenses)

        assert summary.monthly_income_total == Decimal("2000")
        assert summary.monthly_expense_total == Decimal("2150")
        assert summary.monthly_balance == Decimal("-150")
        assert format_amount(summary.weekly_balance) == "-34.88"
        assert summary.balance_sign is BalanceSign.NEGATIVE
        assert summary.weekly_balance_sign is BalanceSign.NEGATIVE

    def test_weekly_totals_divide_by_4_3(self) -> None:
        """Weekly totals are the monthly totals over 4.3."""
        income = [LineItem("Pay", Decimal("430"), Frequency.MONTHLY)]
        expenses = [LineItem("Food", Decimal("50"), Frequency.WEEKLY)]

        summary = compute_summary(income, expenses)

        assert summary.weekly_income_total == Decimal("100")
        assert summary.weekly_expense_total == Decimal("50")
        assert summary.weekly_balance == Decimal("50")

    def test_order_does_not_matter(self) -> None:
        """Reordering items within a collection gives the same summary."""
        income = [
            LineItem("Pay", Decimal("1234.56"), Frequency.BIWEEKLY),
            LineItem("Tips", Decimal("80"), Frequency.WEEKLY),
            LineItem("Gift", Decimal("25"), Frequency.MONTHLY),
        ]
        expenses = [
            LineItem("Rent", Decimal("900"), Frequency.MONTHLY),
            LineItem("Bus", Decimal("31.50"), Frequency.EVERY_THREE_WEEKS),
        ]

        forward = compute_summary(income, expenses)
        backward = compute_summary(list(reversed(income)), list(reversed(expenses)))

        assert forward == backward

    def test_zero_balance_is_positive(self) -> None:
        """A balance of exactly zero counts as positive."""
        items = [LineItem("Same", Decimal("100"), Frequency.WEEKLY)]

        summary = compute_summary(items, items)

        assert summary.monthly_balance == 0
        assert summary.balance_sign is BalanceSign.POSITIVE

    def test_inputs_are_not_modified(self) -> None:
        """The computation does not touch its inputs."""
        income = [LineItem("Pay", Decimal("10"), Frequency.WEEKLY)]

        compute_summary(income, [])

        assert income == [LineItem("Pay", Decimal("10"), Frequency.WEEKLY)]


class TestFormatting:
    """Tests for balance_sign and format_amount."""

    def test_balance_sign(self) -> None:
        assert balance_sign(Decimal("0")) is BalanceSign.POSITIVE
        assert balance_sign(Decimal("0.01")) is BalanceSign.POSITIVE
        assert balance_sign(Decimal("-0.01")) is BalanceSign.NEGATIVE

    def test_two_decimals(self) -> None:
        """Amounts are shown with two decimals, rounding half up."""
        assert format_amount(Decimal("2150.0")) == "2150.00"
        assert format_amount(Decimal("0.125")) == "0.13"
        assert format_amount(Decimal("-34.8837")) == "-34.88"

    def test_currency_label(self) -> None:
        assert format_amount(Decimal("12"), "$CA") == "12.00 $CA"

    def test_tiny_negative_shows_as_zero(self) -> None:
        """Values that round to zero do not show a minus sign."""
        assert format_amount(Decimal("-0.001")) == "0.00"


class TestLargeAmounts:
    """Tests for the biggest amounts the normalizer lets through."""

    def test_largest_weekly_amount(self) -> None:
        amount = parse_amount("9999999999999999.99")

        summary = compute_summary([LineItem("Lottery", amount, Frequency.WEEKLY)], [])

        assert summary.monthly_income_total == Decimal("42999999999999999.957")
        assert summary.weekly_income_total == amount
        assert format_amount(summary.monthly_balance, "$CA") == "42999999999999999.96 $CA"

    def test_rejected_amount_formats_as_zero(self) -> None:
        summary = compute_summary([], [LineItem("x", parse_amount("9e999999"), Frequency.WEEKLY)])

        assert format_amount(summary.monthly_balance) == "0.00"
        assert format_amount(parse_amount("1e30")) == "0.00"
