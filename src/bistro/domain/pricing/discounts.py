from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING, Protocol

from bistro.domain.common.money import AmountLike, Money, to_decimal

if TYPE_CHECKING:
    from bistro.domain.order.entities import Order


class DiscountStrategy(Protocol):
    name: str

    def apply_discount(self, order: Order) -> Money: ...


class NoDiscount:
    name = "none"

    def apply_discount(self, order: Order) -> Money:
        return order.get_total_price()


class PercentageDiscount:
    """Take ``percentage`` percent off the order total.

    Values outside 0..100 are not clamped: 150 yields a negative total and
    -10 inflates it.
    """

    name = "percentage"

    def __init__(self, percentage: AmountLike) -> None:
        self.percentage = to_decimal(percentage)

    def __repr__(self) -> str:
        return f"PercentageDiscount({self.percentage})"

    def apply_discount(self, order: Order) -> Money:
        factor = Decimal(1) - self.percentage / Decimal(100)
        return order.get_total_price().scaled(factor)


class FixedAmountDiscount:
    """Subtract a flat amount; the result can drop below zero."""

    name = "fixed_amount"

    def __init__(self, amount: AmountLike) -> None:
        self.amount = to_decimal(amount)

    def __repr__(self) -> str:
        return f"FixedAmountDiscount({self.amount})"

    def apply_discount(self, order: Order) -> Money:
        total = order.get_total_price()
        return total - Money(amount=self.amount, currency=total.currency)
