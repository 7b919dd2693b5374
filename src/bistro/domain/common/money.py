from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Union

AmountLike = Union[Decimal, int, float, str]


def to_decimal(value: AmountLike) -> Decimal:
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(str(value))
    return Decimal(value)


@dataclass(frozen=True)
class Money:
    """Signed amount in a single currency.

    Amounts may go below zero: discount strategies are allowed to produce
    negative totals and callers decide what to do with them.
    """

    amount: Decimal
    currency: str

    def __post_init__(self) -> None:
        object.__setattr__(self, "amount", to_decimal(self.amount))
        if len(self.currency) != 3 or not self.currency.isalpha() or not self.currency.isupper():
            raise ValueError("currency must be a 3-letter uppercase code")

    @classmethod
    def zero(cls, currency: str) -> Money:
        return cls(amount=Decimal(0), currency=currency)

    @property
    def is_negative(self) -> bool:
        return self.amount < 0

    def _check_currency(self, other: Money) -> None:
        if other.currency != self.currency:
            raise ValueError(
                f"currency mismatch: {self.currency} vs {other.currency}"
            )

    def __add__(self, other: Money) -> Money:
        if not isinstance(other, Money):
            return NotImplemented
        self._check_currency(other)
        return Money(amount=self.amount + other.amount, currency=self.currency)

    def __sub__(self, other: Money) -> Money:
        if not isinstance(other, Money):
            return NotImplemented
        self._check_currency(other)
        return Money(amount=self.amount - other.amount, currency=self.currency)

    def scaled(self, factor: AmountLike) -> Money:
        return Money(amount=self.amount * to_decimal(factor), currency=self.currency)

    def format(self) -> str:
        # 10 USD -> "$10", 14.40 USD -> "$14.4", -7 USD -> "-$7", 8 EUR -> "EUR 8"
        normalized = self.amount.normalize()
        if normalized == normalized.to_integral_value():
            normalized = normalized.quantize(Decimal(1))
        sign = "-" if normalized < 0 else ""
        symbol = "$" if self.currency == "USD" else f"{self.currency} "
        return f"{sign}{symbol}{abs(normalized)}"
