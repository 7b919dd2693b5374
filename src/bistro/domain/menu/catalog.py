from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable

from bistro.domain.common.money import Money
from bistro.domain.menu.entities import Allergen, Dish, DishKind


class UnknownDishKindError(Exception):
    def __init__(self, kind: str) -> None:
        super().__init__(f"unknown dish kind: {kind}")
        self.kind = kind


@dataclass(frozen=True)
class DishVariant:
    """Fixed price and allergen declaration shared by every dish of a kind."""

    kind: DishKind
    price: Decimal
    allergens: frozenset[Allergen] = frozenset()


DEFAULT_VARIANTS: tuple[DishVariant, ...] = (
    DishVariant(
        kind=DishKind.CHEESE_BURGER,
        price=Decimal(10),
        allergens=frozenset({Allergen.GLUTEN}),
    ),
    DishVariant(kind=DishKind.SALAD, price=Decimal(8)),
    DishVariant(
        kind=DishKind.BROWNIE,
        price=Decimal(6),
        allergens=frozenset({Allergen.GLUTEN, Allergen.NUTS}),
    ),
)


class DishCatalog:
    def __init__(
        self,
        variants: Iterable[DishVariant] = DEFAULT_VARIANTS,
        currency: str = "USD",
    ) -> None:
        self._currency = Money.zero(currency).currency
        self._variants: dict[str, DishVariant] = {}
        for variant in variants:
            self.register(variant)

    @property
    def currency(self) -> str:
        return self._currency

    def register(self, variant: DishVariant) -> None:
        if variant.price < 0:
            raise ValueError("variant price must be >= 0")
        self._variants[variant.kind.value] = variant

    def with_currency(self, currency: str) -> DishCatalog:
        return DishCatalog(variants=self._variants.values(), currency=currency)

    def kinds(self) -> list[DishKind]:
        return [variant.kind for variant in self._variants.values()]

    def variant(self, kind: str | DishKind) -> DishVariant:
        key = kind.value if isinstance(kind, DishKind) else kind
        variant = self._variants.get(key)
        if variant is None:
            raise UnknownDishKindError(str(key))
        return variant

    def create_dish(self, kind: str | DishKind, ingredients: Iterable[str]) -> Dish:
        variant = self.variant(kind)
        return Dish(
            kind=variant.kind,
            ingredients=tuple(ingredients),
            price=Money(amount=variant.price, currency=self._currency),
            allergens=variant.allergens,
        )


_DEFAULT_CATALOG = DishCatalog()


def create_dish(
    kind: str | DishKind,
    ingredients: Iterable[str],
    currency: str | None = None,
    catalog: DishCatalog | None = None,
) -> Dish:
    """Build a dish from ``catalog`` (the default menu when omitted).

    ``currency`` reprices the catalog's variants in another currency so the
    dish can join an order opened in that currency.
    """
    source = catalog if catalog is not None else _DEFAULT_CATALOG
    if currency is not None and currency != source.currency:
        source = source.with_currency(currency)
    return source.create_dish(kind, ingredients)
