from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from bistro.domain.common.ids import DishId, new_dish_id
from bistro.domain.common.money import Money


class DishKind(str, Enum):
    CHEESE_BURGER = "CheeseBurger"
    SALAD = "Salad"
    BROWNIE = "Brownie"


class Allergen(str, Enum):
    GLUTEN = "Gluten"
    NUTS = "Nuts"


@dataclass(frozen=True, eq=False)
class Dish:
    """An immutable priced menu item.

    Dishes compare by identity: two burgers built from the same ingredients
    are two separate lines on an order.
    """

    kind: DishKind
    ingredients: tuple[str, ...]
    price: Money
    allergens: frozenset[Allergen] = frozenset()
    dish_id: DishId = field(default_factory=new_dish_id)

    def __post_init__(self) -> None:
        if self.price.is_negative:
            raise ValueError("price must be >= 0")

    def show_price(self) -> Money:
        return self.price

    def show_ingredients(self) -> tuple[str, ...]:
        return self.ingredients

    def has_allergen(self, allergen: Allergen) -> bool:
        return allergen in self.allergens

    def has_gluten(self) -> bool:
        return self.has_allergen(Allergen.GLUTEN)

    def has_nuts(self) -> bool:
        return self.has_allergen(Allergen.NUTS)
