from __future__ import annotations

from dataclasses import dataclass, field

from bistro.domain.common.ids import CustomerId, new_customer_id
from bistro.domain.common.money import Money
from bistro.domain.menu.entities import Dish
from bistro.domain.order.entities import Order
from bistro.domain.order.status import InvalidTransitionError


@dataclass(eq=False)
class Customer:
    name: str
    customer_id: CustomerId = field(default_factory=new_customer_id)

    def __post_init__(self) -> None:
        if not self.name.strip():
            raise ValueError("name must be non-empty")

    def get_name(self) -> str:
        return self.name

    def add_dish_to_order(self, order: Order, dish: Dish) -> None:
        order.add_dish(dish)

    def remove_dish_from_order(self, order: Order, dish: Dish) -> None:
        order.remove_dish(dish)

    def get_order_total_price(self, order: Order) -> Money:
        return order.get_total_price()

    def validate_order(self, order: Order) -> str:
        # Subscribe first so the customer hears its own validation.
        subscribed = order.add_observer(self)
        try:
            order.validate_order()
        except InvalidTransitionError:
            if subscribed:
                order.remove_observer(self)
            raise
        return self.on_order_change(order)

    def on_order_change(self, order: Order) -> str:
        return f"Your order is now: {order.status.value}"


def create_customer(name: str) -> Customer:
    return Customer(name=name)
