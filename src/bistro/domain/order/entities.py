from __future__ import annotations

from typing import TYPE_CHECKING

from bistro.domain.common.ids import OrderId, new_order_id
from bistro.domain.common.money import Money
from bistro.domain.menu.entities import Dish
from bistro.domain.order.observers import NotificationMode, ObserverRegistry, OrderObserver
from bistro.domain.order.status import OrderStatus, TransitionPolicy
from bistro.domain.order.updater import StatusUpdater

if TYPE_CHECKING:
    from bistro.domain.customer.entities import Customer
    from bistro.domain.pricing.discounts import DiscountStrategy


class Order:
    """A customer's dishes, their lifecycle status and who to tell about it.

    ``status`` is read-only here; it only moves through ``StatusUpdater``,
    which ``validate_order`` uses as well.
    """

    def __init__(
        self,
        customer: Customer,
        order_id: OrderId | None = None,
        currency: str = "USD",
        transition_policy: TransitionPolicy = TransitionPolicy.PERMISSIVE,
        notification_mode: NotificationMode = NotificationMode.ALL,
    ) -> None:
        self.order_id = order_id or new_order_id()
        self.customer = customer
        self.currency = Money.zero(currency).currency
        self.transition_policy = transition_policy
        self.notification_mode = notification_mode
        self._dishes: list[Dish] = []
        self._status = OrderStatus.NOT_VALIDATED
        self._observers = ObserverRegistry()

    def __repr__(self) -> str:
        return (
            f"Order(order_id={self.order_id!r}, customer={self.customer.get_name()!r}, "
            f"status={self._status.value!r}, dishes={len(self._dishes)})"
        )

    @property
    def status(self) -> OrderStatus:
        return self._status

    @property
    def dishes(self) -> tuple[Dish, ...]:
        return tuple(self._dishes)

    @property
    def observers(self) -> tuple[OrderObserver, ...]:
        return tuple(self._observers)

    def add_dish(self, dish: Dish) -> None:
        if dish.price.currency != self.currency:
            raise ValueError(
                f"dish currency {dish.price.currency} does not match order currency {self.currency}"
            )
        self._dishes.append(dish)

    def remove_dish(self, dish: Dish) -> None:
        for index, existing in enumerate(self._dishes):
            if existing is dish:
                del self._dishes[index]
                return

    def get_total_price(self, discount: DiscountStrategy | None = None) -> Money:
        if discount is not None:
            return discount.apply_discount(self)
        total = Money.zero(self.currency)
        for dish in self._dishes:
            total = total + dish.show_price()
        return total

    def validate_order(self) -> list[str]:
        return StatusUpdater().update_status(self, OrderStatus.VALIDATED)

    def add_observer(self, observer: OrderObserver) -> bool:
        return self._observers.add(observer)

    def remove_observer(self, observer: OrderObserver) -> bool:
        return self._observers.remove(observer)

    def notify_observers(self) -> list[str]:
        return self._observers.notify(self, self.notification_mode)


def create_order(
    customer: Customer,
    *,
    order_id: OrderId | None = None,
    currency: str = "USD",
    transition_policy: TransitionPolicy = TransitionPolicy.PERMISSIVE,
    notification_mode: NotificationMode = NotificationMode.ALL,
) -> Order:
    return Order(
        customer=customer,
        order_id=order_id,
        currency=currency,
        transition_policy=transition_policy,
        notification_mode=notification_mode,
    )
