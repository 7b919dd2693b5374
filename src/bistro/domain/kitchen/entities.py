from __future__ import annotations

from bistro.domain.order.entities import Order
from bistro.domain.order.status import OrderStatus
from bistro.domain.order.updater import StatusUpdater


class Kitchen:
    """Observer that prepares orders and advances their status."""

    def __init__(self, name: str = "Kitchen", updater: StatusUpdater | None = None) -> None:
        self.name = name
        self._updater = updater or StatusUpdater()
        self.notifications: list[str] = []

    def describe(self, order: Order) -> str:
        return f'Order for customer "{order.customer.get_name()}" is "{order.status.value}"'

    def on_order_change(self, order: Order) -> str:
        message = self.describe(order)
        self.notifications.append(message)
        return message

    def update_order_status(self, order: Order, status: OrderStatus) -> str:
        self._updater.update_status(order, status)
        return self.describe(order)
