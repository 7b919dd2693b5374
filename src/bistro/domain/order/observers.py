from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Iterator, Protocol

from bistro.domain.order.status import NOTIFYING_STATUSES

if TYPE_CHECKING:
    from bistro.domain.order.entities import Order


class OrderObserver(Protocol):
    def on_order_change(self, order: Order) -> str: ...


class NotificationMode(str, Enum):
    """How many subscribers hear about a status change.

    ``ALL`` reaches every subscriber and collects each message.
    ``FIRST_ONLY`` reaches only the earliest subscriber, for callers that
    depend on the single-reply behaviour.
    """

    ALL = "all"
    FIRST_ONLY = "first_only"


class ObserverRegistry:
    """Insertion-ordered set of order observers."""

    def __init__(self) -> None:
        self._observers: list[OrderObserver] = []

    def __len__(self) -> int:
        return len(self._observers)

    def __iter__(self) -> Iterator[OrderObserver]:
        return iter(list(self._observers))

    def __contains__(self, observer: object) -> bool:
        return any(existing is observer for existing in self._observers)

    def add(self, observer: OrderObserver) -> bool:
        if observer in self:
            return False
        self._observers.append(observer)
        return True

    def remove(self, observer: OrderObserver) -> bool:
        for index, existing in enumerate(self._observers):
            if existing is observer:
                del self._observers[index]
                return True
        return False

    def notify(self, order: Order, mode: NotificationMode = NotificationMode.ALL) -> list[str]:
        if order.status not in NOTIFYING_STATUSES:
            return []
        targets = list(self._observers)
        if mode == NotificationMode.FIRST_ONLY:
            targets = targets[:1]
        return [observer.on_order_change(order) for observer in targets]
