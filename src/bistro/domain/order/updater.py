from __future__ import annotations

from typing import TYPE_CHECKING

from bistro.domain.order.status import OrderStatus, TransitionPolicy, check_transition

if TYPE_CHECKING:
    from bistro.domain.order.entities import Order


class StatusUpdater:
    """The only code path that writes ``Order.status``.

    Every update re-runs the order's notification fan-out and hands back
    the observer messages. Transition legality is delegated to the policy:
    the order's own policy unless one is given here.
    """

    def __init__(self, policy: TransitionPolicy | None = None) -> None:
        self._policy = policy

    def update_status(self, order: Order, new_status: OrderStatus) -> list[str]:
        policy = self._policy or order.transition_policy
        check_transition(policy, order.status, new_status)
        order._status = new_status
        return order.notify_observers()
