from __future__ import annotations

from enum import Enum


class OrderStatus(str, Enum):
    NOT_VALIDATED = "NotValidated"
    VALIDATED = "Validated"
    IN_PREPARATION = "InPreparation"
    READY = "Ready"
    COMPLETED = "Completed"


# NotValidated and Completed are silent.
NOTIFYING_STATUSES: frozenset[OrderStatus] = frozenset(
    {OrderStatus.VALIDATED, OrderStatus.IN_PREPARATION, OrderStatus.READY}
)

TERMINAL_STATUSES: frozenset[OrderStatus] = frozenset({OrderStatus.COMPLETED})

TRANSITIONS: dict[OrderStatus, frozenset[OrderStatus]] = {
    OrderStatus.NOT_VALIDATED: frozenset({OrderStatus.VALIDATED}),
    OrderStatus.VALIDATED: frozenset({OrderStatus.VALIDATED, OrderStatus.IN_PREPARATION}),
    OrderStatus.IN_PREPARATION: frozenset({OrderStatus.READY}),
    OrderStatus.READY: frozenset({OrderStatus.COMPLETED}),
    OrderStatus.COMPLETED: frozenset(),
}


class TransitionPolicy(str, Enum):
    PERMISSIVE = "permissive"
    STRICT = "strict"


class InvalidTransitionError(Exception):
    def __init__(self, from_status: OrderStatus, to_status: OrderStatus) -> None:
        super().__init__(
            f"cannot move order from status={from_status.value} to status={to_status.value}"
        )
        self.from_status = from_status
        self.to_status = to_status


def is_allowed(from_status: OrderStatus, to_status: OrderStatus) -> bool:
    return to_status in TRANSITIONS[from_status]


def check_transition(
    policy: TransitionPolicy,
    from_status: OrderStatus,
    to_status: OrderStatus,
) -> None:
    if policy == TransitionPolicy.PERMISSIVE:
        return
    if not is_allowed(from_status, to_status):
        raise InvalidTransitionError(from_status, to_status)
