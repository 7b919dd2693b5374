from __future__ import annotations

import logging

from opentelemetry import trace

from bistro.application.dto.responses import NotificationResponse
from bistro.application.mappers.order_mapper import to_order_response
from bistro.application.metrics.order_lifecycle import (
    record_notifications,
    record_order_status,
    record_transition,
    record_transition_rejected,
)
from bistro.domain.order.entities import Order
from bistro.domain.order.status import InvalidTransitionError, OrderStatus
from bistro.domain.order.updater import StatusUpdater

logger = logging.getLogger(__name__)
tracer = trace.get_tracer(__name__)


class UnknownOrderStatusError(Exception):
    pass


class InvalidOrderTransitionError(Exception):
    pass


def parse_status(value: OrderStatus | str) -> OrderStatus:
    if isinstance(value, OrderStatus):
        return value
    for status in OrderStatus:
        if value in (status.value, status.name):
            return status
    raise UnknownOrderStatusError(f"unknown order status: {value}")


class UpdateOrderStatus:
    def __init__(self, updater: StatusUpdater | None = None) -> None:
        self._updater = updater or StatusUpdater()

    def execute(self, order: Order, new_status: OrderStatus | str) -> NotificationResponse:
        target = parse_status(new_status)
        previous = order.status

        with tracer.start_as_current_span("order.update_status") as span:
            span.set_attribute("order.id", str(order.order_id))
            span.set_attribute("order.from_status", previous.value)
            span.set_attribute("order.to_status", target.value)
            try:
                messages = self._updater.update_status(order, target)
            except InvalidTransitionError as exc:
                record_transition_rejected(from_status=previous, to_status=target)
                logger.warning(
                    "order_transition_rejected",
                    extra={
                        "order_id": str(order.order_id),
                        "from_status": previous.value,
                        "to_status": target.value,
                    },
                )
                raise InvalidOrderTransitionError(str(exc)) from exc
            span.set_attribute("order.notifications", len(messages))

        record_transition(from_status=previous, to_status=target)
        record_order_status(order)
        record_notifications(status=target, count=len(messages))
        logger.info(
            "order_status_updated",
            extra={
                "order_id": str(order.order_id),
                "from_status": previous.value,
                "to_status": target.value,
                "observers": len(order.observers),
                "messages": messages,
            },
        )

        return NotificationResponse(
            order=to_order_response(order),
            previousStatus=previous.value,
            messages=messages,
        )
