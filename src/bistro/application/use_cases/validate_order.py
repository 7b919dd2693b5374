from __future__ import annotations

import logging

from opentelemetry import trace

from bistro.application.dto.responses import NotificationResponse
from bistro.application.mappers.order_mapper import to_order_response
from bistro.application.metrics.order_lifecycle import (
    record_notifications,
    record_order_status,
    record_order_total,
    record_transition,
    record_transition_rejected,
)
from bistro.application.use_cases.update_order_status import InvalidOrderTransitionError
from bistro.domain.customer.entities import Customer
from bistro.domain.order.entities import Order
from bistro.domain.order.status import InvalidTransitionError, OrderStatus

logger = logging.getLogger(__name__)
tracer = trace.get_tracer(__name__)


class ValidateOrder:
    def execute(self, order: Order, customer: Customer | None = None) -> NotificationResponse:
        """Validate ``order`` and collect every subscriber's reply.

        When ``customer`` is given it is subscribed first, so its own
        acknowledgement is part of the returned messages.
        """
        previous = order.status
        with tracer.start_as_current_span("order.validate") as span:
            span.set_attribute("order.id", str(order.order_id))
            subscribed = customer is not None and order.add_observer(customer)
            try:
                messages = order.validate_order()
            except InvalidTransitionError as exc:
                if subscribed:
                    order.remove_observer(customer)
                record_transition_rejected(from_status=previous, to_status=OrderStatus.VALIDATED)
                logger.warning(
                    "order_transition_rejected",
                    extra={
                        "order_id": str(order.order_id),
                        "from_status": previous.value,
                        "to_status": OrderStatus.VALIDATED.value,
                    },
                )
                raise InvalidOrderTransitionError(str(exc)) from exc
            span.set_attribute("order.notifications", len(messages))

        total = order.get_total_price()
        record_transition(from_status=previous, to_status=OrderStatus.VALIDATED)
        record_order_status(order)
        record_notifications(status=OrderStatus.VALIDATED, count=len(messages))
        record_order_total(total)
        logger.info(
            "order_validated",
            extra={
                "order_id": str(order.order_id),
                "customer": order.customer.get_name(),
                "total": str(total.amount),
                "messages": messages,
            },
        )

        return NotificationResponse(
            order=to_order_response(order),
            previousStatus=previous.value,
            messages=messages,
        )
