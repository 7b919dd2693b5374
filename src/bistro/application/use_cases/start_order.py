from __future__ import annotations

import logging

from opentelemetry import trace

from bistro.application.metrics.order_lifecycle import record_order_status
from bistro.domain.customer.entities import Customer
from bistro.domain.order.entities import Order, create_order
from bistro.domain.order.observers import NotificationMode
from bistro.domain.order.status import TransitionPolicy
from bistro.infrastructure import config

logger = logging.getLogger(__name__)
tracer = trace.get_tracer(__name__)


class StartOrder:
    """Open an empty order for a customer using the configured policies."""

    def __init__(
        self,
        currency: str | None = None,
        transition_policy: TransitionPolicy | None = None,
        notification_mode: NotificationMode | None = None,
    ) -> None:
        self._currency = currency or config.default_currency()
        self._transition_policy = transition_policy or config.transition_policy()
        self._notification_mode = notification_mode or config.notification_mode()

    def execute(self, customer: Customer) -> Order:
        with tracer.start_as_current_span("order.start") as span:
            order = create_order(
                customer,
                currency=self._currency,
                transition_policy=self._transition_policy,
                notification_mode=self._notification_mode,
            )
            span.set_attribute("order.id", str(order.order_id))
            span.set_attribute("order.currency", order.currency)

        record_order_status(order)
        logger.info(
            "order_started",
            extra={"order_id": str(order.order_id), "customer": customer.get_name()},
        )
        return order
