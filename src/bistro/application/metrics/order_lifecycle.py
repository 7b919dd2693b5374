from __future__ import annotations

from prometheus_client import Counter, Histogram

from bistro.domain.common.money import Money
from bistro.domain.order.entities import Order
from bistro.domain.order.status import OrderStatus

ORDERS_TOTAL = Counter(
    "bistro_orders_total",
    "Total number of orders observed by status.",
    ["status"],
)

ORDER_TRANSITION_TOTAL = Counter(
    "bistro_order_transition_total",
    "Total number of order lifecycle transitions.",
    ["from", "to"],
)

ORDER_TRANSITION_REJECTED_TOTAL = Counter(
    "bistro_order_transition_rejected_total",
    "Total number of transitions refused by the strict policy.",
    ["from", "to"],
)

NOTIFICATIONS_TOTAL = Counter(
    "bistro_order_notifications_total",
    "Total number of observer messages produced by status changes.",
    ["status"],
)

DISCOUNTS_APPLIED_TOTAL = Counter(
    "bistro_discounts_applied_total",
    "Total number of discount computations.",
    ["strategy"],
)

NEGATIVE_TOTALS_TOTAL = Counter(
    "bistro_negative_totals_total",
    "Total number of discount computations that went below zero.",
    ["strategy"],
)

ORDER_TOTAL_AMOUNT = Histogram(
    "bistro_order_total_amount",
    "Order totals before discounts, in currency units.",
    buckets=(5, 10, 20, 50, 100, 200, 500),
)


def record_order_status(order: Order) -> None:
    ORDERS_TOTAL.labels(status=order.status.value).inc()


def record_transition(from_status: OrderStatus, to_status: OrderStatus) -> None:
    ORDER_TRANSITION_TOTAL.labels(**{"from": from_status.value, "to": to_status.value}).inc()


def record_transition_rejected(from_status: OrderStatus, to_status: OrderStatus) -> None:
    ORDER_TRANSITION_REJECTED_TOTAL.labels(
        **{"from": from_status.value, "to": to_status.value}
    ).inc()


def record_notifications(status: OrderStatus, count: int) -> None:
    if count:
        NOTIFICATIONS_TOTAL.labels(status=status.value).inc(count)


def record_discount(strategy: str, discounted: Money) -> None:
    DISCOUNTS_APPLIED_TOTAL.labels(strategy=strategy).inc()
    if discounted.is_negative:
        NEGATIVE_TOTALS_TOTAL.labels(strategy=strategy).inc()


def record_order_total(total: Money) -> None:
    ORDER_TOTAL_AMOUNT.observe(float(total.amount))


INVOICES_GENERATED_TOTAL = Counter(
    "bistro_invoices_generated_total",
    "Total number of invoices generated.",
    ["discounted"],
)


def record_invoice_generated(discounted: bool) -> None:
    INVOICES_GENERATED_TOTAL.labels(discounted=str(discounted).lower()).inc()
