from __future__ import annotations

import logging
import sys
from decimal import Decimal
from pathlib import Path

import pytest
from prometheus_client import REGISTRY

sys.path.insert(0, str(Path(__file__).resolve().parents[3] / "src"))

from bistro.application.use_cases.apply_discount import ApplyDiscount
from bistro.application.use_cases.generate_invoice import GenerateInvoice
from bistro.application.use_cases.start_order import StartOrder
from bistro.application.use_cases.update_order_status import (
    InvalidOrderTransitionError,
    UnknownOrderStatusError,
    UpdateOrderStatus,
    parse_status,
)
from bistro.application.use_cases.validate_order import ValidateOrder
from bistro.domain.customer.entities import create_customer
from bistro.domain.kitchen.entities import Kitchen
from bistro.domain.menu.catalog import create_dish
from bistro.domain.order.entities import Order
from bistro.domain.order.observers import NotificationMode
from bistro.domain.order.status import OrderStatus, TransitionPolicy
from bistro.domain.order.updater import StatusUpdater
from bistro.domain.pricing.discounts import FixedAmountDiscount, PercentageDiscount
from bistro.infrastructure import config


def _start(policy: TransitionPolicy = TransitionPolicy.PERMISSIVE) -> Order:
    order = StartOrder(
        currency="USD",
        transition_policy=policy,
        notification_mode=NotificationMode.ALL,
    ).execute(create_customer("Alice"))
    order.add_dish(create_dish("CheeseBurger", ["bun", "beef", "cheddar"]))
    order.add_dish(create_dish("Salad", ["lettuce", "tomato"]))
    return order


def _sample(name: str, labels: dict[str, str]) -> float:
    return REGISTRY.get_sample_value(name, labels) or 0.0


def test_start_order_applies_options() -> None:
    order = StartOrder(
        currency="EUR",
        transition_policy=TransitionPolicy.STRICT,
        notification_mode=NotificationMode.FIRST_ONLY,
    ).execute(create_customer("Bob"))

    assert order.currency == "EUR"
    assert order.transition_policy == TransitionPolicy.STRICT
    assert order.notification_mode == NotificationMode.FIRST_ONLY
    assert order.status == OrderStatus.NOT_VALIDATED


def test_validate_order_subscribes_customer_and_collects_messages() -> None:
    order = _start()
    kitchen = Kitchen()
    order.add_observer(kitchen)

    response = ValidateOrder().execute(order, order.customer)

    assert response.previousStatus == "NotValidated"
    assert response.order.status == "Validated"
    assert response.order.total.amount == Decimal(18)
    assert response.order.observerCount == 2
    assert response.messages == [
        'Order for customer "Alice" is "Validated"',
        "Your order is now: Validated",
    ]


def test_update_order_status_accepts_names_and_values() -> None:
    assert parse_status("InPreparation") == OrderStatus.IN_PREPARATION
    assert parse_status("READY") == OrderStatus.READY
    assert parse_status(OrderStatus.COMPLETED) == OrderStatus.COMPLETED
    with pytest.raises(UnknownOrderStatusError):
        parse_status("Burnt")


def test_update_order_status_notifies_and_records_transition() -> None:
    order = _start()
    ValidateOrder().execute(order)
    kitchen = Kitchen()
    order.add_observer(kitchen)
    labels = {"from": "Validated", "to": "InPreparation"}
    before = _sample("bistro_order_transition_total", labels)

    response = UpdateOrderStatus().execute(order, "InPreparation")

    assert response.previousStatus == "Validated"
    assert response.order.status == "InPreparation"
    assert response.messages == ['Order for customer "Alice" is "InPreparation"']
    assert _sample("bistro_order_transition_total", labels) == before + 1


def test_update_order_status_wraps_strict_rejection() -> None:
    order = _start(TransitionPolicy.STRICT)
    labels = {"from": "NotValidated", "to": "Completed"}
    before = _sample("bistro_order_transition_rejected_total", labels)

    with pytest.raises(InvalidOrderTransitionError):
        UpdateOrderStatus().execute(order, OrderStatus.COMPLETED)

    assert order.status == OrderStatus.NOT_VALIDATED
    assert _sample("bistro_order_transition_rejected_total", labels) == before + 1


def test_validate_order_rejected_from_completed_under_strict_policy() -> None:
    order = _start(TransitionPolicy.STRICT)
    updater = UpdateOrderStatus()
    for status in ("Validated", "InPreparation", "Ready", "Completed"):
        updater.execute(order, status)

    with pytest.raises(InvalidOrderTransitionError):
        ValidateOrder().execute(order)


def test_apply_discount_reports_negative_totals() -> None:
    order = _start()

    percentage = ApplyDiscount().execute(order, PercentageDiscount(20))
    fixed = ApplyDiscount().execute(order, FixedAmountDiscount(25))

    assert percentage.strategy == "percentage"
    assert percentage.total.amount == Decimal(18)
    assert percentage.discountedTotal.amount == Decimal("14.4")
    assert percentage.isNegative is False
    assert fixed.discountedTotal.amount == Decimal(-7)
    assert fixed.discountedTotal.display == "-$7"
    assert fixed.isNegative is True


def test_generate_invoice_numbers_lines_in_order() -> None:
    order = _start()

    invoice = GenerateInvoice().execute(order, PercentageDiscount(20))

    assert [line.position for line in invoice.lines] == [1, 2]
    assert invoice.customerName == "Alice"
    assert invoice.text == (
        "Invoice for Alice:\n"
        "1. Dish with ingredients: bun, beef, cheddar - Price: $10\n"
        "2. Dish with ingredients: lettuce, tomato - Price: $8\n"
        "Total: $18\n"
        "Discounted total: $14.4\n"
    )
    assert GenerateInvoice().total_amount(order) == "$18"


def test_generate_invoice_does_not_mutate_order() -> None:
    order = _start()
    dishes = order.dishes

    invoice = GenerateInvoice().execute(order)

    assert invoice.discountedTotal is None
    assert invoice.status == "NotValidated"
    assert order.dishes == dishes
    assert order.status == OrderStatus.NOT_VALIDATED


def test_configured_currency_flows_into_dishes(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("BISTRO_CURRENCY", "EUR")
    config.clear_cache()
    try:
        order = StartOrder().execute(create_customer("Alice"))
    finally:
        config.clear_cache()

    order.add_dish(create_dish("CheeseBurger", ["bun"], currency=order.currency))
    order.add_dish(create_dish("Salad", ["lettuce"], currency=order.currency))
    with pytest.raises(ValueError):
        order.add_dish(create_dish("Brownie", ["cocoa"]))

    assert order.get_total_price().amount == Decimal(18)
    assert order.get_total_price().currency == "EUR"


def test_rejected_validation_unsubscribes_customer_and_logs(
    caplog: pytest.LogCaptureFixture,
) -> None:
    order = _start(TransitionPolicy.STRICT)
    updater = UpdateOrderStatus()
    for status in ("Validated", "InPreparation", "Ready", "Completed"):
        updater.execute(order, status)

    with caplog.at_level(logging.WARNING):
        with pytest.raises(InvalidOrderTransitionError):
            ValidateOrder().execute(order, order.customer)

    assert order.observers == ()
    rejected = [
        record for record in caplog.records if record.getMessage() == "order_transition_rejected"
    ]
    assert len(rejected) == 1
    assert rejected[0].from_status == "Completed"
    assert rejected[0].to_status == "Validated"


def test_rejected_validation_keeps_existing_subscription() -> None:
    order = _start(TransitionPolicy.STRICT)
    order.add_observer(order.customer)
    StatusUpdater(policy=TransitionPolicy.PERMISSIVE).update_status(order, OrderStatus.READY)

    with pytest.raises(InvalidOrderTransitionError):
        ValidateOrder().execute(order, order.customer)

    assert order.observers == (order.customer,)


def test_use_cases_log_their_outcome(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.INFO):
        order = _start()
        ApplyDiscount().execute(order, PercentageDiscount(20))
        ApplyDiscount().execute(order, FixedAmountDiscount(25))
        GenerateInvoice().execute(order)

    events = [record.getMessage() for record in caplog.records]
    assert "order_started" in events
    assert "discount_applied" in events
    assert "discount_negative_total" in events
    assert "invoice_generated" in events


def test_generate_invoice_records_metric() -> None:
    order = _start()
    plain_before = _sample("bistro_invoices_generated_total", {"discounted": "false"})
    discounted_before = _sample("bistro_invoices_generated_total", {"discounted": "true"})

    GenerateInvoice().execute(order)
    GenerateInvoice().execute(order, PercentageDiscount(10))

    assert _sample("bistro_invoices_generated_total", {"discounted": "false"}) == plain_before + 1
    assert (
        _sample("bistro_invoices_generated_total", {"discounted": "true"})
        == discounted_before + 1
    )
