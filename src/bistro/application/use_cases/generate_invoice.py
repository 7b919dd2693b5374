from __future__ import annotations

import logging

from opentelemetry import trace

from bistro.application.dto.responses import InvoiceLineResponse, InvoiceResponse
from bistro.application.mappers.invoice_text import render_invoice_text
from bistro.application.mappers.order_mapper import to_money_response
from bistro.application.metrics.order_lifecycle import record_invoice_generated
from bistro.domain.order.entities import Order
from bistro.domain.pricing.discounts import DiscountStrategy

logger = logging.getLogger(__name__)
tracer = trace.get_tracer(__name__)


class GenerateInvoice:
    def execute(self, order: Order, discount: DiscountStrategy | None = None) -> InvoiceResponse:
        with tracer.start_as_current_span("order.generate_invoice") as span:
            span.set_attribute("order.id", str(order.order_id))
            lines = [
                InvoiceLineResponse(
                    position=position,
                    kind=dish.kind.value,
                    ingredients=list(dish.show_ingredients()),
                    price=to_money_response(dish.show_price()),
                )
                for position, dish in enumerate(order.dishes, start=1)
            ]
            total = to_money_response(order.get_total_price())
            discounted_total = (
                to_money_response(order.get_total_price(discount))
                if discount is not None
                else None
            )
            span.set_attribute("invoice.lines", len(lines))

        customer_name = order.customer.get_name()
        record_invoice_generated(discounted=discount is not None)
        logger.info(
            "invoice_generated",
            extra={
                "order_id": str(order.order_id),
                "customer": customer_name,
                "total": str(total.amount),
                "discount": repr(discount) if discount is not None else None,
            },
        )
        return InvoiceResponse(
            orderId=str(order.order_id),
            customerName=customer_name,
            status=order.status.value,
            lines=lines,
            total=total,
            discountedTotal=discounted_total,
            text=render_invoice_text(customer_name, lines, total, discounted_total),
        )

    def total_amount(self, order: Order) -> str:
        return order.get_total_price().format()
