from __future__ import annotations

import logging

from opentelemetry import trace

from bistro.application.dto.responses import PricingResponse
from bistro.application.mappers.order_mapper import to_money_response
from bistro.application.metrics.order_lifecycle import record_discount
from bistro.domain.order.entities import Order
from bistro.domain.pricing.discounts import DiscountStrategy

logger = logging.getLogger(__name__)
tracer = trace.get_tracer(__name__)


class ApplyDiscount:
    def execute(self, order: Order, discount: DiscountStrategy) -> PricingResponse:
        with tracer.start_as_current_span("order.apply_discount") as span:
            span.set_attribute("order.id", str(order.order_id))
            span.set_attribute("discount.strategy", discount.name)
            total = order.get_total_price()
            discounted = order.get_total_price(discount)
            span.set_attribute("discount.negative", discounted.is_negative)

        record_discount(strategy=discount.name, discounted=discounted)
        extra = {
            "order_id": str(order.order_id),
            "discount": repr(discount),
            "total": str(discounted.amount),
        }
        if discounted.is_negative:
            logger.warning("discount_negative_total", extra=extra)
        else:
            logger.info("discount_applied", extra=extra)

        return PricingResponse(
            orderId=str(order.order_id),
            strategy=discount.name,
            total=to_money_response(total),
            discountedTotal=to_money_response(discounted),
            isNegative=discounted.is_negative,
        )
