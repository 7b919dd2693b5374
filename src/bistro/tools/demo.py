from __future__ import annotations

from bistro.application.use_cases.apply_discount import ApplyDiscount
from bistro.application.use_cases.generate_invoice import GenerateInvoice
from bistro.application.use_cases.start_order import StartOrder
from bistro.application.use_cases.update_order_status import UpdateOrderStatus
from bistro.application.use_cases.validate_order import ValidateOrder
from bistro.domain.customer.entities import create_customer
from bistro.domain.kitchen.entities import Kitchen
from bistro.domain.menu.catalog import DishCatalog
from bistro.domain.menu.entities import DishKind
from bistro.domain.order.status import OrderStatus
from bistro.domain.pricing.discounts import PercentageDiscount
from bistro.infrastructure import config
from bistro.infrastructure.observability.context import correlation_scope
from bistro.infrastructure.observability.logging_config import configure_logging
from bistro.infrastructure.observability.otel import configure_otel


def main() -> None:
    configure_logging()
    configure_otel()

    catalog = DishCatalog(currency=config.default_currency())
    burger = catalog.create_dish(
        DishKind.CHEESE_BURGER,
        ["brioche bun", "beef patty", "cheddar", "lettuce", "tomato", "onion", "burger sauce"],
    )
    salad = catalog.create_dish("Salad", ["lettuce", "tomato", "cucumber", "vinaigrette"])

    with correlation_scope():
        customer = create_customer("Alice")
        order = StartOrder().execute(customer)
        customer.add_dish_to_order(order, burger)
        customer.add_dish_to_order(order, salad)
        print(order)

        validated = ValidateOrder().execute(order, customer)
        print("\n".join(validated.messages))

        kitchen = Kitchen()
        order.add_observer(kitchen)
        advanced = UpdateOrderStatus().execute(order, OrderStatus.IN_PREPARATION)
        print("\n".join(advanced.messages))

        pricing = ApplyDiscount().execute(order, PercentageDiscount(20))
        print(f"With {pricing.strategy} discount: {pricing.discountedTotal.display}")

        invoice = GenerateInvoice().execute(order)
        print(invoice.text, end="")


if __name__ == "__main__":
    main()
