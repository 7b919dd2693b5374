from __future__ import annotations

from bistro.application.dto.responses import DishResponse, MoneyResponse, OrderResponse
from bistro.domain.common.money import Money
from bistro.domain.menu.entities import Dish
from bistro.domain.order.entities import Order


def to_money_response(money: Money) -> MoneyResponse:
    return MoneyResponse(amount=money.amount, currency=money.currency, display=money.format())


def to_dish_response(dish: Dish) -> DishResponse:
    return DishResponse(
        dishId=str(dish.dish_id),
        kind=dish.kind.value,
        ingredients=list(dish.show_ingredients()),
        price=to_money_response(dish.show_price()),
        allergens=sorted(allergen.value for allergen in dish.allergens),
    )


def to_order_response(order: Order) -> OrderResponse:
    return OrderResponse(
        orderId=str(order.order_id),
        customerName=order.customer.get_name(),
        status=order.status.value,
        dishes=[to_dish_response(dish) for dish in order.dishes],
        total=to_money_response(order.get_total_price()),
        observerCount=len(order.observers),
    )
