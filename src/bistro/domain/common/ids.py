from __future__ import annotations

from typing import NewType
from uuid import uuid4

CustomerId = NewType("CustomerId", str)
OrderId = NewType("OrderId", str)
DishId = NewType("DishId", str)


def new_customer_id() -> CustomerId:
    return CustomerId(f"cus_{uuid4().hex[:12]}")


def new_order_id() -> OrderId:
    return OrderId(f"ord_{uuid4().hex[:12]}")


def new_dish_id() -> DishId:
    return DishId(f"dsh_{uuid4().hex[:12]}")
