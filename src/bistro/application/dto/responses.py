from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, Field


class MoneyResponse(BaseModel):
    amount: Decimal
    currency: str
    display: str


class DishResponse(BaseModel):
    dishId: str
    kind: str
    ingredients: list[str] = Field(default_factory=list)
    price: MoneyResponse
    allergens: list[str] = Field(default_factory=list)


class OrderResponse(BaseModel):
    orderId: str
    customerName: str
    status: str
    dishes: list[DishResponse] = Field(default_factory=list)
    total: MoneyResponse
    observerCount: int


class NotificationResponse(BaseModel):
    order: OrderResponse
    previousStatus: str
    messages: list[str] = Field(default_factory=list)


class PricingResponse(BaseModel):
    orderId: str
    strategy: str
    total: MoneyResponse
    discountedTotal: MoneyResponse
    isNegative: bool


class InvoiceLineResponse(BaseModel):
    position: int
    kind: str
    ingredients: list[str] = Field(default_factory=list)
    price: MoneyResponse


class InvoiceResponse(BaseModel):
    orderId: str
    customerName: str
    status: str
    lines: list[InvoiceLineResponse] = Field(default_factory=list)
    total: MoneyResponse
    discountedTotal: MoneyResponse | None = None
    text: str
