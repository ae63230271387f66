"""Pydantic response schemas for the Checkout API.

These are external contracts, kept separate from the Order aggregate.
Field names follow the camelCase wire format and money is always an
integer in the smallest currency unit.
"""

from typing import Literal

from pydantic import BaseModel


class OrderLineSchema(BaseModel):
    productId: str
    name: str
    unitPrice: int
    quantity: int
    lineTotal: int


class OrderResponse(BaseModel):
    orderId: str
    cartId: str
    customerId: str
    items: list[OrderLineSchema]
    subtotal: int
    tax: int
    total: int
    status: Literal["CONFIRMED"]
    createdAt: str


class ErrorResponse(BaseModel):
    error: Literal["VALIDATION_ERROR", "INTERNAL_ERROR"]
    message: str

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"error": "VALIDATION_ERROR", "message": "Cart is empty"},
            ]
        }
    }
