"""Checkout request validation.

The incoming body is checked against pydantic schemas before any pricing,
store or payment work happens. The first failing rule is reported with a
message that is safe to show to the caller.
"""

from dataclasses import dataclass

from pydantic import BaseModel, Field, StrictInt, StrictStr
from pydantic import ValidationError as PydanticValidationError

from ordering.checkout.pricing import CartItem, calculate_tax

# Amounts are stored as signed 64-bit integers
MAX_UNIT_PRICE = 100_000_000_000
MAX_QUANTITY = 1_000_000
MAX_ORDER_TOTAL = 2**63 - 1

UUID_PATTERN = r"^[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}$"

INVALID_JSON = "Invalid JSON body"
NOT_AN_OBJECT = "Request body must be a JSON object"
INVALID_CART_ID = "Missing or invalid cartId"
CART_ID_NOT_UUID = "cartId must be a valid UUID"
INVALID_CUSTOMER_ID = "Missing or invalid customerId"
EMPTY_CART = "Cart is empty"
ITEM_NOT_AN_OBJECT = "Each item must be an object"

_ITEM_FIELD_MESSAGES = {
    "productId": "Each item must have a productId",
    "name": "Each item must have a name",
    "unitPrice": "unitPrice must be a positive integer (cents)",
    "quantity": "quantity must be an integer >= 1",
}

_ITEM_LIMIT_MESSAGES = {
    "unitPrice": f"unitPrice must not exceed {MAX_UNIT_PRICE}",
    "quantity": f"quantity must not exceed {MAX_QUANTITY}",
}

ORDER_TOTAL_TOO_LARGE = "Order total exceeds the maximum amount"


class CheckoutValidationError(Exception):
    """The checkout request is malformed; the caller can correct it."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------
class CartItemPayload(BaseModel):
    product_id: StrictStr = Field(alias="productId", min_length=1)
    name: StrictStr = Field(min_length=1)
    unit_price: StrictInt = Field(alias="unitPrice", gt=0, le=MAX_UNIT_PRICE)
    quantity: StrictInt = Field(ge=1, le=MAX_QUANTITY)


class CheckoutPayload(BaseModel):
    cart_id: StrictStr = Field(alias="cartId", min_length=1, pattern=UUID_PATTERN)
    customer_id: StrictStr = Field(alias="customerId", min_length=1)
    items: list[CartItemPayload] = Field(min_length=1)

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "cartId": "123e4567-e89b-12d3-a456-426614174000",
                    "customerId": "customer-1",
                    "items": [
                        {"productId": "prod-1", "name": "T-Shirt", "unitPrice": 2000, "quantity": 2},
                        {"productId": "prod-2", "name": "Mug", "unitPrice": 1500, "quantity": 1},
                    ],
                }
            ]
        }
    }


@dataclass(frozen=True)
class CheckoutRequest:
    cart_id: str
    customer_id: str
    items: tuple[CartItem, ...]


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------
def _message_for(error: dict) -> str:
    loc = error["loc"]
    if error["type"] == "json_invalid":
        return INVALID_JSON
    if not loc:
        return NOT_AN_OBJECT

    field = loc[0]
    if field == "cartId":
        if error["type"] == "string_pattern_mismatch":
            return CART_ID_NOT_UUID
        return INVALID_CART_ID
    if field == "customerId":
        return INVALID_CUSTOMER_ID
    if field == "items":
        if len(loc) == 1:
            return EMPTY_CART
        if len(loc) == 2:
            return ITEM_NOT_AN_OBJECT
        if error["type"] == "less_than_equal":
            return _ITEM_LIMIT_MESSAGES[loc[2]]
        return _ITEM_FIELD_MESSAGES.get(loc[2], ITEM_NOT_AN_OBJECT)
    return NOT_AN_OBJECT


def validate_checkout_request(body) -> CheckoutRequest:
    """Validate a raw checkout body and return the typed request.

    ``body`` may be the raw JSON text (``str`` or ``bytes``, ``None`` for a
    missing body) or an already decoded object.

    Raises:
        CheckoutValidationError: describing the first rule the body breaks.
    """
    try:
        if body is None or isinstance(body, (str, bytes, bytearray)):
            payload = CheckoutPayload.model_validate_json(body or "")
        else:
            payload = CheckoutPayload.model_validate(body)
    except PydanticValidationError as exc:
        raise CheckoutValidationError(_message_for(exc.errors()[0])) from exc

    subtotal = sum(item.unit_price * item.quantity for item in payload.items)
    if subtotal + calculate_tax(subtotal) > MAX_ORDER_TOTAL:
        raise CheckoutValidationError(ORDER_TOTAL_TOO_LARGE)

    return CheckoutRequest(
        cart_id=payload.cart_id,
        customer_id=payload.customer_id,
        items=tuple(
            CartItem(
                product_id=item.product_id,
                name=item.name,
                unit_price=item.unit_price,
                quantity=item.quantity,
            )
            for item in payload.items
        ),
    )
