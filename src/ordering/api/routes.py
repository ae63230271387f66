"""FastAPI routes for the Ordering domain: checkout."""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from ordering.api.schemas import ErrorResponse, OrderResponse
from ordering.checkout.service import CheckoutOutcome, CheckoutService

_ERROR_CODES = {
    CheckoutOutcome.VALIDATION_FAILED: "VALIDATION_ERROR",
    CheckoutOutcome.INTERNAL_FAILURE: "INTERNAL_ERROR",
}


def get_checkout_service(request: Request) -> CheckoutService:
    return request.app.state.checkout_service


# ---------------------------------------------------------------------------
# Checkout Router
# ---------------------------------------------------------------------------
checkout_router = APIRouter(prefix="/checkout", tags=["checkout"])


@checkout_router.post(
    "",
    response_model=OrderResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def checkout(request: Request, service: CheckoutService = Depends(get_checkout_service)) -> JSONResponse:
    """Create the order for a cart, or return the one already recorded.

    The body is read raw so that malformed JSON is reported with the same
    error shape as every other validation failure.
    """
    result = await service.checkout(await request.body())

    if result.outcome is CheckoutOutcome.COMPLETED:
        content = OrderResponse.model_validate(result.order.to_record()).model_dump()
    else:
        content = ErrorResponse(error=_ERROR_CODES[result.outcome], message=result.message).model_dump()

    return JSONResponse(status_code=result.status_code, content=content)
