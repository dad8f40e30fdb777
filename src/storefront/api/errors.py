"""Exception handlers for errors Protean's FastAPI integration does not cover."""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from protean.exceptions import ObjectNotFoundError, ValidationError

from storefront.ordering.checkout.service import CheckoutFailed
from storefront.payments.gateway.port import PaymentGatewayError


def _status_for(error: Exception) -> int:
    if isinstance(error, ValidationError):
        return 400
    if isinstance(error, ObjectNotFoundError):
        return 404
    if isinstance(error, PaymentGatewayError):
        return 502
    return 500


def _detail_for(error: Exception):
    if isinstance(error, ValidationError | ObjectNotFoundError):
        return error.messages
    return str(error)


async def payment_gateway_error_handler(request: Request, exc: PaymentGatewayError) -> JSONResponse:
    return JSONResponse(status_code=502, content={"error": exc.message})


async def checkout_failed_handler(request: Request, exc: CheckoutFailed) -> JSONResponse:
    return JSONResponse(
        status_code=_status_for(exc.error),
        content={
            "error": _detail_for(exc.error),
            "step": exc.step,
            "compensation_errors": [{"step": step, "error": str(error)} for step, error in exc.compensation_errors],
        },
    )


def register_storefront_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(PaymentGatewayError, payment_gateway_error_handler)
    app.add_exception_handler(CheckoutFailed, checkout_failed_handler)
