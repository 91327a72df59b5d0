"""RFC 7807 Problem Details error handling."""

import logging

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class ProblemDetailError(Exception):
    """Raise for RFC 7807 problem+json responses."""

    def __init__(
        self,
        status: int,
        title: str,
        detail: str,
        error_type: str | None = None,
    ):
        super().__init__(detail)
        self.status = status
        self.title = title
        self.detail = detail
        self.error_type = error_type or "about:blank"


class GatewayUnconfiguredError(ProblemDetailError):
    """Razorpay credentials are missing; no gateway call is attempted."""

    def __init__(self):
        super().__init__(
            status=500,
            title="Payment Gateway Unavailable",
            detail="Payment gateway is not configured. Please contact administrator.",
        )


class GatewayOrderError(ProblemDetailError):
    """Razorpay rejected or failed the order-creation call."""

    DEFAULT_DETAIL = "Failed to create payment order. Please check Razorpay credentials."

    def __init__(self, description: str | None = None):
        super().__init__(
            status=500,
            title="Payment Order Failed",
            detail=description or self.DEFAULT_DETAIL,
        )


class DonationNotFoundError(ProblemDetailError):
    def __init__(self):
        super().__init__(status=404, title="Donation Not Found", detail="Donation not found")


class VerificationFailedError(ProblemDetailError):
    """Signature mismatch. The donation row is left untouched."""

    def __init__(self):
        super().__init__(
            status=400,
            title="Payment Verification Failed",
            detail="Payment verification failed",
        )


async def problem_detail_handler(request: Request, exc: ProblemDetailError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status,
        content={
            "type": exc.error_type,
            "title": exc.title,
            "status": exc.status,
            "detail": exc.detail,
            "instance": str(request.url.path),
        },
        media_type="application/problem+json",
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "type": "about:blank",
            "title": exc.detail if isinstance(exc.detail, str) else "Error",
            "status": exc.status_code,
            "detail": exc.detail,
            "instance": str(request.url.path),
        },
        media_type="application/problem+json",
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    return JSONResponse(
        status_code=422,
        content={
            "type": "about:blank",
            "title": "Validation Error",
            "status": 422,
            "detail": jsonable_errors(exc),
            "instance": str(request.url.path),
        },
        media_type="application/problem+json",
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=500,
        content={
            "type": "about:blank",
            "title": "Internal Server Error",
            "status": 500,
            "detail": "An unexpected error occurred",
            "instance": str(request.url.path),
        },
        media_type="application/problem+json",
    )


def jsonable_errors(exc: RequestValidationError) -> list[dict]:
    """Strip non-serialisable ``ctx`` values (e.g. ValueError instances)."""
    errors = []
    for err in exc.errors():
        err = dict(err)
        if "ctx" in err:
            err["ctx"] = {k: str(v) for k, v in err["ctx"].items()}
        errors.append(err)
    return errors
