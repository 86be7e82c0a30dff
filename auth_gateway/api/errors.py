from http import HTTPStatus

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException as StarletteHTTPException
import logging

from ..auth.exceptions import ErrorKind, GatewayError
from ..auth.models import ErrorResponse, FieldError

logger = logging.getLogger(__name__)

STATUS_BY_KIND = {
    ErrorKind.VALIDATION: 400,
    ErrorKind.UNAUTHORIZED: 401,
    ErrorKind.CONFLICT: 409,
    ErrorKind.INTERNAL: 500,
    ErrorKind.PROVIDER_UNAVAILABLE: 503,
}


async def gateway_error_handler(request: Request, exc: GatewayError) -> JSONResponse:
    body = ErrorResponse(detail=exc.message, error=exc.kind.value)
    return JSONResponse(
        status_code=STATUS_BY_KIND[exc.kind],
        content=body.model_dump(exclude_none=True)
    )


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report every failing request field at once as a validation error."""
    errors = []
    for error in exc.errors():
        # loc is ("body", "email") or ("query", "token"); a bare ("body",) is a missing body
        location = [str(part) for part in error.get("loc", ()) if part not in ("body", "query")]
        errors.append(FieldError(field=".".join(location) or "body", message=error.get("msg", "Invalid value")))

    logger.info(f"Rejected request to {request.url.path}: {len(errors)} invalid field(s)")
    body = ErrorResponse(
        detail="Request validation failed",
        error=ErrorKind.VALIDATION.value,
        errors=errors
    )
    return JSONResponse(status_code=400, content=body.model_dump(exclude_none=True))


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    body = ErrorResponse(detail=str(exc.detail), error=_error_name(exc.status_code))
    return JSONResponse(
        status_code=exc.status_code,
        content=body.model_dump(exclude_none=True),
        headers=getattr(exc, "headers", None)
    )


def rate_limit_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    """Reject a throttled request, keeping slowapi's rate limit headers."""
    logger.warning(f"Rate limit exceeded for {request.url.path}: {exc.detail}")
    body = ErrorResponse(
        detail=f"Rate limit exceeded: {exc.detail}",
        error=_error_name(HTTPStatus.TOO_MANY_REQUESTS)
    )
    response = JSONResponse(status_code=HTTPStatus.TOO_MANY_REQUESTS, content=body.model_dump(exclude_none=True))
    return request.app.state.limiter._inject_headers(response, request.state.view_rate_limit)


def _error_name(status_code: int) -> str:
    # 404 -> "not_found", 429 -> "too_many_requests"
    return HTTPStatus(status_code).phrase.lower().replace(" ", "_")


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(GatewayError, gateway_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(RateLimitExceeded, rate_limit_handler)
