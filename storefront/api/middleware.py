"""Request context middleware for the Storefront catalog.

Every request gets a correlation ID. The ID, the HTTP method and the
route path are bound into the structlog context for the duration of the
request, so catalog and transaction logs can be traced back to the call
that produced them. Errors are not handled here: the exception handlers
registered in ``storefront.main`` own the error body.
"""

import time
from typing import Callable
from uuid import uuid4

import structlog
from fastapi import FastAPI, Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

logger = structlog.get_logger()

REQUEST_ID_HEADER = "X-Request-ID"


def resolve_request_id(request: Request) -> str:
    """Reuse the caller's correlation ID or mint a new one.

    Args:
        request: Incoming request.

    Returns:
        Request ID to echo back and log with.
    """
    supplied = request.headers.get(REQUEST_ID_HEADER, "").strip()
    return supplied or str(uuid4())


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Bind request ID, method and path to the log context.

    The request ID is also stored on ``request.state`` for the error
    handlers and echoed in the ``X-Request-ID`` response header.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = resolve_request_id(request)
        request.state.request_id = request_id
        started = time.perf_counter()

        with structlog.contextvars.bound_contextvars(
            request_id=request_id,
            method=request.method,
            path=request.url.path,
        ):
            response = await call_next(request)
            logger.info(
                "Request completed",
                status_code=response.status_code,
                duration_ms=round((time.perf_counter() - started) * 1000, 2),
            )

        response.headers[REQUEST_ID_HEADER] = request_id
        return response


def setup_middleware(app: FastAPI) -> None:
    """Install the request context middleware.

    Args:
        app: FastAPI application instance.
    """
    app.add_middleware(RequestContextMiddleware)
