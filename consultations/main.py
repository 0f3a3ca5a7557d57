import logging
import time
from uuid import uuid4

from fastapi import FastAPI
from fastapi import HTTPException
from fastapi import Request, Response
from fastapi.exceptions import RequestValidationError

from consultations.api.v1.admin import router as admin_router
from consultations.api.v1.auth import router as auth_router
from consultations.api.v1.availability import router as availability_router
from consultations.api.v1.bookings import router as bookings_router
from consultations.api.v1.contacts import router as contacts_router
from consultations.api.v1.newsletter import router as newsletter_router
from consultations.core.exceptions import (
    http_exception_handler,
    unhandled_exception_handler,
    validation_exception_handler,
)
from consultations.core.logging import setup_logging
from consultations.core.metrics import REQUEST_COUNT, REQUEST_LATENCY, render_metrics
from consultations.core.request_context import request_id_ctx_var

app = FastAPI(title="Consultation Booking API", version="0.1.0")
app.add_exception_handler(HTTPException, http_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
setup_logging()
logger = logging.getLogger("consultations.request")

app.include_router(availability_router)
app.include_router(bookings_router)
app.include_router(contacts_router)
app.include_router(newsletter_router)
app.include_router(auth_router)
app.include_router(admin_router)


def _route_path(request: Request) -> str:
    # label by route template so /bookings/1 and /bookings/2 share a series
    route = request.scope.get("route")
    return getattr(route, "path", request.url.path)


@app.middleware("http")
async def observability_middleware(request: Request, call_next):
    request_id = request.headers.get("x-request-id") or str(uuid4())
    token = request_id_ctx_var.set(request_id)
    start = time.perf_counter()
    method = request.method
    event = "request_completed"
    try:
        response = await call_next(request)
    except Exception as exc:
        # rendered here, not by an app-level handler, so the 500 still carries the request id
        response = await unhandled_exception_handler(request, exc)
        event = "request_failed"

    elapsed = time.perf_counter() - start
    path = _route_path(request)
    REQUEST_COUNT.labels(method=method, path=path, status_code=response.status_code).inc()
    REQUEST_LATENCY.labels(method=method, path=path).observe(elapsed)
    response.headers["X-Request-ID"] = request_id
    logger.info(
        "%s method=%s path=%s status=%s duration_ms=%.2f",
        event,
        method,
        path,
        response.status_code,
        elapsed * 1000,
    )
    request_id_ctx_var.reset(token)
    return response


@app.get("/health", tags=["health"])
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/metrics", tags=["observability"])
def metrics() -> Response:
    payload, content_type = render_metrics()
    return Response(content=payload, media_type=content_type)
