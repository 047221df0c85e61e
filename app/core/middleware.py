# In app/core/middleware.py
import time
import uuid
import logging

from typing import Optional, Set
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.middleware.cors import CORSMiddleware
from starlette.middleware.trustedhost import TrustedHostMiddleware
from starlette.middleware.gzip import GZipMiddleware
from app.core.config import settings

logger = logging.getLogger(__name__)

DEFAULT_EXCLUDE_PATHS = {"/health", "/favicon.ico"}
DEFAULT_HOSTS = ["localhost", "127.0.0.1", "testserver"]
DEFAULT_CORS_ORIGINS = ["http://localhost:3000", "http://localhost:8000"]


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Adds a request ID to every request and logs structured information
    about the request and its response.
    """

    def __init__(self, app, exclude_paths: Optional[Set[str]] = None):
        super().__init__(app)
        self.exclude_paths = exclude_paths or DEFAULT_EXCLUDE_PATHS

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get("X-Correlation-ID") or str(uuid.uuid4())
        request.state.request_id = request_id
        start_time = time.time()

        should_log = request.url.path not in self.exclude_paths

        if should_log:
            logger.info(
                "Incoming request",
                extra={
                    "request_id": request_id,
                    "client_ip": self._get_client_ip(request),
                    "method": request.method,
                    "path": request.url.path,
                    "query_params": (
                        str(request.query_params) if request.query_params else None
                    ),
                },
            )

        # Exceptions raised here are rendered by the registered exception handlers
        response = await call_next(request)

        process_time = (time.time() - start_time) * 1000
        response.headers["X-Request-ID"] = request_id

        if should_log:
            logger.info(
                "Request completed",
                extra={
                    "request_id": request_id,
                    "status_code": response.status_code,
                    "process_time_ms": round(process_time, 2),
                },
            )

        return response

    def _get_client_ip(self, request: Request) -> str:
        """Extract client IP considering proxy headers"""
        forwarded_for = request.headers.get("X-Forwarded-For")
        if forwarded_for:
            return forwarded_for.split(",")[0].strip()

        real_ip = request.headers.get("X-Real-IP")
        if real_ip:
            return real_ip.strip()

        return request.client.host if request.client else "unknown"


class RequestSizeLimitMiddleware(BaseHTTPMiddleware):
    """
    Middleware to limit request payload size
    """

    def __init__(self, app, max_size: int = 1024 * 1024):
        super().__init__(app)
        self.max_size = max_size

    async def dispatch(self, request: Request, call_next):
        content_length = request.headers.get("content-length")

        if content_length and content_length.isdigit() and int(content_length) > self.max_size:
            return JSONResponse(
                status_code=413,
                content={
                    "error": "Payload Too Large",
                    "details": f"Request payload exceeds maximum size of {self.max_size} bytes",
                },
            )

        return await call_next(request)


def register_middlewares(app: FastAPI):
    """
    Registers all middlewares for the FastAPI application.
    Middlewares run in reverse order of registration.
    """
    allowed_hosts = _split_setting(settings.ALLOWED_HOSTS, DEFAULT_HOSTS, "ALLOWED_HOSTS")
    cors_origins = _split_setting(settings.CORS_ORIGINS, DEFAULT_CORS_ORIGINS, "CORS_ORIGINS")

    app.add_middleware(RequestSizeLimitMiddleware, max_size=settings.MAX_REQUEST_SIZE)

    app.add_middleware(GZipMiddleware, minimum_size=1000)

    if "*" not in allowed_hosts:
        app.add_middleware(TrustedHostMiddleware, allowed_hosts=allowed_hosts)
    else:
        logger.warning("TrustedHostMiddleware disabled: ALLOWED_HOSTS contains '*'")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "PATCH", "OPTIONS", "HEAD"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )

    # Registered last so it wraps everything else
    app.add_middleware(RequestLoggingMiddleware, exclude_paths=DEFAULT_EXCLUDE_PATHS)

    logger.info("All middlewares registered successfully")


def _split_setting(raw: str, default: list[str], name: str) -> list[str]:
    """Parse a comma separated setting, falling back to ``default`` when empty."""
    values = [item.strip() for item in (raw or "").split(",") if item.strip()]
    if not values:
        logger.info(f"{name} not configured, using default: {default}")
        return list(default)
    logger.info(f"Configured {name}: {values}")
    return values
