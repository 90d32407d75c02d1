"""
Request context middleware: request ids, access logging and timing headers.
"""

from typing import Callable
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp
import logging
import re
import time
import uuid

from app.services.error_handler import ErrorHandlerService

logger = logging.getLogger(__name__)

# Client-supplied ids are echoed into logs and bodies only when they look like ids
REQUEST_ID_PATTERN = re.compile(r"[A-Za-z0-9._-]{1,64}")


class RequestContextMiddleware(BaseHTTPMiddleware):
    """
    Assigns every request a short id, logs it, and stamps the response with
    X-Request-ID and X-Processing-Time. Exceptions that escape the route
    handlers are turned into an opaque 500 here so they are logged under the
    same request id.
    """

    def __init__(
        self,
        app: ASGIApp,
        enable_request_logging: bool = True,
        slow_request_threshold: float = 1.0
    ):
        super().__init__(app)
        self.enable_request_logging = enable_request_logging
        self.slow_request_threshold = slow_request_threshold

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = self._resolve_request_id(request)
        request.state.request_id = request_id

        start_time = time.perf_counter()

        if self.enable_request_logging:
            logger.info(
                f"Request [{request_id}]: {request.method} {request.url.path}",
                extra={
                    "request_id": request_id,
                    "method": request.method,
                    "path": request.url.path,
                    "client_ip": self._get_client_ip(request)
                }
            )

        try:
            response = await call_next(request)
        except Exception as exc:
            response = ErrorHandlerService.handle_unexpected_error(exc, request)

        processing_time = time.perf_counter() - start_time

        if self.enable_request_logging:
            self._log_response(request, response, request_id, processing_time)

        response.headers["X-Request-ID"] = request_id
        response.headers["X-Processing-Time"] = f"{processing_time:.4f}"
        return response

    def _resolve_request_id(self, request: Request) -> str:
        supplied = request.headers.get("x-request-id")
        if supplied and REQUEST_ID_PATTERN.fullmatch(supplied):
            return supplied
        return str(uuid.uuid4())[:8]

    def _get_client_ip(self, request: Request) -> str:
        forwarded_for = request.headers.get("x-forwarded-for")
        if forwarded_for:
            return forwarded_for.split(",")[0].strip()
        return request.client.host if request.client else "unknown"

    def _log_response(
        self,
        request: Request,
        response: Response,
        request_id: str,
        processing_time: float
    ) -> None:
        level = logging.WARNING if processing_time > self.slow_request_threshold else logging.INFO
        logger.log(
            level,
            f"Response [{request_id}]: {response.status_code} - {processing_time:.3f}s",
            extra={
                "request_id": request_id,
                "status_code": response.status_code,
                "processing_time": processing_time,
                "path": request.url.path,
                "method": request.method
            }
        )
