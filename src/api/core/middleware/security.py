from fastapi import Request, Response, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from src.api.core.constants import API_VERSION_HEADER
from src.api.core.messages import MessageCode, get_default_message
from src.utils.logger import get_client_ip, get_logger
from src.utils.settings.app import AppSettings

logger = get_logger(__name__)


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Add security headers to all responses."""

    def __init__(self, app, is_production: bool = False):
        super().__init__(app)
        self.is_production = is_production
        self.api_version = AppSettings().API_VERSION

    async def dispatch(self, request: Request, call_next) -> Response:
        response = await call_next(request)

        headers = {
            "X-Content-Type-Options": "nosniff",
            "X-Frame-Options": "DENY",
            "Referrer-Policy": "strict-origin-when-cross-origin",
            "X-Permitted-Cross-Domain-Policies": "none",
            API_VERSION_HEADER: self.api_version,
        }

        # JSON-only API, nothing to load
        if self.is_production:
            headers["Content-Security-Policy"] = "default-src 'none'; frame-ancestors 'none'"

        if self.is_production and request.url.scheme == "https":
            headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"

        # Don't override anything CORSMiddleware already set
        for key, value in headers.items():
            if key not in response.headers:
                response.headers[key] = value

        return response


class PayloadSizeMiddleware(BaseHTTPMiddleware):
    """Reject requests whose declared body exceeds the configured limit."""

    def __init__(self, app, max_request_size: int | None = None):
        super().__init__(app)
        self.max_request_size = max_request_size or AppSettings().MAX_REQUEST_SIZE

    async def dispatch(self, request: Request, call_next) -> Response:
        content_length = request.headers.get("Content-Length")
        if content_length and content_length.isdigit() and int(content_length) > self.max_request_size:
            logger.warning(
                f"Request too large: {content_length} bytes from {get_client_ip(request)}"
            )
            # Exceptions raised here bypass the app's exception handlers
            return JSONResponse(
                status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
                content={
                    "message_code": MessageCode.PAYLOAD_TOO_LARGE,
                    "message": get_default_message(MessageCode.PAYLOAD_TOO_LARGE),
                    "details": {
                        "description": f"Request size ({content_length} bytes) exceeds maximum allowed ({self.max_request_size} bytes)"
                    },
                },
            )

        return await call_next(request)
