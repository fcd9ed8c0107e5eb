from collections.abc import Sequence
from logging import Logger

from fastmcp.utilities.logging import get_logger
from starlette.middleware import Middleware
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.middleware.cors import CORSMiddleware
from starlette.requests import Request
from starlette.responses import Response

from devsignal.proxy.envelopes import ErrorEnvelope, RouteNotFoundEnvelope, envelope_response
from devsignal.settings import error_detail

logger: Logger = get_logger(name=__name__)

# Mirrors the defaults of helmet for Express
SECURITY_HEADERS: dict[str, str] = {
    "Content-Security-Policy": (
        "default-src 'self';base-uri 'self';font-src 'self' https: data:;form-action 'self';frame-ancestors 'self';"
        "img-src 'self' data:;object-src 'none';script-src 'self';script-src-attr 'none';style-src 'self' https: 'unsafe-inline';"
        "upgrade-insecure-requests"
    ),
    "Cross-Origin-Opener-Policy": "same-origin",
    "Cross-Origin-Resource-Policy": "same-origin",
    "Origin-Agent-Cluster": "?1",
    "Referrer-Policy": "no-referrer",
    "Strict-Transport-Security": "max-age=31536000; includeSubDomains",
    "X-Content-Type-Options": "nosniff",
    "X-DNS-Prefetch-Control": "off",
    "X-Download-Options": "noopen",
    "X-Frame-Options": "SAMEORIGIN",
    "X-Permitted-Cross-Domain-Policies": "none",
    "X-XSS-Protection": "0",
}


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        response = await call_next(request)

        for header, value in SECURITY_HEADERS.items():
            response.headers.setdefault(header, value)

        if "x-powered-by" in response.headers:
            del response.headers["x-powered-by"]

        return response


class ErrorEnvelopeMiddleware(BaseHTTPMiddleware):
    """Turns any exception that escapes a route into a JSON 500 envelope."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        try:
            return await call_next(request)
        except Exception as e:
            logger.exception(f"Unhandled error serving {request.method} {request.url.path}")

            return envelope_response(ErrorEnvelope(message="Internal server error", error=error_detail(str(e))), status_code=500)


async def route_not_found(request: Request, _exc: Exception) -> Response:
    return envelope_response(RouteNotFoundEnvelope(path=request.url.path), status_code=404)


def proxy_middleware() -> Sequence[Middleware]:
    """The middleware stack for the proxy app, outermost first."""

    return [
        Middleware(SecurityHeadersMiddleware),
        Middleware(CORSMiddleware, allow_origins=["*"], allow_methods=["*"], allow_headers=["*"]),
        Middleware(ErrorEnvelopeMiddleware),
    ]
