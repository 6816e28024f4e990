"""HTTP middleware for per-client request throttling."""

import logging
from collections.abc import Callable

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response
from starlette.types import ASGIApp

from inkwell.core.settings import settings
from inkwell.services.rate_limit import RateLimitService, get_rate_limit_service

logger = logging.getLogger(__name__)

_EXEMPT_PATHS = frozenset({"/health"})


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Reject requests once a client address exceeds its window allowance."""

    def __init__(
        self,
        app: ASGIApp,
        enabled: bool = True,
        service_factory: Callable[[], RateLimitService] = get_rate_limit_service,
    ) -> None:
        super().__init__(app)
        self.enabled = enabled
        self._service_factory = service_factory

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        if not self.enabled or request.url.path in _EXEMPT_PATHS:
            return await call_next(request)

        service = self._service_factory()
        client_ip = request.client.host if request.client else settings.vote_fallback_ip
        decision = service.hit(client_ip)
        limit_headers = {
            "X-RateLimit-Limit": str(service.max_requests),
            "X-RateLimit-Remaining": str(decision.remaining),
        }

        if not decision.allowed:
            logger.warning("Rate limit exceeded for %s", client_ip)
            return JSONResponse(
                status_code=429,
                content={"detail": "Too many requests, please try again later."},
                headers={**limit_headers, "Retry-After": str(decision.reset_after)},
            )

        response = await call_next(request)
        response.headers.update(limit_headers)
        return response
