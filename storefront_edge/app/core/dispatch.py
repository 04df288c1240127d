"""
Edge dispatch middleware.

Every inbound request passes through ``EdgeDispatchMiddleware`` before
reaching the origin routes.  Exempt requests (static assets, platform
and API paths, non-GET methods) go straight to ``call_next``.  Other
requests are offered to each handler in order; the first
``Intercepted`` result is returned as the response, and if every
handler passes through the request continues to the origin exactly
once.

Handler exceptions are logged and treated as a pass-through so a bug
in an interceptor can never turn a page view into a 5xx.
"""

import logging
from typing import Dict, Protocol, Sequence

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from .config import Settings
from .crawler_agents import RENDER_FETCH_HEADER
from .edge import EdgeRequest, EdgeResult, Intercepted, diagnostic_headers
from ..services.crawler_service import is_exempt

logger = logging.getLogger(__name__)

INTERCEPTABLE_METHODS = frozenset({"GET", "HEAD"})


def _diagnostic_key(handler_name: str, key: str) -> str:
    """Namespace a diagnostic key under its handler.

    ``crawler`` is the same verdict for every handler and stays shared;
    keys already carrying the handler name are left alone.
    """
    if key == "crawler" or key.startswith(f"{handler_name}-"):
        return key
    return f"{handler_name}-{key}"


class EdgeHandler(Protocol):
    name: str

    async def handle(self, request: EdgeRequest) -> EdgeResult:
        ...


class EdgeDispatchMiddleware(BaseHTTPMiddleware):
    """Run edge handlers ahead of the origin."""

    def __init__(self, app: ASGIApp, handlers: Sequence[EdgeHandler], settings: Settings) -> None:
        super().__init__(app)
        self.handlers = list(handlers)
        self.settings = settings

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        if request.method not in INTERCEPTABLE_METHODS or is_exempt(request.url.path):
            return await call_next(request)

        # The rendering service fetches pages with its own marker header;
        # answering it with a snapshot or preview would loop.
        if request.headers.get(RENDER_FETCH_HEADER):
            return await call_next(request)

        edge_request = EdgeRequest.from_starlette(request)
        diagnostics: Dict[str, str] = {}

        for handler in self.handlers:
            try:
                result = await handler.handle(edge_request)
            except Exception as exc:
                logger.exception("Edge handler %s failed for %s", handler.name, edge_request.path)
                diagnostics[f"{handler.name}-error"] = f"{type(exc).__name__}: {exc}"
                continue

            if isinstance(result, Intercepted):
                return result.response.to_starlette()

            for key, value in result.diagnostics.items():
                diagnostics[_diagnostic_key(handler.name, key)] = value

        response = await call_next(request)
        if self.settings.debug_headers and diagnostics:
            for name, value in diagnostic_headers(diagnostics).items():
                response.headers[name] = value
        return response
