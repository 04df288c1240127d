"""
Prerender gateway.

Crawlers cannot run the storefront's client-side application, so for
crawler requests this service asks an external rendering service for
a fully rendered snapshot of the page and returns it in place of the
empty application shell.

The upstream call is made once, bounded by ``render_timeout``.  Any
failure (non-success status, network error, timeout) falls through to
normal handling, so the worst case for a crawler is the same shell it
would have received without this layer.
"""

import asyncio
import logging
from typing import Iterable, Optional

import httpx

from ..core.config import Settings
from ..core.crawler_agents import CRAWLER_AGENTS
from ..core.edge import EdgeRequest, EdgeResponse, EdgeResult, Intercepted, PassThrough
from .crawler_service import is_crawler, is_exempt

logger = logging.getLogger(__name__)

PRERENDER_CACHE_CONTROL = "public, max-age=3600"


class PrerenderService:
    """Serve rendered HTML snapshots to crawlers."""

    name = "prerender"

    def __init__(
        self,
        settings: Settings,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        agents: Iterable[str] = CRAWLER_AGENTS,
    ) -> None:
        self.settings = settings
        self.transport = transport
        self.agents = agents

    def build_render_url(self, request: EdgeRequest) -> str:
        """Return the rendering-service URL for ``request``.

        The renderer needs the full page URL, so the canonical site URL
        (or the request origin when none is configured) is appended to
        the service base together with the original path and query.
        """
        base = self.settings.render_service_url.rstrip("/")
        site = (self.settings.site_url or request.origin).rstrip("/")
        return f"{base}/{site}{request.path_with_query}"

    async def handle(self, request: EdgeRequest) -> EdgeResult:
        path = request.path
        if is_exempt(path):
            return PassThrough.because("exempt-path")

        user_agent = request.user_agent
        if not is_crawler(user_agent, self.agents):
            return PassThrough.because("not-crawler", crawler="false")

        if not self.settings.render_configured:
            logger.warning("Rendering service not configured; serving %s unrendered", path)
            return PassThrough.because("render-not-configured", crawler="true")

        render_url = self.build_render_url(request)
        headers = {
            self.settings.render_token_header: self.settings.render_service_token,
            "User-Agent": user_agent,
        }
        try:
            async with httpx.AsyncClient(
                timeout=self.settings.render_timeout,
                transport=self.transport,
                follow_redirects=False,
            ) as client:
                # httpx timeouts are per phase; wait_for bounds the whole
                # exchange including a slowly trickled body.
                response = await asyncio.wait_for(
                    client.get(render_url, headers=headers),
                    timeout=self.settings.render_timeout,
                )
        except (httpx.TimeoutException, asyncio.TimeoutError) as exc:
            logger.warning("Rendering service timed out after %.1fs for %s: %s",
                           self.settings.render_timeout, render_url, exc)
            return PassThrough.because("render-timeout", crawler="true",
                                       prerender_url=render_url, error=str(exc) or "timeout")
        except httpx.HTTPError as exc:
            logger.error("Rendering service request failed for %s: %s", render_url, exc)
            return PassThrough.because("render-error", crawler="true",
                                       prerender_url=render_url, error=str(exc))

        if not response.is_success:
            logger.warning("Rendering service returned HTTP %s for %s", response.status_code, render_url)
            return PassThrough.because("render-status", crawler="true", prerender_url=render_url,
                                       prerender_status=str(response.status_code))

        logger.info("Prerendered %s for %r", path, user_agent)
        return Intercepted(
            EdgeResponse(
                body=response.text,
                status_code=200,
                headers={
                    "Content-Type": "text/html; charset=utf-8",
                    "Cache-Control": PRERENDER_CACHE_CONTROL,
                    "X-Prerender": "true",
                    "X-Prerender-Engine": self.settings.render_engine,
                },
            )
        )
