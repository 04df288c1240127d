"""
Health endpoint for API v1.

Reports whether the rendering service and the data store are
configured and which crawler list is deployed.  An unconfigured
upstream is not an error (the edge layer just passes through), so the
status stays ``ok`` either way.
"""

from fastapi import APIRouter, Request

from storefront_edge.app.core.crawler_agents import CRAWLER_AGENTS_VERSION
from storefront_edge.app.schemas.health import HealthRead

router = APIRouter()


@router.get("", response_model=HealthRead)
async def get_health(request: Request) -> HealthRead:
    settings = request.app.state.settings
    return HealthRead(
        version=settings.api_version,
        render_configured=settings.render_configured,
        store_configured=settings.store_configured,
        crawler_agents_version=CRAWLER_AGENTS_VERSION,
    )
