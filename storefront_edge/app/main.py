"""
Main entrypoint for the storefront edge service.

``create_app`` assembles the FastAPI application: it configures
logging, installs the edge dispatch middleware with its handlers and
mounts the API and origin routes.  The module-level ``app`` is what
uvicorn serves::

    uvicorn storefront_edge.app.main:app

Handlers run in a fixed order.  The social preview comes first because
it only claims product detail pages; when it passes through (unknown
product, store not configured) the prerender gateway gets its turn,
and after that the request reaches the origin.
"""

from typing import Optional

from fastapi import FastAPI

from .api.origin import router as origin_router
from .api.v1.router import router as v1_router
from .core.config import Settings, settings as default_settings
from .core.dispatch import EdgeDispatchMiddleware
from .core.logging_config import setup_logging
from .services.prerender_service import PrerenderService
from .services.social_preview_service import SocialPreviewService


def create_app(settings: Optional[Settings] = None, handlers: Optional[list] = None) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    settings : Optional[Settings]
        Settings to use.  Defaults to the process-wide instance read
        from the environment at import time.
    handlers : Optional[list]
        Edge handlers in dispatch order.  Defaults to the social
        preview synthesizer followed by the prerender gateway.  Tests
        pass handlers wired to mock transports.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    settings = settings or default_settings
    setup_logging(settings.log_level, settings.log_file)

    if handlers is None:
        handlers = [SocialPreviewService(settings), PrerenderService(settings)]

    app = FastAPI(title=settings.project_name, version=settings.api_version)
    app.state.settings = settings
    app.add_middleware(EdgeDispatchMiddleware, handlers=handlers, settings=settings)

    app.include_router(v1_router, prefix="/api/v1")
    # The origin catch-all must be registered last.
    app.include_router(origin_router)

    return app


app = create_app()
